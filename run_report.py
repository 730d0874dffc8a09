"""Convenience shim to run the org report without installing the package."""

from __future__ import annotations

import sys

from ghorg2csv.pipeline.runner import main


if __name__ == "__main__":
    sys.exit(main())
