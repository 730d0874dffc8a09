"""Write report records to CSV without leaving partial files behind."""

from __future__ import annotations

import csv
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable, Union

from ..errors import OutputError
from .rows import HEADER, ReportRecord


def ensure_dir(path: Union[str, Path]) -> None:
    """Create output directories as-needed without raising for existing folders."""
    os.makedirs(path, exist_ok=True)


def _report_mode(target: Path) -> int:
    """Mode for the finished report: keep an existing file's, else honour the umask."""
    if target.exists():
        return stat.S_IMODE(target.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_report_csv(path: Union[str, Path], records: Iterable[ReportRecord]) -> int:
    """Write the header plus one row per record; return the number of rows.

    Rows go to a temporary file next to ``path`` which is renamed into place
    once complete.
    """
    target = Path(path)
    directory = target.parent
    count = 0
    tmp_name = None
    try:
        ensure_dir(directory)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            out = csv.writer(handle)
            out.writerow(HEADER)
            for record in records:
                out.writerow(record.as_row())
                count += 1
        os.chmod(tmp_name, _report_mode(target))
        os.replace(tmp_name, target)
    except OSError as exc:
        if tmp_name and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise OutputError(f"Problem writing CSV file {target}: {exc}") from exc
    return count


__all__ = ["ensure_dir", "write_report_csv"]
