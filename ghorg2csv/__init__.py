"""Export GitHub organization repositories and their admins to CSV."""

__version__ = "0.2.0"

from .pipeline.runner import generate_report, main

__all__ = ["__version__", "generate_report", "main"]
