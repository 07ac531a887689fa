"""Fatal errors for the batch top-up run.

Per-record problems never raise; only structural failures (file I/O, JSON
parsing, writing the report) end the run.
"""

from pathlib import Path
from typing import Optional, Union


class TopupError(Exception):
    """Base exception for failures that abort a top-up run."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.message = message
        self.path = str(path) if path is not None else None
        super().__init__(message)


class DataFileError(TopupError):
    """An input file is missing or unreadable."""


class DataParseError(TopupError):
    """An input file is not a JSON list of records."""


class ReportWriteError(TopupError):
    """The report could not be written to its destination."""
