"""Reading the companies/users JSON files into raw record lists."""

import json
from pathlib import Path
from typing import Any, Union

from libs.common.logging import get_logger
from services.topup_service.exceptions import DataFileError, DataParseError

logger = get_logger(__name__)


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not part of JSON proper
    raise ValueError(f"Invalid JSON constant: {name}")


def read_json_file(path: Union[str, Path]) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DataFileError(f"Cannot read data file {path}: {e}", path=path) from e


def parse_json_data(json_data: str, source: Union[str, Path] = "<string>") -> list:
    """Parse a JSON document whose top level is a list of records."""
    try:
        data = json.loads(json_data, parse_constant=_reject_constant)
    except ValueError as e:
        raise DataParseError(f"Invalid JSON in {source}: {e}", path=source) from e

    if not isinstance(data, list):
        raise DataParseError(
            f"Expected a list of records in {source}, got {type(data).__name__}",
            path=source,
        )
    return data


def load_records(path: Union[str, Path]) -> list:
    records = parse_json_data(read_json_file(path), source=path)
    logger.debug("Loaded %d raw records from %s", len(records), path)
    return records
