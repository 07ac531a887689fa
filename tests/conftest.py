import json
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def write_json(tmp_path) -> Callable[[str, object], Path]:
    """
    Write ``data`` as JSON under tmp_path and return the file path.
    """

    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def data_files(write_json, tmp_path):
    """
    Return a helper that writes companies/users files and returns
    ``(companies_path, users_path, output_path)``.
    """

    def _make(companies: list, users: list) -> tuple[Path, Path, Path]:
        return (
            write_json("companies.json", companies),
            write_json("users.json", users),
            tmp_path / "output.txt",
        )

    return _make
