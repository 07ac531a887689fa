import logging

import pytest

from libs.common.config import get_settings

SETTINGS_ENV_VARS = (
    "TOKEN_TOPUP_ENVIRONMENT",
    "TOKEN_TOPUP_LOG_LEVEL",
    "TOKEN_TOPUP_COMPANIES_FILE",
    "TOKEN_TOPUP_USERS_FILE",
    "TOKEN_TOPUP_OUTPUT_FILE",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """
    Start every test from default settings.
    Clear cached settings so env changes made by a test are picked up.
    """
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """
    Drop the console handler configure_logging() installs and reset the level.
    pytest's own capture handlers are subclasses and are left alone.
    """
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if type(handler) is logging.StreamHandler:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
