"""Tests for logging setup."""

import logging

import pytest

from utils import PROJECT_LOGGERS, resolve_log_level, setup_logging


@pytest.fixture(autouse=True)
def restore_levels():
    """Put logger levels back after each test."""
    names = [None, *PROJECT_LOGGERS]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_default_level_applies_to_project_loggers():
    """Project loggers default to INFO while the root stays at WARNING."""
    setup_logging()
    assert logging.getLogger("ingestion").level == logging.INFO
    assert logging.getLogger("inference").getEffectiveLevel() == logging.INFO
    assert logging.getLogger().level == logging.WARNING


def test_verbose_enables_debug_for_module_loggers():
    """Module loggers under a project package inherit DEBUG."""
    setup_logging(verbose=True)
    assert logging.getLogger("ingestion.importer").isEnabledFor(logging.DEBUG)
    assert not logging.getLogger("pandas").isEnabledFor(logging.INFO)


def test_explicit_level_overrides_verbose():
    """A named level wins over the verbose flag."""
    setup_logging(verbose=True, level="warning")
    assert logging.getLogger("cli").level == logging.WARNING


def test_resolve_log_level():
    """Names are case-insensitive and unknown names are rejected."""
    assert resolve_log_level("debug") == logging.DEBUG
    assert resolve_log_level(logging.ERROR) == logging.ERROR
    assert resolve_log_level(None) == logging.INFO
    with pytest.raises(ValueError, match="Unknown log level"):
        resolve_log_level("loud")
