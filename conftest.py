"""Shared pytest fixtures for the Azalea test suite."""

import logging
from typing import List

import pytest

from azalea.runtime import Interpreter


@pytest.fixture
def printed() -> List[str]:
    """Lines the interpreter under test has printed."""
    return []


@pytest.fixture
def interpreter(printed):
    """An interpreter with no capability modules whose output goes to ``printed``."""
    return Interpreter(print_fn=printed.append)


@pytest.fixture
def run(interpreter):
    """Execute source text on the shared interpreter and return the result."""
    return interpreter.execute


@pytest.fixture(autouse=True)
def restore_azalea_logger():
    """Undo handlers and levels that ``configure_logging`` installs."""
    logger = logging.getLogger("azalea")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove ``AZALEA_*`` overrides inherited from the calling shell."""
    for name in ("AZALEA_LOG_LEVEL", "AZALEA_MAX_CALL_DEPTH"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
