# File: tests/conftest.py
# Shared fixtures for the prisma-casemap test suite.

import logging
from pathlib import Path
from typing import Callable, Generator

import pytest

from prisma_casemap.frontend import PrismaFrontend


# --- Constants ---
# Assumes conftest.py is in tests/ subdirectory relative to project root
PROJECT_ROOT = Path(__file__).parent.parent
TEST_SCHEMAS_DIR = PROJECT_ROOT / "tests" / "schemas"


def read_schema(name: str) -> str:
    """Read a schema file from tests/schemas."""
    return (TEST_SCHEMAS_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def schema_text() -> Callable[[str], str]:
    """Returns a loader for the schema files under tests/schemas."""
    return read_schema


@pytest.fixture
def frontend() -> PrismaFrontend:
    return PrismaFrontend()


@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None, None, None]:
    """The CLI reconfigures the root logger; put it back after each test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
