"""Shared pytest configuration."""

import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from helpers import FakeSession


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()
