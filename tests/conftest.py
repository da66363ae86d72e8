"""Shared fixtures for HabitPilot tests."""

from collections.abc import Iterator
from zoneinfo import ZoneInfo

import pytest

from habitpilot.utils import dt_utils


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Iterator[None]:
    """Run every test with UTC as the local timezone and restore it afterwards."""
    dt_utils.set_default_timezone(ZoneInfo("UTC"))
    yield
    dt_utils.set_default_timezone(ZoneInfo("UTC"))
