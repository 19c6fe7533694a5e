"""Shared fixtures for tman tests."""

import pytest

from fakes import FakeProvider, make_rows


@pytest.fixture
def fake_provider() -> FakeProvider:
    """A provider with a small healthy process table."""
    return FakeProvider(processes=make_rows(5))
