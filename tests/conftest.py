"""Global fixtures and utilities for the autospecimen test suite.

This module provides the specimen builders and parameter helpers shared by
the test modules.
"""

from typing import Any

import pytest

from autospecimen.config import FixtureConfig, set_active_config
from autospecimen.domain.models import ParameterRequest
from autospecimen.fixture import Fixture


# ================================================================================
# Specimen Builder Fixtures
# ================================================================================


@pytest.fixture
def fixture_config():
    """Return a default builder configuration."""
    return FixtureConfig()


@pytest.fixture
def specimen_fixture(fixture_config):
    """Return a fresh Fixture independent of the active configuration."""
    return Fixture(fixture_config)


class RecordingBuilder:
    """Specimen builder that records every request and answers from a counter."""

    def __init__(self, start: int = 100):
        self.requests: list[tuple[Any, str | None]] = []
        self._next = start

    def create(self, request_type: Any, name: str | None = None) -> Any:
        self.requests.append((request_type, name))
        value = self._next
        self._next += 1
        return value


@pytest.fixture
def recording_builder():
    """Return a builder that records requests."""
    return RecordingBuilder()


# ================================================================================
# Parameter Helpers
# ================================================================================


def make_parameters(*annotations: Any) -> list[ParameterRequest]:
    """Build parameter requests named p0, p1, ... for ``annotations``."""
    return [
        ParameterRequest(name=f"p{index}", annotation=annotation, position=index)
        for index, annotation in enumerate(annotations)
    ]


@pytest.fixture
def int_parameters():
    """Three int parameters, as in ``def test(x: int, y: int, z: int)``."""
    return make_parameters(int, int, int)


@pytest.fixture(autouse=True)
def _reset_active_config():
    """Keep tests from leaking active configuration into each other."""
    yield
    set_active_config(None)
