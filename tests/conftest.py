"""Shared test fixtures for mrusim tests."""

from __future__ import annotations

import pytest

from mrusim.config import Settings
from mrusim.projection import Projection, project


@pytest.fixture
def sprint_projection() -> Projection:
    """100 m in 9.58 s."""
    return project(100.0, 9.58, 100.0 / 9.58)


@pytest.fixture
def offline_settings() -> Settings:
    """Settings without an API key and without reading ``.env``."""
    return Settings(_env_file=None, anthropic_api_key="")  # type: ignore[call-arg]


class FailingExplainer:
    """Explainer that raises *error* on every request."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    async def explain(self, velocity: float, distance: float, time: float) -> str:
        raise self.error
