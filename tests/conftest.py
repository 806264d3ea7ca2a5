"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from rechtebank.config.settings import Settings, get_settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="http://judge.test",
        max_attempts=3,
        retry_delay=1.0,
        request_timeout=30.0,
    )


@pytest.fixture
def recorded_sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(recorded_sleeps: list[float]):
    async def _sleep(delay: float) -> None:
        recorded_sleeps.append(delay)

    return _sleep


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
