"""Shared fixtures for hoardview tests."""

from pathlib import Path

import pytest
from fakes import Clock, FakeSession, FakeSource

from hoardview.config import CacheConfig, EngineConfig, ViewerSettings
from hoardview.core import FontOrchestrator
from hoardview.io import FontCache, JsonStore


@pytest.fixture
def settings(tmp_path: Path) -> ViewerSettings:
    """Settings with cache and staging under the test's tmp_path."""
    return ViewerSettings(
        cache=CacheConfig(cache_dir=tmp_path / "cache"),
        engine=EngineConfig(staging_dir=tmp_path / "stage", optional_modules=[]),
    )


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def cache(settings: ViewerSettings) -> FontCache:
    return FontCache(JsonStore(settings.cache.store_path))


@pytest.fixture
def orchestrator(source, session, cache, settings, clock) -> FontOrchestrator:
    return FontOrchestrator(source, session, cache, settings, clock=clock)
