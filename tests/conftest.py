"""Pytest fixtures for testtoolkit tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

import testtoolkit.backup as backup_module
from testtoolkit.backup import SingletonBackup
from testtoolkit.config import reset_config
from testtoolkit.singleton import Singleton


class Settings(Singleton):
    """Singleton used across the registry tests."""

    def __init__(self) -> None:
        self.debug = False


class Cache(Singleton):
    """A second singleton, so registries hold more than one entry."""

    def __init__(self) -> None:
        self.entries: dict[str, object] = {}


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test from default configuration."""
    for key in (
        "TESTTOOLKIT_LOG_LEVEL",
        "TESTTOOLKIT_PRODUCT_WARNING_THRESHOLD",
        "TESTTOOLKIT_SINGLETON_OWNER",
        "TESTTOOLKIT_SINGLETON_ATTRIBUTE",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def isolated_registry() -> Iterator[None]:
    """Keep the singleton registry and the default backup handle per-test."""
    guard = SingletonBackup(Singleton, "_instances")
    guard.backup()
    Singleton.clear_instances()
    yield
    default = backup_module._default_backup
    if default is not None and default.is_held:
        default.restore()
    backup_module._default_backup = None
    guard.restore()


@pytest.fixture
def settings_cls() -> type[Settings]:
    return Settings


@pytest.fixture
def cache_cls() -> type[Cache]:
    return Cache
