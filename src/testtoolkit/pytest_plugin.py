"""pytest fixtures for testtoolkit.

Registered automatically through the ``pytest11`` entry point when the
package is installed. Projects that vendor the package can enable it with
``pytest_plugins = ["testtoolkit.pytest_plugin"]`` in their conftest.

Example:
    def test_uses_fake_settings(singleton_backup):
        singleton_backup.update({Settings: fake_settings})
        assert Settings.instance() is fake_settings
        # the original registry is restored after the test
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from testtoolkit.backup import SingletonBackup
from testtoolkit.data import cartesian


@pytest.fixture
def singleton_backup() -> Iterator[SingletonBackup]:
    """A held backup of the configured singleton registry.

    The registry is restored at teardown whether the test passed or failed.
    """
    with SingletonBackup() as backup:
        yield backup


@pytest.fixture
def cartesian_axes():
    """The :func:`testtoolkit.data.cartesian` function, for tests that build
    case matrices at runtime instead of through ``parametrize``."""
    return cartesian
