"""Back up, modify and restore the singleton registry in tests.

A test that replaces process-wide singletons must put the originals back
afterwards, or the change leaks into every later test. :class:`SingletonBackup`
enforces the discipline: the registry can only be modified while a snapshot
is held, and a second snapshot cannot silently overwrite the first.

Scoped use restores the registry even when the test fails:

    >>> with SingletonBackup() as backup:
    ...     backup.update({Settings: fake_settings})
    ...     run_code_under_test()
    >>> # registry is back to its original contents

The registry is located through configuration (``singleton_owner`` and
``singleton_attribute``), so the helpers also work for registries kept on
classes other than :class:`testtoolkit.singleton.Singleton`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import TracebackType
from typing import Any

from testtoolkit.access import (
    ClassRef,
    get_non_public_static_property,
    set_non_public_static_property,
)
from testtoolkit.errors import BackupAlreadyHeldError, BackupNotFoundError, ErrorContext

logger = logging.getLogger(__name__)


class SingletonBackup:
    """A handle on a singleton registry with a single backup slot.

    Each handle owns its own slot. The registry itself is shared by the whole
    process, so two handles on the same registry must not be used by tests
    running concurrently in one process.

    Attributes:
        owner: The class (or dotted path to it) holding the registry.
        attribute: Name of the registry attribute on ``owner``.
    """

    def __init__(self, owner: ClassRef | None = None, attribute: str | None = None) -> None:
        if owner is None or attribute is None:
            from testtoolkit.config import get_config

            config = get_config()
            owner = owner if owner is not None else config.singleton_owner
            attribute = attribute if attribute is not None else config.singleton_attribute

        self.owner = owner
        self.attribute = attribute
        self._backup: dict[Any, Any] | None = None
        self._lock = threading.Lock()

    @property
    def is_held(self) -> bool:
        """Whether a snapshot is currently held."""
        return self._backup is not None

    def _read_registry(self) -> dict[Any, Any]:
        return dict(get_non_public_static_property(self.owner, self.attribute))

    def _write_registry(self, singletons: Mapping[Any, Any]) -> None:
        set_non_public_static_property(self.owner, self.attribute, dict(singletons))

    def backup(self) -> dict[Any, Any]:
        """Capture the current registry contents.

        Returns:
            A copy of the registry at the time of the call.

        Raises:
            BackupAlreadyHeldError: If a snapshot is already held.
        """
        with self._lock:
            if self._backup is not None:
                raise BackupAlreadyHeldError(context=self._context())
            self._backup = self._read_registry()
            logger.debug(f"Backed up {len(self._backup)} singleton(s) from {self._describe()}")
            return dict(self._backup)

    def restore(self) -> None:
        """Put the snapshot back into the registry and release it.

        Raises:
            BackupNotFoundError: If no snapshot is held.
        """
        with self._lock:
            if self._backup is None:
                raise BackupNotFoundError(context=self._context())
            self._write_registry(self._backup)
            logger.debug(f"Restored {len(self._backup)} singleton(s) to {self._describe()}")
            self._backup = None

    def update(self, singletons: Mapping[Any, Any]) -> None:
        """Replace the registry contents while keeping the snapshot.

        Args:
            singletons: The new registry contents. Copied, not aliased.

        Raises:
            BackupNotFoundError: If no snapshot is held.
        """
        with self._lock:
            if self._backup is None:
                raise BackupNotFoundError(context=self._context())
            self._write_registry(singletons)
            logger.debug(f"Updated {self._describe()} with {len(singletons)} singleton(s)")

    def _owner_name(self) -> str:
        return self.owner if isinstance(self.owner, str) else self.owner.__qualname__

    def _describe(self) -> str:
        return f"{self._owner_name()}.{self.attribute}"

    def _context(self) -> ErrorContext:
        return ErrorContext(target=self._owner_name(), member=self.attribute)

    def __enter__(self) -> SingletonBackup:
        self.backup()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # the block may already have restored manually
        if self.is_held:
            self.restore()

    def __repr__(self) -> str:
        state = "held" if self.is_held else "empty"
        return f"SingletonBackup({self._describe()}, {state})"


_default_backup: SingletonBackup | None = None


def default_backup() -> SingletonBackup:
    """Return the process-wide handle used by the module-level functions.

    While no snapshot is held, the handle is rebuilt whenever the configured
    registry location has changed, so ``set_config()`` and ``reset_config()``
    take effect. A held handle is kept until it is restored.
    """
    global _default_backup
    if _default_backup is not None and _default_backup.is_held:
        return _default_backup

    from testtoolkit.config import get_config

    config = get_config()
    location = (config.singleton_owner, config.singleton_attribute)
    if _default_backup is None or (_default_backup.owner, _default_backup.attribute) != location:
        _default_backup = SingletonBackup(*location)
    return _default_backup


def backup_singletons() -> dict[Any, Any]:
    """Back up the default registry. See :meth:`SingletonBackup.backup`."""
    return default_backup().backup()


def restore_singletons() -> None:
    """Restore the default registry. See :meth:`SingletonBackup.restore`."""
    default_backup().restore()


def update_singletons(singletons: Mapping[Any, Any]) -> None:
    """Replace the default registry contents. See :meth:`SingletonBackup.update`."""
    default_backup().update(singletons)


@contextmanager
def singleton_scope(
    owner: ClassRef | None = None,
    attribute: str | None = None,
) -> Iterator[SingletonBackup]:
    """Back up a registry for the duration of a ``with`` block.

    The registry is restored on exit, including when the block raises.

    Example:
        >>> with singleton_scope() as scope:
        ...     scope.update({})
        ...     assert not Settings.has_instance()
    """
    handle = SingletonBackup(owner, attribute)
    handle.backup()
    try:
        yield handle
    finally:
        if handle.is_held:
            handle.restore()
