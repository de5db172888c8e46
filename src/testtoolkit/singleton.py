"""Singleton base class backed by a process-wide registry.

Every subclass of :class:`Singleton` has at most one instance, kept in the
class-level mapping ``Singleton._instances`` (type -> instance). Production
code reaches the instance through ``instance()``; calling the class directly
is refused, which keeps the constructor effectively non-public.

Tests that need to swap or reset singletons should go through
:mod:`testtoolkit.backup`, which snapshots and restores the registry.

Example:
    >>> class Settings(Singleton):
    ...     def __init__(self):
    ...         self.debug = False
    ...
    >>> Settings.instance() is Settings.instance()
    True
    >>> Settings()
    Traceback (most recent call last):
    ...
    TypeError: Settings is a singleton; use Settings.instance()
"""

from __future__ import annotations

import logging
import threading
from typing import Any, ClassVar, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="Singleton")


class SingletonMeta(type):
    """Metaclass that blocks direct instantiation of singleton classes."""

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        raise TypeError(f"{cls.__name__} is a singleton; use {cls.__name__}.instance()")


class Singleton(metaclass=SingletonMeta):
    """Base class for singletons.

    Attributes:
        _instances: Registry mapping each concrete subclass to its instance.
            Shared by all subclasses.
    """

    _instances: ClassVar[dict[type, Any]] = {}
    _lock: ClassVar[threading.RLock] = threading.RLock()

    @classmethod
    def instance(cls: type[S]) -> S:
        """Return the instance of this class, creating it on first use."""
        if cls is Singleton:
            raise TypeError("Singleton cannot be instantiated directly; subclass it")
        with Singleton._lock:
            existing = Singleton._instances.get(cls)
            if existing is None:
                existing = type.__call__(cls)
                Singleton._instances[cls] = existing
                logger.debug(f"Created singleton instance of {cls.__qualname__}")
            return existing

    @classmethod
    def has_instance(cls) -> bool:
        return cls in Singleton._instances

    @classmethod
    def replace_instance(cls: type[S], instance: S | None) -> S | None:
        """Swap the registered instance for this class.

        Args:
            instance: The new instance, or ``None`` to remove the entry so
                the next ``instance()`` call creates a fresh one.

        Returns:
            The previously registered instance, if any.

        Raises:
            TypeError: If ``instance`` is not an instance of this class.
        """
        if instance is not None and not isinstance(instance, cls):
            raise TypeError(
                f"Replacement must be an instance of {cls.__qualname__}, "
                f"got {type(instance).__qualname__}"
            )
        with Singleton._lock:
            previous = Singleton._instances.pop(cls, None)
            if instance is not None:
                Singleton._instances[cls] = instance
        return previous

    @staticmethod
    def clear_instances() -> None:
        """Remove every registered instance."""
        with Singleton._lock:
            Singleton._instances.clear()
