"""Access to non-public attributes and constructors for white-box tests.

Python does not enforce visibility, but it does have conventions: a leading
underscore marks an attribute as internal, and a leading double underscore
triggers name mangling (``__balance`` on ``Account`` is stored as
``_Account__balance``). The helpers here accept names exactly as they are
written in the class body and resolve the mangled form along the MRO.

Unlike plain ``getattr``/``setattr``, every helper insists that the member
already exists. A typo in a test therefore fails loudly with
:class:`~testtoolkit.errors.MemberNotFoundError` instead of silently
creating a new attribute.

Example:
    >>> class Account:
    ...     def __init__(self):
    ...         self.__balance = 0
    ...
    >>> account = Account()
    >>> set_non_public_property(account, "__balance", 100)
    >>> get_non_public_property(account, "__balance")
    100
"""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from testtoolkit.errors import ClassNotFoundError, ConstructorNotFoundError, MemberNotFoundError

logger = logging.getLogger(__name__)

ClassRef = type | str


def _qualname(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _candidate_names(cls: type, name: str) -> list[str]:
    """Names under which ``name`` may be stored for ``cls``, in lookup order."""
    if not name.startswith("__") or name.endswith("__"):
        return [name]

    candidates: list[str] = []
    for klass in cls.__mro__:
        if klass is object:
            continue
        stripped = klass.__name__.lstrip("_")
        candidate = f"_{stripped}{name}" if stripped else name
        if candidate not in candidates:
            candidates.append(candidate)
    return candidates


def _declares(cls: type, name: str) -> bool:
    """Whether any class in the MRO defines or annotates ``name``."""
    for klass in cls.__mro__:
        if name in vars(klass):
            return True
        if name in inspect.get_annotations(klass):
            return True
    return False


def _has_on_instance(obj: Any, name: str) -> bool:
    try:
        inspect.getattr_static(obj, name)
    except AttributeError:
        return False
    return True


def _find_instance_member(obj: Any, name: str, owner: type) -> str:
    candidates = _candidate_names(owner, name)
    for candidate in candidates:
        if _has_on_instance(obj, candidate) or _declares(owner, candidate):
            return candidate
    raise MemberNotFoundError(
        message=f"Property '{name}' does not exist on {_qualname(owner)}",
        target=_qualname(owner),
        member=name,
        candidates=candidates,
    )


def _find_class_member(cls: type, name: str) -> tuple[type, str]:
    candidates = _candidate_names(cls, name)
    for candidate in candidates:
        for klass in cls.__mro__:
            if klass is not object and candidate in vars(klass):
                return klass, candidate
    raise MemberNotFoundError(
        message=f"Static property '{name}' does not exist on {_qualname(cls)}",
        target=_qualname(cls),
        member=name,
        candidates=candidates,
    )


def resolve_class(class_ref: ClassRef) -> type:
    """Resolve a class object or a dotted path to a class.

    Paths may be written ``"package.module.Class"`` or
    ``"package.module:Outer.Inner"``.

    Raises:
        ClassNotFoundError: If the path cannot be imported or does not name
            a class.
    """
    if isinstance(class_ref, type):
        return class_ref

    path = class_ref
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
        splits = [(module_name, attr_path.split("."))]
    else:
        parts = path.split(".")
        splits = [(".".join(parts[:i]), parts[i:]) for i in range(len(parts) - 1, 0, -1)]

    result: Any = None
    last_error: Exception | None = None
    for module_name, attrs in splits:
        try:
            result = importlib.import_module(module_name)
            for attr in attrs:
                result = getattr(result, attr)
            break
        except (ImportError, AttributeError, ValueError, TypeError) as e:
            last_error = e
            result = None

    if not isinstance(result, type):
        raise ClassNotFoundError(
            message=f"Class '{path}' could not be resolved",
            target=path,
            cause=last_error,
        )
    return result


def get_non_public_property(obj: Any, name: str) -> Any:
    """Read a non-public attribute from an instance.

    Args:
        obj: The instance to read from.
        name: Attribute name as written in the class body.

    Returns:
        The attribute value.

    Raises:
        MemberNotFoundError: If the attribute does not exist or is not set.
    """
    return _read(obj, name, type(obj))


def set_non_public_property(obj: Any, name: str, value: Any) -> None:
    """Write a non-public attribute on an instance.

    The write bypasses any ``__setattr__`` override, so it also works on
    frozen dataclasses and other immutable-by-convention objects.

    Raises:
        MemberNotFoundError: If the attribute does not exist or is read-only.
    """
    _write(obj, name, value, type(obj))


def get_non_public_mock_property(class_ref: ClassRef, mock: Any, name: str) -> Any:
    """Read a non-public attribute from a mock standing in for ``class_ref``.

    The name is resolved against the original class, so ``"__secret"`` maps
    to ``_Original__secret`` even though the mock's own type has a different
    name.
    """
    return _read(mock, name, resolve_class(class_ref))


def set_non_public_mock_property(class_ref: ClassRef, mock: Any, name: str, value: Any) -> None:
    """Write a non-public attribute on a mock standing in for ``class_ref``.

    The attribute must be declared by the original class (class attribute,
    slot or annotation) or already be present on the mock.
    """
    _write(mock, name, value, resolve_class(class_ref))


def _read(obj: Any, name: str, owner: type) -> Any:
    member = _find_instance_member(obj, name, owner)
    try:
        return getattr(obj, member)
    except AttributeError as e:
        raise MemberNotFoundError(
            message=f"Property '{name}' on {_qualname(owner)} is not accessible: {e}",
            target=_qualname(owner),
            member=name,
            cause=e,
        ) from e


def _write(obj: Any, name: str, value: Any, owner: type) -> None:
    member = _find_instance_member(obj, name, owner)
    try:
        object.__setattr__(obj, member, value)
    except (AttributeError, TypeError) as e:
        raise MemberNotFoundError(
            message=f"Property '{name}' on {_qualname(owner)} cannot be written: {e}",
            target=_qualname(owner),
            member=name,
            cause=e,
        ) from e
    logger.debug(f"Set {_qualname(owner)}.{member}")


def get_non_public_static_property(class_ref: ClassRef, name: str) -> Any:
    """Read a non-public class attribute.

    The raw stored value is returned: descriptors such as ``classmethod`` or
    ``property`` are not bound.

    Args:
        class_ref: The class, or a dotted path to it.
        name: Attribute name as written in the class body.

    Raises:
        ClassNotFoundError: If ``class_ref`` is a path that cannot be resolved.
        MemberNotFoundError: If no class in the MRO defines the attribute.
    """
    cls = resolve_class(class_ref)
    klass, member = _find_class_member(cls, name)
    return vars(klass)[member]


def set_non_public_static_property(class_ref: ClassRef, name: str, value: Any) -> None:
    """Write a non-public class attribute.

    The value is stored on the class in the MRO that defines the attribute,
    so setting an attribute inherited from a base class changes it for every
    subclass that does not override it.

    Raises:
        ClassNotFoundError: If ``class_ref`` is a path that cannot be resolved.
        MemberNotFoundError: If no class in the MRO defines the attribute.
    """
    cls = resolve_class(class_ref)
    klass, member = _find_class_member(cls, name)
    try:
        type.__setattr__(klass, member, value)
    except (AttributeError, TypeError) as e:
        raise MemberNotFoundError(
            message=f"Static property '{name}' on {_qualname(klass)} cannot be written: {e}",
            target=_qualname(klass),
            member=name,
            cause=e,
        ) from e
    logger.debug(f"Set static {_qualname(klass)}.{member}")


def _allocate(cls: type) -> Any:
    """Create an instance of ``cls`` without running Python-level code.

    Metaclass ``__call__``, any ``__new__`` written in Python, and
    ``__init__`` are all skipped. The first natively implemented ``__new__``
    in the MRO does the allocation, which keeps builtin bases such as
    ``dict`` or ``Exception`` valid.
    """
    for klass in cls.__mro__:
        new = vars(klass).get("__new__")
        if new is None or isinstance(new, staticmethod):
            continue
        return new(cls)
    return object.__new__(cls)


def _find_initializer(cls: type) -> Any:
    for klass in cls.__mro__:
        if "__init__" in vars(klass):
            if klass is object:
                break
            return vars(klass)["__init__"]
    raise ConstructorNotFoundError(
        message=f"{_qualname(cls)} does not define a constructor",
        target=_qualname(cls),
        member="__init__",
    )


def call_non_public_constructor(
    obj_or_class: Any,
    args: Sequence[Any] | None = None,
    kwargs: Mapping[str, Any] | None = None,
) -> Any:
    """Invoke a constructor that normal instantiation would not reach.

    If ``obj_or_class`` is an instance, its class's ``__init__`` is run on it
    again. If it is a class (or a dotted path to one), a new instance is
    allocated without running ``__init__``, ``__new__`` or the metaclass,
    and then ``__init__`` is run on it. Either way the object is returned.

    This is how tests build instances of classes that forbid direct
    instantiation, such as :class:`~testtoolkit.singleton.Singleton`
    subclasses.

    Args:
        obj_or_class: An instance, a class, or a dotted class path.
        args: Positional arguments for ``__init__``.
        kwargs: Keyword arguments for ``__init__``.

    Returns:
        The initialized object.

    Raises:
        ClassNotFoundError: If a dotted path cannot be resolved.
        ConstructorNotFoundError: If the class does not define ``__init__``.
    """
    if isinstance(obj_or_class, (type, str)):
        cls = resolve_class(obj_or_class)
        init = _find_initializer(cls)
        obj = _allocate(cls)
    else:
        obj = obj_or_class
        cls = type(obj)
        init = _find_initializer(cls)

    init(obj, *(args or ()), **(kwargs or {}))
    logger.debug(f"Called constructor of {_qualname(cls)}")
    return obj
