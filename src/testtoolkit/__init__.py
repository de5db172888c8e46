"""testtoolkit - helpers for writing unit tests.

testtoolkit bundles three independent conveniences for white-box and
data-driven tests:

Key Features:
    - Reflection access: read and write non-public (underscore and
      name-mangled) attributes, and call constructors that normal
      instantiation would not reach
    - Test data: Cartesian products of value axes for parametrized tests,
      plus canned edge-case value sets
    - Singleton lifecycle: back up, modify and restore the process-wide
      singleton registry, with scoped helpers and a pytest fixture

Example:
    >>> import pytest
    >>> from testtoolkit import cartesian, non_integer_values
    >>>
    >>> @pytest.mark.parametrize("value, strict", cartesian(non_integer_values(), [True, False]))
    ... def test_parse_count_rejects(value, strict):
    ...     with pytest.raises(TypeError):
    ...         parse_count(value, strict=strict)
"""

__version__ = "0.1.0"

from testtoolkit.access import (
    call_non_public_constructor,
    get_non_public_mock_property,
    get_non_public_property,
    get_non_public_static_property,
    resolve_class,
    set_non_public_mock_property,
    set_non_public_property,
    set_non_public_static_property,
)
from testtoolkit.backup import (
    SingletonBackup,
    backup_singletons,
    restore_singletons,
    singleton_scope,
    update_singletons,
)
from testtoolkit.config import ToolkitConfig, get_config, load_config
from testtoolkit.data import (
    boolean_like_values,
    boolean_values,
    cartesian,
    non_boolean_values,
    non_dict_values,
    non_float_values,
    non_integer_values,
    non_list_values,
    non_string_values,
    product_size,
)
from testtoolkit.errors import (
    BackupAlreadyHeldError,
    BackupNotFoundError,
    BackupStateError,
    ClassNotFoundError,
    ConfigValidationError,
    ConstructorNotFoundError,
    MemberNotFoundError,
    ToolkitError,
)
from testtoolkit.singleton import Singleton

__all__ = [
    "__version__",
    # Reflection access
    "get_non_public_property",
    "set_non_public_property",
    "get_non_public_static_property",
    "set_non_public_static_property",
    "get_non_public_mock_property",
    "set_non_public_mock_property",
    "call_non_public_constructor",
    "resolve_class",
    # Test data
    "cartesian",
    "product_size",
    "non_string_values",
    "non_integer_values",
    "non_float_values",
    "non_boolean_values",
    "non_list_values",
    "non_dict_values",
    "boolean_values",
    "boolean_like_values",
    # Singletons
    "Singleton",
    "SingletonBackup",
    "backup_singletons",
    "restore_singletons",
    "update_singletons",
    "singleton_scope",
    # Configuration
    "ToolkitConfig",
    "load_config",
    "get_config",
    # Errors
    "ToolkitError",
    "MemberNotFoundError",
    "ConstructorNotFoundError",
    "ClassNotFoundError",
    "BackupStateError",
    "BackupAlreadyHeldError",
    "BackupNotFoundError",
    "ConfigValidationError",
]
