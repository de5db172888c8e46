"""testtoolkit error handling module.

Provides the exception hierarchy raised by the reflection accessors, the
singleton backup helpers and the configuration loader.
"""

from testtoolkit.errors.base import (
    AccessError,
    BackupAlreadyHeldError,
    BackupNotFoundError,
    BackupStateError,
    ClassNotFoundError,
    ConfigValidationError,
    ConstructorNotFoundError,
    ErrorCode,
    ErrorContext,
    MemberNotFoundError,
    ToolkitError,
)

__all__ = [
    # Base exceptions
    "ToolkitError",
    "ErrorCode",
    "ErrorContext",
    # Access errors
    "AccessError",
    "MemberNotFoundError",
    "ConstructorNotFoundError",
    "ClassNotFoundError",
    # Backup errors
    "BackupStateError",
    "BackupAlreadyHeldError",
    "BackupNotFoundError",
    # Configuration errors
    "ConfigValidationError",
]
