"""Custom exception hierarchy for testtoolkit.

Every testtoolkit error inherits from ToolkitError and carries:
- error_code: A unique ErrorCode enum for categorization
- context: ErrorContext naming the target and member involved
- suggestions: List of actionable steps to resolve the issue

Errors that correspond to a builtin exception also inherit from it, so
``MemberNotFoundError`` is an ``AttributeError`` and ``BackupStateError`` is
a ``RuntimeError``. Code that already catches the builtin keeps working.

Example:
    try:
        get_non_public_property(account, "_balance")
    except MemberNotFoundError as e:
        print(f"Error: {e}")
        print(f"Suggestions: {e.suggestions}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for testtoolkit.

    Error codes are organized by category:
    - E1xx: Reflection access errors
    - E2xx: Singleton backup state errors
    - E3xx: Configuration errors
    - E9xx: Unknown/internal errors
    """

    # Access errors (E1xx)
    ACCESS_FAILED = "E100"
    MEMBER_NOT_FOUND = "E101"
    CONSTRUCTOR_NOT_FOUND = "E102"
    CLASS_NOT_FOUND = "E103"

    # Backup state errors (E2xx)
    BACKUP_STATE_INVALID = "E200"
    BACKUP_ALREADY_HELD = "E201"
    BACKUP_NOT_FOUND = "E202"

    # Configuration errors (E3xx)
    INVALID_CONFIG = "E301"

    # Unknown/internal errors (E9xx)
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 200:
            return "access"
        elif code_num < 300:
            return "backup"
        elif code_num < 400:
            return "config"
        else:
            return "unknown"


@dataclass
class ErrorContext:
    """Structured context for error reporting.

    Attributes:
        target: Qualified name of the class or object type involved.
        member: Name of the attribute or constructor involved.
        extra: Additional context-specific information.
        timestamp: When the error occurred.
    """

    target: str | None = None
    member: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "target": self.target,
            "member": self.member,
            "extra": self.extra,
            "timestamp": self.timestamp.isoformat(),
        }
        return {k: v for k, v in result.items() if v is not None}

    def format_location(self) -> str:
        """Format the error location as a readable string."""
        if self.target and self.member:
            return f"{self.target}.{self.member}"
        return self.target or self.member or "unknown location"


class ToolkitError(Exception):
    """Base exception for all testtoolkit errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: ErrorContext with target/member details
        suggestions: List of actionable steps to resolve the issue
        recoverable: Whether retrying the operation can succeed
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []
    recoverable: bool = False

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        recoverable: bool | None = None,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        if recoverable is not None:
            self.recoverable = recoverable
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            parts.append(f"at {location}")

        return " | ".join(parts)

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [
            f"Error [{self.error_code.value}]: {self.message}",
            "",
        ]

        location = self.context.format_location()
        if location != "unknown location":
            lines.append(f"Location: {location}")

        if self.cause is not None:
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class AccessError(ToolkitError):
    """Reflection access failed."""

    error_code = ErrorCode.ACCESS_FAILED
    default_message = "Member access failed"


class MemberNotFoundError(AccessError, AttributeError):
    """A named attribute does not exist or cannot be reached.

    Raised by the accessors in ``testtoolkit.access`` when the requested
    attribute is neither on the instance, in its slots, nor declared on any
    class in the MRO. Name-mangled names (``__secret``) are resolved before
    this error is raised, so the message lists every name that was tried.
    """

    error_code = ErrorCode.MEMBER_NOT_FOUND
    default_message = "Member not found"
    default_suggestions = [
        "Check the spelling of the attribute name",
        "Use the name as written in the class body; '__name' is mangled automatically",
        "Make sure the attribute is assigned before it is read (e.g. in __init__)",
    ]

    def __init__(
        self,
        message: str | None = None,
        target: str | None = None,
        member: str | None = None,
        candidates: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        self.target = target
        self.member = member
        self.candidates = candidates or []
        context = kwargs.pop("context", None) or ErrorContext(target=target, member=member)
        if self.candidates:
            context.extra.setdefault("candidates", list(self.candidates))
        super().__init__(message=message, context=context, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["candidates"] = list(self.candidates)
        return result


class ConstructorNotFoundError(MemberNotFoundError):
    """The target class defines no initializer of its own."""

    error_code = ErrorCode.CONSTRUCTOR_NOT_FOUND
    default_message = "Constructor not found"
    default_suggestions = [
        "Define __init__ on the class, or construct it normally",
    ]


class ClassNotFoundError(MemberNotFoundError):
    """A dotted class path could not be imported or resolved."""

    error_code = ErrorCode.CLASS_NOT_FOUND
    default_message = "Class not found"
    default_suggestions = [
        "Use a fully qualified path such as 'package.module.ClassName'",
        "Separate module and attribute with ':' when the module name is ambiguous",
        "Verify the module is importable from the test environment",
    ]


class BackupStateError(ToolkitError, RuntimeError):
    """A singleton backup precondition was violated."""

    error_code = ErrorCode.BACKUP_STATE_INVALID
    default_message = "Invalid singleton backup state"


class BackupAlreadyHeldError(BackupStateError):
    """A snapshot is already held; taking another would overwrite it."""

    error_code = ErrorCode.BACKUP_ALREADY_HELD
    default_message = "Singletons already backed up."
    default_suggestions = [
        "Call restore() before taking a new backup",
        "Check that the previous test's teardown restored the singletons",
    ]


class BackupNotFoundError(BackupStateError):
    """No snapshot is held for restore or update."""

    error_code = ErrorCode.BACKUP_NOT_FOUND
    default_message = "No Singleton backup found."
    default_suggestions = [
        "Call backup() before modifying or restoring singletons",
        "Use the singleton_backup fixture or singleton_scope() to pair backup and restore",
    ]


class ConfigValidationError(ToolkitError):
    """Configuration validation failed.

    The settings loaded from the environment or the YAML file contain an
    invalid value. The ``field`` and ``value`` attributes name the offender.
    """

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid configuration"
    default_suggestions = [
        "Check TESTTOOLKIT_* environment variables",
        "Check the YAML configuration file syntax",
    ]

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message=message, **kwargs)

    def __str__(self) -> str:
        base = super().__str__()
        if self.field:
            base = f"{base} (field: {self.field})"
        return base

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["field"] = self.field
        result["value"] = repr(self.value)
        return result
