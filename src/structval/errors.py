"""Error model for structval.

Every failure found during a validation run is a ``ValidationError`` carrying
one ``ErrorKind``. Errors are collected in traversal order into a
``ValidationErrors`` aggregate; callers classify failures with ``matches``.
"""

from collections.abc import Iterator
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of error kinds."""
    # Structural
    NOT_STRUCT = "not_struct"
    TOO_DEEP = "too_deep"
    # Annotation
    INVALID_SYNTAX = "invalid_syntax"
    UNEXPORTED_FIELD = "unexported_field"
    # Rule violations
    INVALID_FIELD_TYPE = "invalid_field_type"
    INVALID_LENGTH = "invalid_length"
    NOT_IN = "not_in"
    LESS_THAN_MIN = "less_than_min"
    GREATER_THAN_MAX = "greater_than_max"

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_DEFAULT_MESSAGES = {
    ErrorKind.NOT_STRUCT: "wrong argument given, should be a struct",
    ErrorKind.TOO_DEEP: "maximum validation depth exceeded",
    ErrorKind.INVALID_SYNTAX: "invalid validator syntax",
    ErrorKind.UNEXPORTED_FIELD: "validation for unexported field is not allowed",
    ErrorKind.INVALID_FIELD_TYPE: "invalid type of field",
    ErrorKind.INVALID_LENGTH: "invalid length",
    ErrorKind.NOT_IN: "field value is not in array from tag",
    ErrorKind.LESS_THAN_MIN: "value less than min",
    ErrorKind.GREATER_THAN_MAX: "value greater than max",
}


class ValidationError(Exception):
    """A single validation failure attributed to one field or structural decision."""

    def __init__(self, kind: ErrorKind, message: str | None = None,
                 path: str = "", rule: str | None = None):
        self.kind = kind
        self.message = message or kind.default_message
        self.path = path
        self.rule = rule
        super().__init__(self.message)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.__dict__:
            raise AttributeError(f"ValidationError is immutable, cannot set {name!r}")
        super().__setattr__(name, value)

    def __reduce__(self):
        return (self.__class__, (self.kind, self.message, self.path, self.rule))

    def __str__(self) -> str:
        return self.message

    def at(self, path: str) -> "ValidationError":
        """Return a copy of this error attributed to ``path``."""
        return ValidationError(self.kind, self.message, path, self.rule)

    def matches(self, kind: ErrorKind) -> bool:
        return self.kind is kind

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "path": self.path,
            "rule": self.rule,
        }

    def __repr__(self) -> str:
        return f"ValidationError(kind={self.kind.value!r}, message={self.message!r}, path={self.path!r})"


class ValidationErrors(Exception):
    """Ordered aggregate of validation errors.

    Order is traversal order: record fields in declaration order, then
    sequence elements in index order. An empty aggregate means valid, but
    ``validate`` reports that case as ``None`` rather than an empty instance.
    """

    def __init__(self, errors: list[ValidationError] | None = None, separator: str = ": "):
        self.errors: list[ValidationError] = list(errors or [])
        self.separator = separator
        super().__init__()

    def __reduce__(self):
        return (self.__class__, (self.errors, self.separator))

    def append(self, error: ValidationError) -> None:
        self.errors.append(error)

    def extend(self, errors) -> None:
        self.errors.extend(errors)

    def matches(self, kind: ErrorKind) -> bool:
        """True if any contained error is of ``kind``."""
        return any(error.matches(kind) for error in self.errors)

    def by_kind(self, kind: ErrorKind) -> list[ValidationError]:
        return [error for error in self.errors if error.matches(kind)]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "valid": not self.errors,
            "count": len(self.errors),
            "errors": [error.to_dict() for error in self.errors],
        }

    def __str__(self) -> str:
        return self.separator.join(error.message for error in self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    def __getitem__(self, index: int) -> ValidationError:
        return self.errors[index]

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __repr__(self) -> str:
        return f"ValidationErrors({self.errors!r})"
