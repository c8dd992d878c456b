"""Built-in validation rules: ``len``, ``in``, ``min`` and ``max``.

Rules are immutable and built once from their annotation parameter. Numeric
parameters are parsed at construction time, so a malformed literal is reported
as a syntax error before any value is examined.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .errors import ErrorKind, ValidationError
from .values import Kind, kind_of

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_PREFIXED = re.compile(
    r"[+-]?(?:0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|0[0-7_]*|[1-9][0-9_]*)"
)
_LEGACY_OCTAL = re.compile(r"([+-]?)0([0-7_]+)")


def _check_range(value: int, text: str) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def parse_decimal(text: str) -> int:
    """Parse a plain decimal integer with optional sign."""
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"invalid decimal integer: {text!r}")
    return _check_range(int(text), text)


def parse_int(text: str) -> int:
    """Parse a signed 64-bit integer literal with an optional base prefix.

    Accepts ``0x``/``0o``/``0b`` prefixes, a bare leading ``0`` for octal
    (``017`` == 15) and ``_`` digit separators.

    Raises:
        ValueError: If the literal is malformed or out of range
    """
    if not _PREFIXED.fullmatch(text):
        raise ValueError(f"invalid integer literal: {text!r}")

    literal = text
    legacy = _LEGACY_OCTAL.fullmatch(text)
    if legacy:
        literal = f"{legacy.group(1)}0o{legacy.group(2)}"

    # int() enforces underscore placement
    return _check_range(int(literal, 0), text)


def _syntax_error(rule: str, detail: str) -> ValidationError:
    return ValidationError(ErrorKind.INVALID_SYNTAX, rule=rule,
                           message=f"{ErrorKind.INVALID_SYNTAX.default_message}: {detail}")


class Rule(ABC):
    """Base class for validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name as written in annotations."""
        pass

    @classmethod
    @abstractmethod
    def from_param(cls, param: str) -> "Rule":
        """Build the rule from its (already stripped) annotation parameter.

        Raises:
            ValidationError: INVALID_SYNTAX if the parameter cannot be parsed
        """
        pass

    @abstractmethod
    def check(self, value: Any, path: str = "") -> ValidationError | None:
        """Check a dereferenced value.

        Args:
            value: Field value after reference unwrapping
            path: Field path to attribute a failure to

        Returns:
            The violation, or None if the value satisfies the rule
        """
        pass

    def _fail(self, kind: ErrorKind, message: str, path: str) -> ValidationError:
        return ValidationError(kind, message, path=path, rule=self.name)

    def _wrong_type(self, path: str) -> ValidationError:
        return self._fail(ErrorKind.INVALID_FIELD_TYPE,
                          f"invalid type of field for tag {self.name}", path)

    def __call__(self, value: Any, path: str = "") -> ValidationError | None:
        return self.check(value, path)


@dataclass(frozen=True)
class LenRule(Rule):
    """Exact length of text (in codepoints) or of a sequence."""
    length: int

    @property
    def name(self) -> str:
        return "len"

    @classmethod
    def from_param(cls, param: str) -> "LenRule":
        try:
            return cls(parse_decimal(param))
        except ValueError as e:
            raise _syntax_error("len", str(e)) from e

    def check(self, value: Any, path: str = "") -> ValidationError | None:
        if kind_of(value) not in (Kind.TEXT, Kind.SEQUENCE):
            return self._wrong_type(path)
        if len(value) != self.length:
            return self._fail(ErrorKind.INVALID_LENGTH, "invalid length", path)
        return None


@dataclass(frozen=True)
class InRule(Rule):
    """Membership in a comma-separated list.

    Entries are stripped. For integer values every entry must be an integer
    literal; ``integers`` is None when one of them is not, and integer checks
    then report a syntax error.
    """
    entries: tuple[str, ...]
    integers: tuple[int, ...] | None

    @property
    def name(self) -> str:
        return "in"

    @classmethod
    def from_param(cls, param: str) -> "InRule":
        entries = tuple(entry.strip() for entry in param.split(","))
        try:
            integers = tuple(parse_int(entry) for entry in entries)
        except ValueError:
            integers = None
        return cls(entries, integers)

    def check(self, value: Any, path: str = "") -> ValidationError | None:
        kind = kind_of(value)
        if kind == Kind.TEXT:
            if value in self.entries:
                return None
        elif kind == Kind.INTEGER:
            if self.integers is None:
                error = _syntax_error("in", f"non-integer entry in {','.join(self.entries)!r}")
                return error.at(path)
            if value in self.integers:
                return None
        else:
            return self._wrong_type(path)
        return self._fail(ErrorKind.NOT_IN, "field value is not in array from tag", path)


def _measure(value: Any) -> tuple[str, int] | None:
    """Return (label, magnitude) for bound checks, or None if unsupported."""
    kind = kind_of(value)
    if kind == Kind.TEXT:
        return "string length", len(value)
    if kind == Kind.SEQUENCE:
        return "slice length", len(value)
    if kind == Kind.INTEGER:
        return "int value", value
    return None


def _parse_bound(rule: str, param: str) -> int:
    try:
        return parse_int(param)
    except ValueError as e:
        raise _syntax_error(rule, str(e)) from e


@dataclass(frozen=True)
class MinRule(Rule):
    """Lower bound on text length, sequence length or integer value."""
    bound: int

    @property
    def name(self) -> str:
        return "min"

    @classmethod
    def from_param(cls, param: str) -> "MinRule":
        return cls(_parse_bound("min", param))

    def check(self, value: Any, path: str = "") -> ValidationError | None:
        measured = _measure(value)
        if measured is None:
            return self._wrong_type(path)
        label, magnitude = measured
        if magnitude < self.bound:
            return self._fail(ErrorKind.LESS_THAN_MIN, f"{label} less than min", path)
        return None


@dataclass(frozen=True)
class MaxRule(Rule):
    """Upper bound on text length, sequence length or integer value."""
    bound: int

    @property
    def name(self) -> str:
        return "max"

    @classmethod
    def from_param(cls, param: str) -> "MaxRule":
        return cls(_parse_bound("max", param))

    def check(self, value: Any, path: str = "") -> ValidationError | None:
        measured = _measure(value)
        if measured is None:
            return self._wrong_type(path)
        label, magnitude = measured
        if magnitude > self.bound:
            return self._fail(ErrorKind.GREATER_THAN_MAX, f"{label} greater than max", path)
        return None


RULES: dict[str, type[Rule]] = {
    "len": LenRule,
    "in": InRule,
    "min": MinRule,
    "max": MaxRule,
}
