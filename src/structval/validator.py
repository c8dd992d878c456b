"""Field validation and recursive traversal.

``Validator.validate`` walks an arbitrary value, discovers every record
reachable through references and sequences, and checks each annotated field.
Failures never stop the walk; all of them are returned together.

The root value must be a record, a reference, or a sequence whose elements
are all records, references or sequences. Anything else is reported as
``NOT_STRUCT``. Field values reached through nested traversal are held to a
looser standard: scalars found there are simply not records and are skipped.
"""

import logging
from typing import Any

from .config import ValidatorConfig
from .errors import ErrorKind, ValidationError, ValidationErrors
from .parser import parse_annotation
from .values import FieldDescriptor, Kind, ReferenceCycleError, deref, fields_of, kind_of

logger = logging.getLogger(__name__)

_RECURSABLE_ELEMENTS = (Kind.RECORD, Kind.POINTER, Kind.SEQUENCE)


def _is_qualifying_sequence(value: Any) -> bool:
    return all(kind_of(element) in _RECURSABLE_ELEMENTS for element in value)


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


class Validator:
    """Validates values against their field annotations."""

    def __init__(self, config: ValidatorConfig | None = None):
        self.config = config or ValidatorConfig()

    def validate(self, value: Any) -> ValidationErrors | None:
        """Validate a value.

        Args:
            value: A record, a reference to one, or a sequence of records,
                references or sequences

        Returns:
            None if the value is valid, otherwise every error found in
            traversal order
        """
        errors = ValidationErrors(separator=self.config.separator)
        self._walk(value, "", 0, errors, strict=True)
        if not errors:
            return None
        logger.debug(f"Validation of {type(value).__name__} found {len(errors)} errors")
        return errors

    def _walk(self, value: Any, path: str, depth: int, errors: ValidationErrors, strict: bool) -> None:
        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            logger.warning(f"Maximum validation depth {max_depth} exceeded at {path or '<root>'}")
            errors.append(ValidationError(ErrorKind.TOO_DEEP, path=path))
            return

        kind = kind_of(value)
        if kind == Kind.POINTER:
            if value is not None:
                self._walk(value.target, path, depth + 1, errors, strict)
        elif kind == Kind.RECORD:
            self._validate_record(value, path, depth, errors)
        elif kind == Kind.SEQUENCE and (not strict or _is_qualifying_sequence(value)):
            for index, element in enumerate(value):
                self._walk(element, f"{path}[{index}]", depth + 1, errors, strict)
        elif strict:
            errors.append(ValidationError(ErrorKind.NOT_STRUCT, path=path))

    def _validate_record(self, record: Any, path: str, depth: int, errors: ValidationErrors) -> None:
        logger.debug(f"Validating record {type(record).__name__} at {path or '<root>'}")
        for descriptor in fields_of(record, self.config.tag_name):
            field_path = _join(path, descriptor.name)
            descend = self._validate_field(descriptor, field_path, errors)
            if descend and self.config.nested:
                self._walk(descriptor.value, field_path, depth + 1, errors, strict=False)

    def _validate_field(self, descriptor: FieldDescriptor, path: str, errors: ValidationErrors) -> bool:
        """Apply the field's rule, if any.

        Returns:
            True if the field's value may be traversed further
        """
        annotation = descriptor.annotation
        if annotation == self.config.skip_marker:
            return False
        if annotation == "":
            return descriptor.accessible

        if not descriptor.accessible:
            errors.append(ValidationError(ErrorKind.UNEXPORTED_FIELD, path=path))
            return False

        try:
            rule = parse_annotation(annotation)
        except ValidationError as e:
            logger.debug(f"Invalid annotation on {path}: {e.message}")
            errors.append(e.at(path))
            return True

        try:
            value = deref(descriptor.value, self.config.max_depth)
        except ReferenceCycleError as e:
            logger.warning(f"Reference chain at {path} not followed: {e}")
            errors.append(ValidationError(ErrorKind.TOO_DEEP, path=path))
            return False

        error = rule.check(value, path)
        if error is not None:
            errors.append(error)
        return True


def validate(value: Any, config: ValidatorConfig | None = None) -> ValidationErrors | None:
    """Validate ``value`` and return its errors, or None if it is valid."""
    return Validator(config).validate(value)


def validate_or_raise(value: Any, config: ValidatorConfig | None = None) -> None:
    """Validate ``value``, raising ``ValidationErrors`` if anything is wrong."""
    errors = validate(value, config)
    if errors is not None:
        raise errors
