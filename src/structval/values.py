"""Value classification and field enumeration.

The traversal engine never inspects concrete types itself. It asks this module
for a value's ``Kind`` and, for records, for the ordered list of
``FieldDescriptor`` objects.

Records are dataclass instances and pydantic models. Annotations live in field
metadata under the configured tag name::

    @dataclass
    class User:
        name: str = tag("min:1")
        role: str = field(default="user", metadata={"validate": "in:admin,user"})

    class Order(BaseModel):
        sku: str = Field(json_schema_extra={"validate": "len:8"})
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

DEFAULT_TAG_NAME = "validate"
EMBEDDED_KEY = "embedded"


class Kind(str, Enum):
    """Value kinds understood by the validator."""
    TEXT = "text"
    INTEGER = "integer"
    SEQUENCE = "sequence"
    RECORD = "record"
    POINTER = "pointer"
    OTHER = "other"


class Ref:
    """Explicit reference to another value.

    ``None`` plays the role of the null reference, so ``Ref(None)`` is a
    non-null reference pointing at a null one.
    """

    __slots__ = ("target",)

    def __init__(self, target: Any):
        self.target = target

    def __repr__(self) -> str:
        return f"Ref({self.target!r})"


@dataclass(frozen=True)
class FieldDescriptor:
    """One record field as seen by the validator."""
    name: str
    annotation: str
    value: Any
    embedded: bool = False

    @property
    def accessible(self) -> bool:
        """Public fields and embedded members are accessible; ``_private`` ones are not."""
        return self.embedded or not self.name.startswith("_")


def is_record(value: Any) -> bool:
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def kind_of(value: Any) -> Kind:
    """Classify a value."""
    if value is None or isinstance(value, Ref):
        return Kind.POINTER
    if isinstance(value, str):
        return Kind.TEXT
    if isinstance(value, bool):
        return Kind.OTHER
    if isinstance(value, int):
        return Kind.INTEGER
    if isinstance(value, (list, tuple)):
        return Kind.SEQUENCE
    if is_record(value):
        return Kind.RECORD
    return Kind.OTHER


class ReferenceCycleError(ValueError):
    """Raised when a reference chain loops or exceeds the allowed length."""


def deref(value: Any, limit: int | None = None) -> Any:
    """Follow references while they are non-null.

    Stops at the first ``None``, which is returned as-is; ``deref(None)`` is
    ``None``.

    Args:
        value: Value to unwrap
        limit: Maximum number of links to follow, or None for no limit

    Raises:
        ReferenceCycleError: If the chain revisits a reference or is longer
            than ``limit``
    """
    seen: set[int] = set()
    while isinstance(value, Ref):
        if id(value) in seen:
            raise ReferenceCycleError("reference chain is cyclic")
        if limit is not None and len(seen) >= limit:
            raise ReferenceCycleError(f"reference chain longer than {limit} links")
        seen.add(id(value))
        value = value.target
    return value


def fields_of(record: Any, tag_name: str = DEFAULT_TAG_NAME) -> list[FieldDescriptor]:
    """Return the record's fields in declaration order.

    Args:
        record: Dataclass instance or pydantic model instance
        tag_name: Metadata key holding the annotation

    Returns:
        List of field descriptors

    Raises:
        TypeError: If ``record`` is not a record
    """
    if isinstance(record, BaseModel):
        return _model_fields(record, tag_name)
    if is_record(record):
        return _dataclass_fields(record, tag_name)
    raise TypeError(f"{type(record).__name__} is not a record")


def _dataclass_fields(record: Any, tag_name: str) -> list[FieldDescriptor]:
    descriptors = []
    for f in dataclasses.fields(record):
        descriptors.append(FieldDescriptor(
            name=f.name,
            annotation=str(f.metadata.get(tag_name, "")),
            value=getattr(record, f.name),
            embedded=bool(f.metadata.get(EMBEDDED_KEY, False)),
        ))
    return descriptors


def _model_fields(record: BaseModel, tag_name: str) -> list[FieldDescriptor]:
    descriptors = []
    for name, info in type(record).model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        descriptors.append(FieldDescriptor(
            name=name,
            annotation=str(extra.get(tag_name, "")),
            value=getattr(record, name),
            embedded=bool(extra.get(EMBEDDED_KEY, False)),
        ))
    return descriptors


def tag(annotation: str, *, embedded: bool = False, tag_name: str = DEFAULT_TAG_NAME, **kwargs: Any) -> Any:
    """Dataclass ``field()`` carrying a validation annotation.

    Extra keyword arguments (``default``, ``default_factory``...) are passed
    through to ``dataclasses.field``.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[tag_name] = annotation
    if embedded:
        metadata[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)
