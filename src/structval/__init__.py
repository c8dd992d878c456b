"""structval - declarative validation of annotated records.

Fields carry ``rule:param`` annotations (``len``, ``in``, ``min``, ``max``).
``validate`` walks a value and returns every violation in traversal order, or
None when the value is valid.

Basic usage:
    from dataclasses import dataclass
    from structval import tag, validate

    @dataclass
    class User:
        name: str = tag("min:1")
        role: str = tag("in:admin,user", default="user")

    errors = validate(User(name=""))
    if errors is not None:
        print(errors)
"""

__version__ = "0.1.0"
__author__ = "rpapub"
__description__ = "Declarative validation of annotated records"

from structval.config import LoggingConfig, LogLevel, ValidatorConfig, configure_logging, load_config
from structval.errors import ErrorKind, ValidationError, ValidationErrors
from structval.parser import parse_annotation
from structval.rules import InRule, LenRule, MaxRule, MinRule, Rule
from structval.validator import Validator, validate, validate_or_raise
from structval.values import FieldDescriptor, Kind, Ref, fields_of, kind_of, tag

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "validate",
    "validate_or_raise",
    "Validator",
    "ValidatorConfig",
    "LoggingConfig",
    "LogLevel",
    "load_config",
    "configure_logging",
    "ErrorKind",
    "ValidationError",
    "ValidationErrors",
    "parse_annotation",
    "Rule",
    "LenRule",
    "InRule",
    "MinRule",
    "MaxRule",
    "Kind",
    "Ref",
    "FieldDescriptor",
    "fields_of",
    "kind_of",
    "tag",
]
