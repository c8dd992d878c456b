"""Annotation parser: ``"rule:param"`` to a ready-to-use ``Rule``."""

import logging

from .errors import ErrorKind, ValidationError
from .rules import RULES, Rule

logger = logging.getLogger(__name__)

SEPARATOR = ":"


def parse_annotation(annotation: str) -> Rule:
    """Parse a field annotation into a rule.

    Args:
        annotation: Raw annotation such as ``"len:5"`` or ``"in: a, b"``

    Returns:
        The constructed rule

    Raises:
        ValidationError: INVALID_SYNTAX for a missing separator, an empty
            parameter, an unknown rule name or an unparsable parameter
    """
    rule_name, sep, param = annotation.partition(SEPARATOR)
    if not sep:
        raise ValidationError(
            ErrorKind.INVALID_SYNTAX,
            f"{ErrorKind.INVALID_SYNTAX.default_message}: missing ':' in {annotation!r}",
        )

    rule_name = rule_name.strip()
    param = param.strip()
    if not param:
        raise ValidationError(
            ErrorKind.INVALID_SYNTAX,
            f"{ErrorKind.INVALID_SYNTAX.default_message}: empty parameter in {annotation!r}",
            rule=rule_name or None,
        )

    rule_cls = RULES.get(rule_name)
    if rule_cls is None:
        raise ValidationError(
            ErrorKind.INVALID_SYNTAX,
            f"{ErrorKind.INVALID_SYNTAX.default_message}: unknown rule {rule_name!r}",
        )

    rule = rule_cls.from_param(param)
    logger.debug(f"Parsed annotation {annotation!r} as {rule!r}")
    return rule
