"""Case conversion between wire (snake_case) and developer (camelCase) names."""

from __future__ import annotations

import re

_SNAKE_SEGMENT = re.compile(r"[-_][a-z0-9]")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[-\s]+")


def snake_to_camel(value: str) -> str:
    """Convert a snake_case or kebab-case identifier to camelCase.

    Args:
        value: Identifier such as ``is_accredited_investor``.

    Returns:
        The camelCase form, e.g. ``isAccreditedInvestor``.
    """
    if not value:
        return value
    return _SNAKE_SEGMENT.sub(lambda match: match.group(0)[1:].upper(), value)


def camel_to_snake(value: str) -> str:
    """Convert a camelCase identifier to snake_case.

    Hyphens and whitespace are folded into underscores. The transform is not
    a perfect inverse of :func:`snake_to_camel`: ``is_18_plus`` becomes
    ``is18Plus``, which converts back to ``is18_plus``.

    Args:
        value: Identifier such as ``isAccreditedInvestor``.

    Returns:
        The snake_case form, e.g. ``is_accredited_investor``.
    """
    if not value:
        return value
    value = _CAMEL_BOUNDARY.sub(r"\1_\2", value)
    return _SEPARATORS.sub("_", value).lower()
