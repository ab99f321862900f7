"""Name validity rules shared by tag names and attribute names.

A valid name consists only of ASCII letters, underscores and spaces; spaces are
stripped before the name is stored, and what remains must not be blank.
"""

import re

from micro_xml.shared.errors import ValidationError

_NAME_PATTERN = re.compile(r"[a-zA-Z_ ]+")


def is_valid_name(candidate: str) -> bool:
    """Check a raw name against the letters/underscore/space predicate."""
    return isinstance(candidate, str) and _NAME_PATTERN.fullmatch(candidate) is not None


def strip_spaces(value: str) -> str:
    """Remove every space character from ``value``."""
    return value.replace(" ", "")


def normalize_name(candidate: str, kind: str = "Tag") -> str:
    """Validate ``candidate`` and return it with internal spaces removed.

    Args:
        candidate: Raw tag or attribute name
        kind: Label used in error messages

    Returns:
        The space-stripped name

    Raises:
        ValidationError: If the name fails the predicate or is blank once stripped
    """
    if not is_valid_name(candidate):
        raise ValidationError(
            f"{kind} name must only contain letters, underscores or spaces: {candidate!r}",
            candidate,
        )
    name = strip_spaces(candidate)
    if not name:
        raise ValidationError(f"{kind} name cannot be empty or blank", candidate)
    return name
