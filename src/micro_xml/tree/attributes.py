"""Validated attribute map owned by a single element."""

from typing import Dict, Iterator, KeysView, Mapping, Optional, Tuple

from micro_xml.shared.errors import ValidationError
from micro_xml.tree.naming import is_valid_name, strip_spaces


class Attributes:
    """Mapping of attribute names to values with validation on every write.

    Names must satisfy the same predicate as tag names. Names and values are
    stored with their spaces removed and may never be blank. Iteration follows
    insertion order, which is what the serializer relies on.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._values: Dict[str, str] = {}
        if initial:
            for name, value in initial.items():
                self.set(name, value)

    def names(self) -> KeysView[str]:
        """Return the attribute names (set-like, in insertion order)."""
        return self._values.keys()

    def value(self, name: str) -> Optional[str]:
        """Return the value stored under ``name``, or None if absent."""
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        """Set an attribute, replacing any previous value.

        Raises:
            TypeError: If name or value is not a string
            ValidationError: If the name fails the name predicate, or if the name
                or value is blank
        """
        if not isinstance(name, str) or not isinstance(value, str):
            raise TypeError("Attribute name and value must be strings")
        if not is_valid_name(name):
            raise ValidationError(
                "Attribute names must only contain letters, underscores or spaces: "
                f"{name!r}",
                name,
            )
        if not name.strip() or not value.strip():
            raise ValidationError(
                "Attribute names and/or values cannot be empty or blank", name
            )
        self._values[strip_spaces(name)] = strip_spaces(value)

    def remove(self, name: str) -> None:
        """Remove ``name`` if present; absent names are ignored."""
        self._values.pop(name, None)

    def items(self) -> Iterator[Tuple[str, str]]:
        """Iterate over ``(name, value)`` pairs in insertion order."""
        return iter(self._values.items())

    def to_dict(self) -> Dict[str, str]:
        """Return a plain dictionary copy of the attributes."""
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Attributes):
            return list(self._values.items()) == list(other._values.items())
        return NotImplemented

    def __repr__(self) -> str:
        return f"Attributes({self._values!r})"
