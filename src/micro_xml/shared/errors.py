"""Exception hierarchy for the micro XML document model."""

from typing import Optional


class MicroXMLError(Exception):
    """Base exception for every error raised by micro_xml."""


class ValidationError(MicroXMLError, ValueError):
    """Raised when a tag name, attribute name or attribute value is rejected."""

    def __init__(self, message: str, value: Optional[str] = None) -> None:
        super().__init__(message)
        self.value = value


class StructuralError(MicroXMLError, RuntimeError):
    """Raised when an operation would break the shape of the tree.

    Covers text assigned to an element that has children, mapped objects with
    no (or an ambiguous) root binding, blank resolved tag names and re-parenting
    that would introduce a cycle.
    """


class HookError(MicroXMLError, LookupError):
    """Raised when a transformer or adapter strategy name is not registered."""

    def __init__(self, message: str, strategy: Optional[str] = None) -> None:
        super().__init__(message)
        self.strategy = strategy


class DescriptorError(MicroXMLError, TypeError):
    """Raised when an object's type has no registered describer."""
