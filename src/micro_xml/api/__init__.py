"""Public API: module-level mapping functions and lxml interop."""

from .functions import to_document, to_element, to_xml_string
from .interop import is_lxml_available, to_lxml

__all__ = [
    "to_document",
    "to_element",
    "to_xml_string",
    "is_lxml_available",
    "to_lxml",
]
