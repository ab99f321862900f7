"""Module-level entry points for mapping objects to XML.

These are the simplest way in: one call per object, global registries, and an
optional configuration.
"""

from typing import Any, Optional

from micro_xml.mapping import Translator
from micro_xml.shared import MicroXMLConfig
from micro_xml.tree import Document, Element


def to_document(
    obj: Any,
    config: Optional[MicroXMLConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Map ``obj`` to a document.

    Examples:
        >>> doc = to_document(fuc)
        >>> print(doc.pretty_print())
    """
    return Translator(obj, config=config, correlation_id=correlation_id).create_document()


def to_element(
    obj: Any,
    config: Optional[MicroXMLConfig] = None,
    correlation_id: Optional[str] = None,
) -> Element:
    """Map ``obj`` to a detached root element."""
    return Translator(obj, config=config, correlation_id=correlation_id).create_element()


def to_xml_string(obj: Any, config: Optional[MicroXMLConfig] = None) -> str:
    """Map ``obj`` to a document and return its pretty-printed text."""
    return to_document(obj, config=config).pretty_print()
