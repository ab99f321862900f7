"""Conversion of micro_xml trees into lxml.etree elements.

lxml is an optional dependency (``pip install micro-xml[lxml]``); it is only
imported when a conversion is requested.
"""

from typing import Any, Union

from micro_xml.shared import get_logger
from micro_xml.tree import Document, Element

logger = get_logger(__name__, component="lxml_interop")


def is_lxml_available() -> bool:
    """Check if lxml can be imported."""
    try:
        import lxml.etree  # noqa: F401
    except ImportError:
        return False
    return True


def to_lxml(source: Union[Document, Element]) -> Any:
    """Convert a document or element subtree to an ``lxml.etree._Element``.

    Names, attributes (in insertion order), text and child order are carried
    over; the XML declaration of a document is not.
    """
    import lxml.etree as ET

    root = source.root if isinstance(source, Document) else source
    converted = _convert_element(root, ET)
    logger.debug(
        "Converted tree to lxml",
        extra={"tag": root.name, "element_count": len(converted.xpath("//*"))},
    )
    return converted


def _convert_element(element: Element, ET: Any) -> Any:
    lxml_element = ET.Element(element.name)
    for name, value in element.attributes.items():
        lxml_element.set(name, value)
    if element.text:
        lxml_element.text = element.text
    for child in element.children:
        lxml_element.append(_convert_element(child, ET))
    return lxml_element
