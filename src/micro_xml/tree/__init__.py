"""Element tree, attributes and document for the micro XML model.

Key Components:
    Attributes: Validated name/value map owned by one element
    Element: Tree node with name, text, attributes and children
    Document: Root element plus declaration, pretty-printer, bulk edits and
        micro-XPath queries
"""

from .attributes import Attributes
from .document import Document
from .element import Element, TraversalDecision, Visitor
from .naming import is_valid_name, normalize_name

__all__ = [
    "Attributes",
    "Document",
    "Element",
    "TraversalDecision",
    "Visitor",
    "is_valid_name",
    "normalize_name",
]
