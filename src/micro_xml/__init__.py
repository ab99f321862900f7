"""Micro XML document model.

An in-memory XML-like tree with a deterministic pretty-printer, a linear
path query ("micro XPath") and a metadata-driven engine that maps object
graphs onto trees.

Progressive API Disclosure:
- Level 1: Simple functions - to_document(), to_element(), to_xml_string()
- Level 2: Hand-built trees - Element, Attributes, Document
- Level 3: Configured mapping - Translator with MicroXMLConfig and registries
"""

__version__ = "0.1.0"
__author__ = "Micro XML Team"

from .api import to_document, to_element, to_xml_string
from .mapping import (
    Translator,
    xml_field,
    xml_mapped,
)
from .shared import (
    MicroXMLConfig,
    MicroXMLError,
    StructuralError,
    ValidationError,
)
from .tree import Attributes, Document, Element, TraversalDecision

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple mapping functions
    "to_document",
    "to_element",
    "to_xml_string",

    # Level 2: Tree model
    "Attributes",
    "Document",
    "Element",
    "TraversalDecision",

    # Level 3: Mapping engine and configuration
    "Translator",
    "xml_field",
    "xml_mapped",
    "MicroXMLConfig",

    # Errors
    "MicroXMLError",
    "StructuralError",
    "ValidationError",
]
