"""Document container: serialization, bulk edits and micro-XPath queries.

A :class:`Document` aliases an existing element tree; it never copies it, so
later edits to the elements are visible through the document.
"""

from typing import Any, Dict, List, Optional

from micro_xml.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    MicroXMLConfig,
    get_logger,
)
from micro_xml.tree.element import Element, TraversalDecision

INDENT = "\t"
PATH_SEPARATOR = "/"


class Document:
    """Root element plus the version and encoding of the XML declaration.

    Args:
        root: Element the document is built around (not copied)
        version: Version written into the declaration
        encoding: Encoding written into the declaration
        correlation_id: Optional correlation ID for logs and diagnostics
    """

    def __init__(
        self,
        root: Element,
        version: float = 1.0,
        encoding: str = "UTF-8",
        correlation_id: Optional[str] = None,
    ) -> None:
        if not isinstance(root, Element):
            raise TypeError("Document root must be an Element instance")
        self._root = root
        self._version = version
        self._encoding = encoding
        self.correlation_id = correlation_id
        self.diagnostics: List[DiagnosticEntry] = []
        self.logger = get_logger(__name__, correlation_id, "document")

    @classmethod
    def from_config(cls, root: Element, config: MicroXMLConfig) -> "Document":
        """Create a document whose declaration follows ``config.serialization``."""
        return cls(
            root,
            version=config.serialization.version,
            encoding=config.serialization.encoding,
            correlation_id=config.correlation_id,
        )

    @property
    def root(self) -> Element:
        """The root element."""
        return self._root

    @property
    def version(self) -> float:
        """Declared XML version."""
        return self._version

    @property
    def encoding(self) -> str:
        """Declared encoding."""
        return self._encoding

    # Serialization

    def pretty_print(self) -> str:
        """Render the whole document as tab-indented XML text.

        The declaration comes first, then the root. Elements with children get
        an opening line, one indented line (or block) per child and a closing
        line; childless elements render on one line, either with their text or
        self-closed.
        """
        declaration = (
            f'<?xml version="{self._version}" encoding="{self._encoding}"?>'
        )
        return declaration + "\n" + self._render_segment(self._root)

    def _render_segment(self, element: Element) -> str:
        # Indent by absolute depth, not depth below the document root.
        if not element.has_children:
            return self._render_line(element)

        lines = [self._open_tag(element) + ">"]
        for child in element.children:
            lines.append(INDENT * child.depth + self._render_segment(child))
        lines.append(INDENT * element.depth + f"</{element.name}>")
        return "\n".join(lines)

    def _render_line(self, element: Element) -> str:
        if element.text:
            return f"{self._open_tag(element)}>{element.text}</{element.name}>"
        return self._open_tag(element) + "/>"

    @staticmethod
    def _open_tag(element: Element) -> str:
        rendered_attributes = "".join(
            f' {name}="{value}"' for name, value in element.attributes.items()
        )
        return f"<{element.name}{rendered_attributes}"

    # Bulk edits

    def set_attribute_everywhere(
        self, tag_name: str, attribute_name: str, attribute_value: str
    ) -> None:
        """Set an attribute on every element named ``tag_name``."""
        def visitor(element: Element) -> TraversalDecision:
            if element.name == tag_name:
                element.attributes.set(attribute_name, attribute_value)
            return TraversalDecision.CONTINUE

        self._root.visit(visitor)
        self.logger.debug(
            "Attribute set globally",
            extra={"tag": tag_name, "attribute": attribute_name},
        )

    def rename_everywhere(self, current_name: str, new_name: str) -> None:
        """Rename every element currently named ``current_name``."""
        def visitor(element: Element) -> TraversalDecision:
            if element.name == current_name:
                element.rename(new_name)
            return TraversalDecision.CONTINUE

        self._root.visit(visitor)
        self.logger.debug(
            "Tags renamed globally", extra={"from": current_name, "to": new_name}
        )

    def remove_everywhere(self, tag_name: str) -> None:
        """Detach every element named ``tag_name``, keeping their subtrees.

        Matches are collected in one pass and detached afterwards, in
        collection order.
        """
        matches: List[Element] = []

        def collector(element: Element) -> TraversalDecision:
            if element.name == tag_name:
                matches.append(element)
            return TraversalDecision.CONTINUE

        self._root.visit(collector)
        for element in matches:
            element.detach_preserving_subtree()

        self.logger.debug(
            "Tags removed globally", extra={"tag": tag_name, "removed": len(matches)}
        )

    def remove_attribute_everywhere(self, tag_name: str, attribute_name: str) -> None:
        """Remove ``attribute_name`` from every element named ``tag_name``."""
        def visitor(element: Element) -> TraversalDecision:
            if element.name == tag_name:
                element.attributes.remove(attribute_name)
            return TraversalDecision.CONTINUE

        self._root.visit(visitor)
        self.logger.debug(
            "Attribute removed globally",
            extra={"tag": tag_name, "attribute": attribute_name},
        )

    # Queries

    def micro_xpath(self, path: str) -> List[str]:
        """Evaluate a root-to-target path such as ``"plano/curso/cadeira"``.

        Returns the single-line rendering of every element whose full path
        equals ``path``, in discovery order. A path without ``/`` is reported
        through the log and :attr:`diagnostics` and yields an empty list; a path
        whose first segment is not the root's name also yields an empty list.
        """
        if PATH_SEPARATOR not in path:
            message = f"Invalid XPath string: {path}. Must contain '/'"
            self.logger.warning(message, extra={"path": path})
            self.diagnostics.append(
                DiagnosticEntry(
                    severity=DiagnosticSeverity.WARNING,
                    message=message,
                    component="micro_xpath",
                    details={"path": path},
                    correlation_id=self.correlation_id,
                )
            )
            return []

        segments = path.split(PATH_SEPARATOR)
        if segments[0] != self._root.name:
            return []

        candidates = self._root.find_descendants_by_name(segments[-1])
        return [
            self._render_line(element)
            for element in candidates
            if element.path == path
        ]

    def iter_elements(self) -> List[Element]:
        """Return every element of the tree in document (pre-)order."""
        return list(self._root.iter())

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to dictionary representation."""
        return {
            "version": self._version,
            "encoding": self._encoding,
            "root": self._root.to_dict(),
        }

    def __repr__(self) -> str:
        return (
            f"Document(root={self._root.name!r}, version={self._version!r}, "
            f"encoding={self._encoding!r})"
        )
