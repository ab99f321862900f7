"""Mutable element tree for the micro XML document model.

An :class:`Element` owns its children and its :class:`Attributes`, and keeps a
weak reference back to its parent. All structural edits (construction under a
parent, re-parenting, detaching) go through this module so that a child is
listed by at most one parent and the parent reference always agrees with the
child lists.
"""

import weakref
from enum import Enum, auto
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Union,
)

from micro_xml.shared.errors import StructuralError, ValidationError
from micro_xml.tree.attributes import Attributes
from micro_xml.tree.naming import normalize_name, strip_spaces


class TraversalDecision(Enum):
    """What a visitor wants done with the subtree of the element it just saw."""

    CONTINUE = auto()   # Descend into the element's children
    PRUNE = auto()      # Skip the element's children; siblings are unaffected


Visitor = Callable[["Element"], Union[TraversalDecision, bool, None]]


class Element:
    """One tag of the tree: name, optional text, attributes and children.

    Text and children are mutually exclusive. Creating an element with a
    ``parent`` appends it as that parent's last child.

    Args:
        name: Tag name; validated and stripped of spaces
        parent: Optional element to attach to
        text: Optional initial text content

    Raises:
        ValidationError: If the name is invalid or blank
        StructuralError: If ``parent`` already carries text
    """

    def __init__(
        self,
        name: str,
        parent: Optional["Element"] = None,
        text: Optional[str] = None,
    ) -> None:
        self._name = normalize_name(name)
        self._text = text
        self._children: List[Element] = []
        self._attributes = Attributes()
        self._parent_ref: Optional["weakref.ReferenceType[Element]"] = None

        if parent is not None:
            parent._check_accepts_child(self)
            parent._children.append(self)
            self._parent_ref = weakref.ref(parent)

    # Properties

    @property
    def name(self) -> str:
        """Current tag name; empty once the element has been detached."""
        return self._name

    @name.setter
    def name(self, new_name: str) -> None:
        self.rename(new_name)

    @property
    def text(self) -> Optional[str]:
        """Text content, or None."""
        return self._text

    @text.setter
    def text(self, text: Optional[str]) -> None:
        self.set_text(text)

    @property
    def parent(self) -> Optional["Element"]:
        """Parent element, or None for a root (or a collected parent)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def children(self) -> List["Element"]:
        """Copy of the ordered child list."""
        return list(self._children)

    @property
    def attributes(self) -> Attributes:
        """Attributes owned by this element."""
        return self._attributes

    @property
    def has_children(self) -> bool:
        """Check if the element has at least one child."""
        return bool(self._children)

    @property
    def depth(self) -> int:
        """Number of ancestors above this element (a root has depth 0)."""
        depth = 0
        ancestor = self.parent
        while ancestor is not None:
            depth += 1
            ancestor = ancestor.parent
        return depth

    @property
    def path(self) -> str:
        """Slash-joined names from the root down to this element."""
        names = [self._name]
        ancestor = self.parent
        while ancestor is not None:
            names.append(ancestor._name)
            ancestor = ancestor.parent
        return "/".join(reversed(names))

    # Mutation

    def rename(self, new_name: str) -> None:
        """Replace the tag name.

        Spaces are stripped as at construction, but only blankness is checked;
        the character predicate is not re-run.

        Raises:
            ValidationError: If ``new_name`` is blank
        """
        if not isinstance(new_name, str) or not new_name.strip():
            raise ValidationError("Tag name cannot be empty or blank", new_name)
        self._name = strip_spaces(new_name)

    def set_text(self, text: Optional[str]) -> None:
        """Set (or clear, with None) the text content.

        Raises:
            StructuralError: If the element has children
        """
        if self._children:
            raise StructuralError(
                "Cannot set text when there are child elements present"
            )
        self._text = text

    def attach_to(self, new_parent: "Element") -> None:
        """Move this element to the end of ``new_parent``'s children.

        If the element is already attached somewhere (including ``new_parent``
        itself) it is first removed from that parent's child list.

        Two moves are refused outright rather than performed: attaching under
        this element's own subtree, which would make the tree cyclic, and
        attaching under an element holding text, which would break the
        text/children exclusivity that :meth:`set_text` enforces from the
        other side.

        Raises:
            StructuralError: If ``new_parent`` is this element or one of its
                descendants, or if ``new_parent`` carries text
        """
        new_parent._check_accepts_child(self)

        old_parent = self.parent
        if old_parent is not None:
            old_parent._remove_child(self)

        new_parent._children.append(self)
        self._parent_ref = weakref.ref(new_parent)

    def adopt(self, child: "Element") -> "Element":
        """Make ``child`` the last child of this element and return it."""
        child.attach_to(self)
        return child

    def detach_preserving_subtree(self) -> None:
        """Remove this element while keeping its children in the tree.

        With a parent ``P``: every child is appended to ``P`` (in order, after
        ``P``'s existing children) and this element leaves ``P``'s child list.
        In every case the name becomes empty and the parent reference is cleared.
        A root keeps its children.
        """
        parent = self.parent
        if parent is not None:
            promoted = self._children
            self._children = []
            for child in promoted:
                parent._children.append(child)
                child._parent_ref = weakref.ref(parent)
            parent._remove_child(self)

        self._name = ""
        self._parent_ref = None

    def child_tag(
        self,
        name: str,
        text: Optional[str] = None,
        attributes: Optional[Mapping[str, str]] = None,
        init: Optional[Callable[["Element"], Any]] = None,
    ) -> "Element":
        """Create a child element, optionally with text, attributes and a builder.

        Example:
            >>> root = Element("plano")
            >>> root.child_tag("curso", init=lambda curso: curso.child_tag("cadeira"))
        """
        child = Element(name, self)
        if text:
            child.set_text(text)
        if attributes:
            for attribute_name, value in attributes.items():
                child.attributes.set(attribute_name, value)
        if init is not None:
            init(child)
        return child

    # Traversal

    def visit(self, visitor: Visitor) -> None:
        """Depth-first pre-order traversal.

        ``visitor`` returning :attr:`TraversalDecision.PRUNE` (or ``False``)
        skips the children of the element it was called with; any other
        return value (including None and ``True``) continues the descent.
        """
        decision = visitor(self)
        if decision is TraversalDecision.PRUNE or decision is False:
            return
        for child in tuple(self._children):
            child.visit(visitor)

    def iter(self) -> Iterator["Element"]:
        """Iterate over this element and its descendants in pre-order."""
        yield self
        for child in tuple(self._children):
            yield from child.iter()

    def find_descendants_by_name(self, name: str) -> List["Element"]:
        """Find all descendants (self excluded) named ``name``, in pre-order."""
        results: List[Element] = []
        for child in self._children:
            if child._name == name:
                results.append(child)
            results.extend(child.find_descendants_by_name(name))
        return results

    def __truediv__(self, name: str) -> List["Element"]:
        return self.find_descendants_by_name(name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {
            "name": self._name,
            "attributes": self._attributes.to_dict(),
        }
        if self._text:
            result["text"] = self._text
        if self._children:
            result["children"] = [child.to_dict() for child in self._children]
        return result

    def __repr__(self) -> str:
        return (
            f"Element(name={self._name!r}, attributes={len(self._attributes)}, "
            f"children={len(self._children)})"
        )

    # Internal helpers

    def _check_accepts_child(self, child: "Element") -> None:
        ancestor: Optional[Element] = self
        while ancestor is not None:
            if ancestor is child:
                raise StructuralError(
                    f"Cannot attach {child._name!r} under itself or its own descendant"
                )
            ancestor = ancestor.parent
        if self._text:
            raise StructuralError(
                f"Cannot add children to {self._name!r} while it has text"
            )

    def _remove_child(self, child: "Element") -> None:
        for index, candidate in enumerate(self._children):
            if candidate is child:
                del self._children[index]
                return
