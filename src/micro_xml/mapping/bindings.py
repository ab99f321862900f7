"""Declarative bindings that tell the translator how a field maps to XML.

Each mappable type is described once, at registration time, by a
:class:`TypeDescriptor`: an optional type-level tag name and root marker plus an
ordered tuple of :class:`FieldDescriptor` entries. A field descriptor carries an
accessor and the bindings attached to that field. The translator only ever
reads descriptors; it never inspects user classes itself.

Dataclasses are described with :func:`xml_field` and :func:`xml_mapped`::

    @xml_mapped("componente")
    @dataclass
    class Componente:
        nome: str = xml_field(attribute="nome")
        peso: int = xml_field(attribute="peso")

    @xml_mapped("FUC", root=True)
    @dataclass
    class FUC:
        nome: str = xml_field(tag="nome", text=True)
        avaliacao: List[Componente] = xml_field(tag="avaliacao", nested=True)
"""

import dataclasses
import operator
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from micro_xml.shared.errors import DescriptorError
from micro_xml.tree.naming import strip_spaces

METADATA_KEY = "micro_xml"

T = TypeVar("T")


def targets(tag: Optional[str], element_name: str) -> bool:
    """Check if a binding's target tag names ``element_name`` (spaces ignored)."""
    return tag is not None and strip_spaces(tag) == element_name


@dataclass(frozen=True)
class TagBinding:
    """The field maps to a child element called ``name``."""

    name: str


@dataclass(frozen=True)
class RootMarker:
    """The field (or type) supplies the root element's name."""


@dataclass(frozen=True)
class AttributeBinding:
    """The field's value becomes an attribute of the element called ``tag``.

    The attribute is named after the field. A field with no tag binding attaches
    its attribute to whichever element is being built, whatever ``tag`` says.
    """

    tag: Optional[str] = None


@dataclass(frozen=True)
class TextBinding:
    """The field's value becomes the text of the element called ``tag``."""

    tag: str


@dataclass(frozen=True)
class NestedListBinding:
    """Each item of the field's sequence becomes a child of the element ``tag``."""

    tag: str


@dataclass(frozen=True)
class ValueTransformer:
    """Pass the field's string value through the named transformer strategy."""

    strategy: str


@dataclass(frozen=True)
class TreeAdapter:
    """Run the named adapter strategy on the element once it is fully built."""

    strategy: str


Binding = Union[
    TagBinding,
    RootMarker,
    AttributeBinding,
    TextBinding,
    NestedListBinding,
    ValueTransformer,
    TreeAdapter,
]

_BINDING_TYPES = (
    TagBinding,
    RootMarker,
    AttributeBinding,
    TextBinding,
    NestedListBinding,
    ValueTransformer,
    TreeAdapter,
)


@dataclass
class FieldDescriptor:
    """One field of a mappable type: its name, accessor and bindings."""

    name: str
    accessor: Callable[[Any], Any]
    bindings: Tuple[Binding, ...] = ()

    tag: Optional[str] = field(init=False, default=None)
    is_root: bool = field(init=False, default=False)
    attribute: Optional[AttributeBinding] = field(init=False, default=None)
    text_tag: Optional[str] = field(init=False, default=None)
    nested_tag: Optional[str] = field(init=False, default=None)
    transformer: Optional[str] = field(init=False, default=None)
    adapter: Optional[str] = field(init=False, default=None)

    def __post_init__(self) -> None:
        """Resolve the bindings into direct lookups, one binding per kind."""
        seen = set()
        for binding in self.bindings:
            if not isinstance(binding, _BINDING_TYPES):
                raise DescriptorError(
                    f"Field {self.name!r} has an unsupported binding: {binding!r}"
                )
            kind = type(binding)
            if kind in seen:
                raise DescriptorError(
                    f"Field {self.name!r} declares {kind.__name__} more than once"
                )
            seen.add(kind)

            if isinstance(binding, TagBinding):
                self.tag = binding.name
            elif isinstance(binding, RootMarker):
                self.is_root = True
            elif isinstance(binding, AttributeBinding):
                self.attribute = binding
            elif isinstance(binding, TextBinding):
                self.text_tag = binding.tag
            elif isinstance(binding, NestedListBinding):
                self.nested_tag = binding.tag
            elif isinstance(binding, ValueTransformer):
                self.transformer = binding.strategy
            else:
                self.adapter = binding.strategy

    @classmethod
    def for_attribute(cls, name: str, *bindings: Binding) -> "FieldDescriptor":
        """Describe the attribute ``name`` of an object, read with getattr."""
        return cls(name, operator.attrgetter(name), tuple(bindings))

    @property
    def is_plain(self) -> bool:
        """Check if the field carries no bindings at all."""
        return not self.bindings

    def read(self, instance: Any) -> Any:
        """Read this field's value from ``instance``."""
        return self.accessor(instance)

    def attaches_attribute_to(self, element_name: str) -> bool:
        """Check if this field contributes an attribute to ``element_name``.

        Plain fields and attribute-bound fields without a tag binding attach to
        whichever element is current; otherwise the attribute binding's target
        must equal the element name.
        """
        if self.is_plain:
            return True
        if self.attribute is None:
            return False
        if self.tag is None:
            return True
        return targets(self.attribute.tag, element_name)


@dataclass(frozen=True)
class TypeDescriptor:
    """Registration-time description of a mappable type."""

    type: type
    tag: Optional[str]
    is_root: bool
    fields: Tuple[FieldDescriptor, ...]

    def root_fields(self) -> Tuple[FieldDescriptor, ...]:
        """Fields carrying both a root marker and a tag binding."""
        return tuple(f for f in self.fields if f.is_root and f.tag is not None)

    def field(self, name: str) -> FieldDescriptor:
        """Look up a field descriptor by name."""
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        raise KeyError(name)


class DescriptorRegistry:
    """Registry of type descriptors, looked up along the class MRO."""

    def __init__(self) -> None:
        self._descriptors: Dict[type, TypeDescriptor] = {}

    def register(self, descriptor: TypeDescriptor) -> None:
        """Register ``descriptor`` for its type, replacing any previous one."""
        self._descriptors[descriptor.type] = descriptor

    def describe(self, cls: type) -> TypeDescriptor:
        """Return the descriptor for ``cls`` or its nearest registered base.

        Raises:
            DescriptorError: If neither ``cls`` nor any base class is registered
        """
        for klass in cls.__mro__:
            descriptor = self._descriptors.get(klass)
            if descriptor is not None:
                return descriptor
        raise DescriptorError(f"No XML describer registered for {cls.__name__}")

    def __contains__(self, cls: object) -> bool:
        return isinstance(cls, type) and any(
            klass in self._descriptors for klass in cls.__mro__
        )

    def __len__(self) -> int:
        return len(self._descriptors)


# Global descriptor registry instance
default_descriptors = DescriptorRegistry()


def xml_field(
    *bindings: Binding,
    tag: Optional[str] = None,
    root: bool = False,
    attribute: Union[str, bool, None] = None,
    text: Union[str, bool, None] = None,
    nested: Union[str, bool, None] = None,
    transformer: Optional[str] = None,
    adapter: Optional[str] = None,
    **field_kwargs: Any,
) -> Any:
    """Declare a dataclass field together with its XML bindings.

    Bindings can be passed positionally as binding objects, through the
    keyword shortcuts, or both. For ``text`` and ``nested``, ``True`` means
    "the element named by ``tag``". For ``attribute``, ``True`` means "the
    element named by ``tag``, or the current element when there is no tag".
    Remaining keyword arguments go to :func:`dataclasses.field`.

    Raises:
        DescriptorError: If ``text=True`` or ``nested=True`` is used without a tag
    """
    resolved = list(bindings)
    if tag is not None:
        resolved.append(TagBinding(tag))
    if root:
        resolved.append(RootMarker())
    if attribute is not None and attribute is not False:
        resolved.append(AttributeBinding(tag if attribute is True else attribute))
    if text is not None and text is not False:
        resolved.append(TextBinding(_own_tag(tag, text, "text")))
    if nested is not None and nested is not False:
        resolved.append(NestedListBinding(_own_tag(tag, nested, "nested")))
    if transformer is not None:
        resolved.append(ValueTransformer(transformer))
    if adapter is not None:
        resolved.append(TreeAdapter(adapter))

    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[METADATA_KEY] = tuple(resolved)
    return dataclasses.field(metadata=metadata, **field_kwargs)


def _own_tag(tag: Optional[str], value: Union[str, bool], kind: str) -> str:
    if value is True:
        if tag is None:
            raise DescriptorError(f"{kind}=True requires a tag binding on the same field")
        return tag
    return value  # type: ignore[return-value]


def describe_dataclass(
    cls: type, tag: Optional[str] = None, root: bool = False
) -> TypeDescriptor:
    """Build a type descriptor from a dataclass and its field metadata.

    Fields declared without :func:`xml_field` become plain fields.
    """
    if not dataclasses.is_dataclass(cls):
        raise DescriptorError(f"{cls.__name__} is not a dataclass")
    descriptors = tuple(
        FieldDescriptor(
            f.name,
            operator.attrgetter(f.name),
            tuple(f.metadata.get(METADATA_KEY, ())),
        )
        for f in dataclasses.fields(cls)
    )
    return TypeDescriptor(type=cls, tag=tag, is_root=root, fields=descriptors)


def register_type(
    cls: type,
    fields: Optional[Sequence[FieldDescriptor]] = None,
    tag: Optional[str] = None,
    root: bool = False,
    registry: Optional[DescriptorRegistry] = None,
) -> TypeDescriptor:
    """Register a describer for ``cls``.

    Args:
        cls: The mappable type
        fields: Explicit field descriptors; derived from the dataclass fields
            when omitted
        tag: Type-level tag name
        root: Whether the type itself is the root binding
        registry: Target registry (the global one by default)

    Returns:
        The registered descriptor
    """
    if fields is None:
        descriptor = describe_dataclass(cls, tag, root)
    else:
        descriptor = TypeDescriptor(type=cls, tag=tag, is_root=root, fields=tuple(fields))
    (registry or default_descriptors).register(descriptor)
    return descriptor


def xml_mapped(
    tag: Optional[str] = None,
    *,
    root: bool = False,
    registry: Optional[DescriptorRegistry] = None,
) -> Callable[[Type[T]], Type[T]]:
    """Class decorator registering a dataclass as a mappable type.

    Apply it on top of ``@dataclass``.
    """
    def decorator(cls: Type[T]) -> Type[T]:
        register_type(cls, tag=tag, root=root, registry=registry)
        return cls

    return decorator
