"""Object-to-tree mapping engine.

The :class:`Translator` walks an object graph using only the registered type
descriptors and builds the equivalent :class:`~micro_xml.tree.Element` tree.

For every element it builds from an object it proceeds in a fixed order:

1. attributes contributed by the object's fields,
2. text, if a text binding targets the element (text wins: nothing else is
   nested under it),
3. otherwise one child element per tag-bound field (root and nested-item
   elements only), then one child per item of every nested-list binding
   targeting the element,
4. the adapter of the originating field, once the subtree is complete.
"""

import time
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Tuple

from micro_xml.mapping.bindings import (
    DescriptorRegistry,
    FieldDescriptor,
    TypeDescriptor,
    default_descriptors,
    targets,
)
from micro_xml.mapping.hooks import HookRegistry, default_hooks
from micro_xml.shared import (
    MappingMetrics,
    MicroXMLConfig,
    MicroXMLError,
    StructuralError,
    get_logger,
)
from micro_xml.tree import Document, Element

MS_PER_SECOND = 1000


class Translator:
    """Translate one source object into an element tree or a document.

    Args:
        source: Object whose type (and nested item types) have registered
            describers
        config: Optional configuration; defaults to :class:`MicroXMLConfig`
        descriptors: Descriptor registry; the global one by default
        hooks: Hook registry; the global one by default
        correlation_id: Overrides ``config.correlation_id`` when given
    """

    def __init__(
        self,
        source: Any,
        config: Optional[MicroXMLConfig] = None,
        descriptors: Optional[DescriptorRegistry] = None,
        hooks: Optional[HookRegistry] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.source = source
        self.config = config or MicroXMLConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.descriptors = descriptors or default_descriptors
        self.hooks = hooks or default_hooks
        self.logger = get_logger(__name__, self.correlation_id, "translator")
        self.metrics = MappingMetrics()

    def create_document(self) -> Document:
        """Build the tree and wrap it in a document using the configured declaration."""
        serialization = self.config.serialization
        return Document(
            self.create_element(),
            version=serialization.version,
            encoding=serialization.encoding,
            correlation_id=self.correlation_id,
        )

    def create_element(self) -> Element:
        """Build the tree for :attr:`source` and return its root element."""
        return self.build_element(self.source)

    def build_element(self, obj: Any, parent: Optional[Element] = None) -> Element:
        """Build the element for ``obj``.

        Without ``parent`` the element name comes from the root binding (on the
        type, or on exactly one field). With ``parent`` it comes from the type's
        own tag binding and the element is appended under ``parent``.

        Raises:
            DescriptorError: If a type in the graph has no describer
            StructuralError: If no root binding exists, several fields claim the
                root, or a resolved tag name is blank
            ValidationError: If a tag name or attribute is invalid
        """
        self.metrics = MappingMetrics()
        start_time = time.time()
        self.logger.info(
            "Starting object mapping",
            extra={
                "source_type": type(obj).__name__,
                "has_parent": parent is not None,
            },
        )

        try:
            if parent is None:
                element = self._build_root(obj)
            else:
                element = self._build_nested_item(obj, parent)
        except MicroXMLError:
            self.logger.exception(
                "Object mapping failed",
                extra={"source_type": type(obj).__name__},
            )
            raise

        self.metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        self.logger.info("Object mapping completed", extra=self.metrics.to_dict())
        return element

    # Element construction

    def _build_root(self, obj: Any) -> Element:
        descriptor = self.descriptors.describe(type(obj))
        name, origin = self._resolve_root(descriptor)

        element = self._create(name, None)
        self._populate(obj, descriptor, element)
        if origin is not None:
            self._adapt(origin, element)
        return element

    def _resolve_root(
        self, descriptor: TypeDescriptor
    ) -> Tuple[str, Optional[FieldDescriptor]]:
        if descriptor.is_root and descriptor.tag is not None:
            return descriptor.tag, None

        root_fields = descriptor.root_fields()
        if not root_fields:
            raise StructuralError(
                f"No root binding found on {descriptor.type.__name__}; mark the type "
                "or exactly one tag-bound field as root"
            )
        if len(root_fields) > 1:
            names = ", ".join(f.name for f in root_fields)
            raise StructuralError(
                f"Ambiguous root binding on {descriptor.type.__name__}: {names}"
            )
        origin = root_fields[0]
        return origin.tag, origin  # type: ignore[return-value]

    def _build_nested_item(self, item: Any, parent: Element) -> Element:
        descriptor = self.descriptors.describe(type(item))
        element = self._create(descriptor.tag, parent)
        self._populate(item, descriptor, element)
        return element

    def _build_field_child(
        self,
        obj: Any,
        descriptor: TypeDescriptor,
        field: FieldDescriptor,
        parent: Element,
    ) -> Element:
        element = self._create(field.tag, parent)
        self._apply_attributes(obj, descriptor, element)
        if not self._apply_text(obj, descriptor, element):
            self._build_nested(obj, descriptor, element)
        self._adapt(field, element)
        return element

    def _populate(self, obj: Any, descriptor: TypeDescriptor, element: Element) -> None:
        self._apply_attributes(obj, descriptor, element)
        if self._apply_text(obj, descriptor, element):
            return

        for field in descriptor.fields:
            if field.tag is not None and not targets(field.tag, element.name):
                self._build_field_child(obj, descriptor, field, element)
        self._build_nested(obj, descriptor, element)

    def _create(self, name: Optional[str], parent: Optional[Element]) -> Element:
        if name is None or not name.strip():
            raise StructuralError("Resolved tag name cannot be empty or blank")
        element = Element(name, parent)
        self.metrics.elements_created += 1
        self.logger.debug(
            "Element created",
            extra={"tag": element.name, "depth": element.depth},
        )
        return element

    # Field contributions

    def _apply_attributes(
        self, obj: Any, descriptor: TypeDescriptor, element: Element
    ) -> None:
        for field in descriptor.fields:
            if not field.attaches_attribute_to(element.name):
                continue
            value = field.read(obj)
            if value is None and self.config.mapping.skip_none_values:
                continue
            element.attributes.set(field.name, self._stringify(field, value))
            self.metrics.attributes_set += 1

    def _apply_text(self, obj: Any, descriptor: TypeDescriptor, element: Element) -> bool:
        """Set text from the first text binding targeting ``element``.

        Returns True when such a binding exists, meaning nothing is nested.
        """
        for field in descriptor.fields:
            if not targets(field.text_tag, element.name):
                continue
            value = field.read(obj)
            if value is not None or not self.config.mapping.skip_none_values:
                element.set_text(self._stringify(field, value))
                self.metrics.texts_set += 1
            return True
        return False

    def _build_nested(self, obj: Any, descriptor: TypeDescriptor, element: Element) -> None:
        for field in descriptor.fields:
            if not targets(field.nested_tag, element.name):
                continue
            items = field.read(obj)
            if items is None:
                continue
            if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Iterable):
                raise StructuralError(
                    f"Nested list field {field.name!r} must hold a sequence, "
                    f"got {type(items).__name__}"
                )
            for item in items:
                if item is not None:
                    self._build_nested_item(item, element)

    def _stringify(self, field: FieldDescriptor, value: Any) -> str:
        rendered = str(value)
        if field.transformer is not None and self.config.mapping.apply_transformers:
            rendered = self.hooks.create_transformer(field.transformer).transform(rendered)
            self.metrics.transforms_applied += 1
        return rendered

    def _adapt(self, field: FieldDescriptor, element: Element) -> None:
        if field.adapter is None or not self.config.mapping.apply_adapters:
            return
        self.hooks.create_adapter(field.adapter).adapt(element)
        self.metrics.adaptations_applied += 1
        self.logger.debug(
            "Adapter applied", extra={"adapter": field.adapter, "field": field.name}
        )
