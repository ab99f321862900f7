"""Generic object-graph to element-tree mapping.

Key Components:
    Binding types: TagBinding, RootMarker, AttributeBinding, TextBinding,
        NestedListBinding, ValueTransformer, TreeAdapter
    FieldDescriptor / TypeDescriptor: Registration-time describers
    xml_field / xml_mapped: Declaration helpers for dataclasses
    HookRegistry: Named transformer and adapter factories
    Translator: The mapping engine
"""

from .bindings import (
    AttributeBinding,
    Binding,
    DescriptorRegistry,
    FieldDescriptor,
    NestedListBinding,
    RootMarker,
    TagBinding,
    TextBinding,
    TreeAdapter,
    TypeDescriptor,
    ValueTransformer,
    default_descriptors,
    describe_dataclass,
    register_type,
    xml_field,
    xml_mapped,
)
from .hooks import (
    AddPercentage,
    Adapter,
    DetachAdapter,
    HookRegistry,
    Transformer,
    default_hooks,
    register_adapter,
    register_transformer,
)
from .translator import Translator

__all__ = [
    "AttributeBinding",
    "Binding",
    "DescriptorRegistry",
    "FieldDescriptor",
    "NestedListBinding",
    "RootMarker",
    "TagBinding",
    "TextBinding",
    "TreeAdapter",
    "TypeDescriptor",
    "ValueTransformer",
    "default_descriptors",
    "describe_dataclass",
    "register_type",
    "xml_field",
    "xml_mapped",
    "AddPercentage",
    "Adapter",
    "DetachAdapter",
    "HookRegistry",
    "Transformer",
    "default_hooks",
    "register_adapter",
    "register_transformer",
    "Translator",
]
