"""Value transformers and tree adapters invoked by the mapping engine.

Bindings refer to hooks by strategy name only. A :class:`HookRegistry` maps
those names to factories; the translator asks the registry for a fresh
instance each time a hook is needed.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, List

from micro_xml.shared.errors import HookError
from micro_xml.tree.element import Element


class Transformer(ABC):
    """Rewrites the string form of a field value before it is stored."""

    @abstractmethod
    def transform(self, value: str) -> str:
        """Return the transformed value."""


class Adapter(ABC):
    """Post-processes an element once it and its subtree are fully built.

    Adapters may mutate the element freely, including detaching it.
    """

    @abstractmethod
    def adapt(self, element: Element) -> None:
        """Adapt ``element`` in place."""


class AddPercentage(Transformer):
    """Appends a ``%`` sign to the value."""

    def transform(self, value: str) -> str:
        return f"{value}%"


class DetachAdapter(Adapter):
    """Removes the element, promoting its children to its parent."""

    def adapt(self, element: Element) -> None:
        element.detach_preserving_subtree()


TransformerFactory = Callable[[], Transformer]
AdapterFactory = Callable[[], Adapter]


class HookRegistry:
    """Registry of transformer and adapter factories keyed by strategy name."""

    def __init__(self) -> None:
        self._transformers: Dict[str, TransformerFactory] = {}
        self._adapters: Dict[str, AdapterFactory] = {}

    def register_transformer(self, name: str, factory: TransformerFactory) -> None:
        """Register a transformer factory under ``name``, replacing any previous one."""
        if not name:
            raise ValueError("Transformer strategy name cannot be empty")
        self._transformers[name] = factory

    def register_adapter(self, name: str, factory: AdapterFactory) -> None:
        """Register an adapter factory under ``name``, replacing any previous one."""
        if not name:
            raise ValueError("Adapter strategy name cannot be empty")
        self._adapters[name] = factory

    def create_transformer(self, name: str) -> Transformer:
        """Instantiate the transformer registered as ``name``.

        Raises:
            HookError: If no transformer is registered under ``name``
        """
        try:
            factory = self._transformers[name]
        except KeyError:
            raise HookError(f"Unknown transformer strategy: {name!r}", name) from None
        return factory()

    def create_adapter(self, name: str) -> Adapter:
        """Instantiate the adapter registered as ``name``.

        Raises:
            HookError: If no adapter is registered under ``name``
        """
        try:
            factory = self._adapters[name]
        except KeyError:
            raise HookError(f"Unknown adapter strategy: {name!r}", name) from None
        return factory()

    def transformer_names(self) -> List[str]:
        """List registered transformer strategy names."""
        return list(self._transformers)

    def adapter_names(self) -> List[str]:
        """List registered adapter strategy names."""
        return list(self._adapters)

    def copy(self) -> "HookRegistry":
        """Return an independent registry with the same registrations."""
        duplicate = HookRegistry()
        duplicate._transformers.update(self._transformers)
        duplicate._adapters.update(self._adapters)
        return duplicate


def _build_default_registry() -> HookRegistry:
    registry = HookRegistry()
    registry.register_transformer("add_percentage", AddPercentage)
    registry.register_adapter("detach", DetachAdapter)
    return registry


# Global hook registry instance
default_hooks = _build_default_registry()


def register_transformer(name: str, factory: TransformerFactory) -> None:
    """Register a transformer factory in the global registry."""
    default_hooks.register_transformer(name, factory)


def register_adapter(name: str, factory: AdapterFactory) -> None:
    """Register an adapter factory in the global registry."""
    default_hooks.register_adapter(name, factory)
