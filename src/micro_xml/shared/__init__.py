"""Shared utilities for the micro XML document model.

This package provides the configuration objects, exception hierarchy,
diagnostic types and logging helpers used by the tree, document and mapping
layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    MappingConfig,
    MicroXMLConfig,
    SerializationConfig,
)
from .errors import (
    DescriptorError,
    HookError,
    MicroXMLError,
    StructuralError,
    ValidationError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    MappingMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "MappingConfig",
    "MicroXMLConfig",
    "SerializationConfig",
    "DescriptorError",
    "HookError",
    "MicroXMLError",
    "StructuralError",
    "ValidationError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "MappingMetrics",
]
