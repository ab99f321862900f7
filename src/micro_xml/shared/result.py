"""Diagnostic and metric types for the micro XML document model."""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()    # Degraded input that was reported instead of raised
    ERROR = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert diagnostic entry to dictionary representation."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "details": self.details,
            "timestamp": self.timestamp,
            "correlation_id": self.correlation_id,
        }


@dataclass
class MappingMetrics:
    """Counters collected while a translator builds one tree."""

    elements_created: int = 0
    attributes_set: int = 0
    texts_set: int = 0
    transforms_applied: int = 0
    adaptations_applied: int = 0
    processing_time_ms: float = 0.0

    @property
    def elements_per_second(self) -> float:
        """Calculate elements created per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.elements_created * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary representation."""
        return {
            "elements_created": self.elements_created,
            "attributes_set": self.attributes_set,
            "texts_set": self.texts_set,
            "transforms_applied": self.transforms_applied,
            "adaptations_applied": self.adaptations_applied,
            "processing_time_ms": self.processing_time_ms,
            "elements_per_second": self.elements_per_second,
        }
