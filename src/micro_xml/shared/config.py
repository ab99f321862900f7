"""Configuration classes for the micro XML document model.

This module provides validated configuration objects for serialization and for
the object-to-tree mapping engine, plus a top-level container that can be
overridden field by field and round-tripped through JSON.
"""

import json
from dataclasses import dataclass, field, fields, is_dataclass, replace
from typing import Any, Dict, List, Optional

_LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_COMPONENTS = ("serialization", "mapping")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class SerializationConfig:
    """Settings written into the XML declaration of a document."""

    version: float = 1.0
    encoding: str = "UTF-8"

    def __post_init__(self) -> None:
        """Validate serialization configuration."""
        if isinstance(self.version, bool) or not isinstance(self.version, (int, float)):
            raise ConfigValidationError(
                "version must be a number", field_name="version"
            )
        if self.version <= 0:
            raise ConfigValidationError("version must be > 0", field_name="version")
        if not isinstance(self.encoding, str) or not self.encoding.strip():
            raise ConfigValidationError(
                "encoding cannot be empty or blank",
                field_name="encoding",
                suggestions=["Use 'UTF-8'"],
            )


@dataclass(frozen=True)
class MappingConfig:
    """Switches for the object-to-tree mapping engine."""

    skip_none_values: bool = True   # None-valued fields produce no attribute/text
    apply_transformers: bool = True
    apply_adapters: bool = True

    def __post_init__(self) -> None:
        """Validate mapping configuration."""
        for flag in fields(self):
            if not isinstance(getattr(self, flag.name), bool):
                raise ConfigValidationError(
                    f"{flag.name} must be a boolean", field_name=flag.name
                )


@dataclass(frozen=True)
class MicroXMLConfig:
    """Complete configuration shared by documents and translators."""

    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    mapping: MappingConfig = field(default_factory=MappingConfig)
    logging_level: str = "INFO"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        if self.logging_level not in _LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {list(_LOGGING_LEVELS)}",
                field_name="logging_level",
            )

    def override(self, **kwargs: Any) -> "MicroXMLConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Field overrides; nested fields use ``component__field``

        Returns:
            New MicroXMLConfig instance with overrides applied

        Example:
            >>> config = MicroXMLConfig().override(
            ...     serialization__encoding="ISO-8859-1",
            ...     mapping__apply_adapters=False,
            ... )
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of {list(_COMPONENTS)}"],
                    )
                nested.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        for component, values in nested.items():
            top_level[component] = replace(getattr(self, component), **values)

        return replace(self, **top_level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _to_plain(obj: Any) -> Any:
            if is_dataclass(obj):
                return {f.name: _to_plain(getattr(obj, f.name)) for f in fields(obj)}
            return obj

        return _to_plain(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MicroXMLConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected rather than silently dropped.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {sorted(unknown)}",
                suggestions=[f"Valid keys are {sorted(known)}"],
            )

        values = dict(data)
        if "serialization" in values:
            values["serialization"] = SerializationConfig(**values["serialization"])
        if "mapping" in values:
            values["mapping"] = MappingConfig(**values["mapping"])
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "MicroXMLConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))
