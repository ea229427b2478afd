"""Configuration classes for tag tree repair.

This module provides configuration objects for the structural repair pass and
the settings shared by every cleaning component.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

_COMPONENT_FIELDS = ("repair", "global_")


@dataclass
class RepairConfig:
    """Configuration for the structural repair pass."""

    enable_structure_repair: bool = True   # Remove empty auto-generated nodes
    relocate_queued_items: bool = True
    remove_pruned_nodes: bool = True
    max_tree_depth: int = 1000

    def __post_init__(self) -> None:
        """Validate repair configuration."""
        if self.max_tree_depth <= 0:
            raise ValueError("max_tree_depth must be > 0")


@dataclass
class GlobalConfig:
    """Settings that apply across all cleaning components."""

    logging_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_correlation_tracking: bool = True
    collect_diagnostics: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            raise ValueError(f"logging_level must be one of {valid_levels}")


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
class CleanerConfig:
    """Immutable configuration for tag tree cleaning.

    Frozen so that one instance can be shared by independent cleaning
    operations without any of them mutating it.
    """

    repair: RepairConfig = field(default_factory=RepairConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    version: str = "1.0.0"
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete cleaner configuration."""
        for component in _COMPONENT_FIELDS:
            try:
                getattr(self, component).__post_init__()
            except ValueError as e:
                raise ConfigValidationError(str(e), field_name=component) from e

        if (
            not self.repair.enable_structure_repair
            and not self.repair.relocate_queued_items
            and not self.repair.remove_pruned_nodes
        ):
            raise ConfigValidationError(
                "All repair steps are disabled",
                field_name="repair",
                suggestions=[
                    "Enable repair.enable_structure_repair",
                    "Skip the repair pass instead of configuring it away",
                ],
            )

    def override(self, **kwargs: Any) -> "CleanerConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; ``component__field`` addresses a
                field of a component configuration

        Returns:
            New CleanerConfig instance with overrides applied

        Example:
            >>> config = CleanerConfig()
            >>> config.override(repair__remove_pruned_nodes=False).repair.remove_pruned_nodes
            False
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            # "global___x" must split after "global_", not after "global"
            component = next(
                (name for name in _COMPONENT_FIELDS if key.startswith(name + "__")), None
            )
            if component is not None:
                field_name = key[len(component) + 2:]
                nested_overrides.setdefault(component, {})[field_name] = value
            elif "__" in key:
                unknown = key.split("__", 1)[0]
                raise ConfigValidationError(
                    f"Unknown configuration component: {unknown}",
                    field_name=unknown,
                    suggestions=list(_COMPONENT_FIELDS),
                )
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in _COMPONENT_FIELDS and isinstance(value, dict):
                try:
                    new_fields[key] = replace(getattr(self, key), **value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for field_name in self.__dataclass_fields__:
            value = getattr(self, field_name)
            if hasattr(value, "__dataclass_fields__"):
                value = {
                    name: getattr(value, name) for name in value.__dataclass_fields__
                }
            result[field_name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CleanerConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected rather than ignored.
        """
        field_values: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in cls.__dataclass_fields__:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}", field_name=key
                )
            if key in _COMPONENT_FIELDS:
                component_class = RepairConfig if key == "repair" else GlobalConfig
                try:
                    value = component_class(**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            field_values[key] = value

        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "CleanerConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def conservative(cls) -> "CleanerConfig":
        """Preset that only removes empty auto-generated nodes."""
        return cls(
            repair=RepairConfig(
                enable_structure_repair=True,
                relocate_queued_items=False,
                remove_pruned_nodes=False,
            ),
            name="conservative",
            description="Removes filler nodes and leaves everything else linked",
        )

    @classmethod
    def aggressive(cls) -> "CleanerConfig":
        """Preset that runs every repair step and collects debug diagnostics."""
        return cls(
            repair=RepairConfig(
                enable_structure_repair=True,
                relocate_queued_items=True,
                remove_pruned_nodes=True,
            ),
            global_=GlobalConfig(logging_level="DEBUG"),
            name="aggressive",
            description="Relocates staged content and compacts pruned nodes",
        )
