"""Shared utilities for tag tree cleaning.

This module provides configuration objects, diagnostic result types and
logging helpers used by every cleaning component.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    RepairMetrics,
)
from .config import (
    CleanerConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    RepairConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "RepairMetrics",
    "CleanerConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "RepairConfig",
    "CorrelationLogger",
    "get_logger",
]
