"""Diagnostic and metric types reported by tree repair operations."""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()    # Something was left in place that may need attention
    ERROR = auto()      # A step failed but the tree is still usable
    CRITICAL = auto()   # The pass aborted; the tree may be partially repaired


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    node_name: Optional[str] = None
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
        """Convert entry to a plain dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "node_name": self.node_name,
            "details": dict(self.details) if self.details else {},
            "correlation_id": self.correlation_id,
        }


@dataclass
class RepairMetrics:
    """Counters and timing for one repair run."""

    processing_time_ms: float = 0.0
    nodes_visited: int = 0
    nodes_removed: int = 0
    items_relocated: int = 0
    nodes_compacted: int = 0

    @property
    def removal_rate(self) -> float:
        """Fraction of visited nodes that were removed."""
        if self.nodes_visited == 0:
            return 0.0
        return self.nodes_removed / self.nodes_visited

    @property
    def nodes_per_second(self) -> float:
        """Visited nodes per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.nodes_visited * 1000.0) / self.processing_time_ms
