"""Structural repair of balanced tag trees.

The balancer synthesizes tags while recovering from unbalanced or
overlapping markup and flags them ``auto_generated``. Many of those end up
holding nothing, e.g. the reopened ``<i>`` in ``<b><i>foo</b></i>``. This
module removes such filler, moves staged content out of containers that
cannot hold it, and compacts nodes that were marked pruned.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from robust_html_cleaner.shared import (
    CleanerConfig,
    DiagnosticEntry,
    DiagnosticSeverity,
    RepairMetrics,
    get_logger,
)

from .conditions import AUTO_GENERATED_AND_EMPTY, PRUNED, TagNodeCondition
from .nodes import TagNode

_COMPONENT = "structure_repairer"


@dataclass
class StructureRepair:
    """Record of a single change made to the tree."""

    repair_type: str
    description: str
    node_name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate repair information."""
        if not self.repair_type:
            raise ValueError("Repair type cannot be empty")
        if not self.description:
            raise ValueError("Repair description cannot be empty")


@dataclass
class RepairResult:
    """Outcome of one repair run over a tree."""

    success: bool = True
    removed_nodes: int = 0
    relocated_items: int = 0
    compacted_nodes: int = 0
    repairs: List[StructureRepair] = field(default_factory=list)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    metrics: RepairMetrics = field(default_factory=RepairMetrics)
    correlation_id: Optional[str] = None

    @property
    def repair_count(self) -> int:
        return len(self.repairs)

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        node_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=_COMPONENT,
                node_name=node_name,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_errors(self) -> bool:
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )

    def summary(self) -> Dict[str, Any]:
        """Summary statistics for the run."""
        repair_types: Dict[str, int] = {}
        for repair in self.repairs:
            repair_types[repair.repair_type] = repair_types.get(repair.repair_type, 0) + 1

        return {
            "success": self.success,
            "removed_nodes": self.removed_nodes,
            "relocated_items": self.relocated_items,
            "compacted_nodes": self.compacted_nodes,
            "repair_types": repair_types,
            "diagnostic_count": len(self.diagnostics),
            "has_errors": self.has_errors(),
            "processing_time_ms": self.metrics.processing_time_ms,
            "nodes_visited": self.metrics.nodes_visited,
        }


class StructureRepairer:
    """Applies structural repairs to a tag tree.

    A repairer holds only its configuration and logger, so one instance may
    be reused for many trees as long as calls are not interleaved.
    """

    def __init__(
        self,
        config: Optional[CleanerConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize repairer.

        Args:
            config: Cleaner configuration; defaults are used when omitted
            correlation_id: Optional correlation ID of the document being cleaned
        """
        self.config = config or CleanerConfig()
        self.correlation_id = (
            correlation_id if self.config.global_.enable_correlation_tracking else None
        )
        self.logger = get_logger(
            __name__,
            self.correlation_id,
            _COMPONENT,
            level=self.config.global_.logging_level,
        )
        self._result: Optional[RepairResult] = None

    def repair(self, root: TagNode) -> RepairResult:
        """Run every configured repair step on the tree under ``root``.

        Steps run in order: staged item relocation, pruned node compaction,
        removal of empty auto-generated nodes. The root itself is never
        removed. Failures are reported through the result instead of raised.
        """
        start_time = time.time()
        result = RepairResult(correlation_id=self.correlation_id)
        self._result = result
        repair_config = self.config.repair

        self.logger.info("Starting structure repair", extra={"root": root.name})

        try:
            if repair_config.relocate_queued_items:
                result.relocated_items = self.relocate_queued_items(root)
            if repair_config.remove_pruned_nodes:
                result.compacted_nodes = self.remove_pruned(root)
            if repair_config.enable_structure_repair:
                result.removed_nodes = self.remove_auto_generated_empty(root)

            self.logger.info(
                "Structure repair completed",
                extra={
                    "removed_nodes": result.removed_nodes,
                    "relocated_items": result.relocated_items,
                    "compacted_nodes": result.compacted_nodes,
                },
            )
        except Exception as e:
            self.logger.exception("Structure repair failed")
            result.success = False
            result.add_diagnostic(
                DiagnosticSeverity.CRITICAL,
                f"Structure repair failed: {e}",
                node_name=root.name,
                details={"exception_type": type(e).__name__},
            )
        finally:
            self._result = None

        result.metrics.nodes_removed = result.removed_nodes
        result.metrics.items_relocated = result.relocated_items
        result.metrics.nodes_compacted = result.compacted_nodes
        result.metrics.processing_time_ms = (time.time() - start_time) * 1000
        return result

    def remove_auto_generated_empty(self, root: TagNode) -> int:
        """Remove every empty auto-generated descendant of ``root``.

        Nodes are tested after all of their descendants, so an auto-generated
        node emptied by the removal of its own filler children is removed in
        the same call.

        Returns:
            Number of nodes removed.
        """
        removed = 0
        for parent, child in reversed(self._collect_links(root)):
            if AUTO_GENERATED_AND_EMPTY.satisfy(child) and parent.remove_child(child):
                removed += 1
                self.logger.debug(
                    "Removed empty auto-generated node",
                    extra={"node": child.name, "parent": parent.name},
                )
                self._record(
                    "auto_generated_removal",
                    f"Removed empty auto-generated <{child.name}> from <{parent.name}>",
                    child.name,
                )
        return removed

    def relocate_queued_items(self, root: TagNode) -> int:
        """Move staged items in front of the node that staged them.

        Items keep their staging order. A root node has nowhere to move its
        items, so its queue is left untouched and a warning is recorded. A
        node whose ``parent`` no longer lists it among its children keeps its
        queue as well, and the inconsistency is recorded as an error.

        Returns:
            Number of items moved.
        """
        moved = 0
        for node in [root, *root.iter_descendants()]:
            if not node.items_to_move:
                continue
            parent = node.parent
            if parent is None:
                self.logger.warning(
                    "Root node has items queued for moving",
                    extra={"node": node.name, "item_count": len(node.items_to_move)},
                )
                self._diagnose(
                    DiagnosticSeverity.WARNING,
                    "Items queued on the root node cannot be relocated",
                    node.name,
                    {"item_count": len(node.items_to_move)},
                )
                continue
            if not parent.has_child(node):
                self.logger.error(
                    "Node with queued items is detached from its parent",
                    extra={"node": node.name, "parent": parent.name},
                    exc_info=False,
                )
                self._diagnose(
                    DiagnosticSeverity.ERROR,
                    "Queued items not relocated; node is not a child of its parent",
                    node.name,
                    {"parent": parent.name, "item_count": len(node.items_to_move)},
                )
                continue

            for item in node.items_to_move:
                if isinstance(item, TagNode) and item.parent is not None:
                    item.remove_from_tree()
                if parent.insert_child_before(node, item):
                    moved += 1
            self._record(
                "item_relocation",
                f"Moved {len(node.items_to_move)} item(s) out of <{node.name}>",
                node.name,
            )
            node.items_to_move = None
        return moved

    def mark_pruned(self, root: TagNode, conditions: Iterable[TagNodeCondition]) -> int:
        """Flag every descendant matching any of ``conditions`` as pruned.

        Returns:
            Number of nodes newly marked.
        """
        conditions = list(conditions)
        marked = 0
        for node in root.iter_descendants():
            if not node.pruned and any(cond.satisfy(node) for cond in conditions):
                node.pruned = True
                marked += 1
        return marked

    def remove_pruned(self, root: TagNode) -> int:
        """Unlink every pruned descendant of ``root``.

        Returns:
            Number of pruned nodes unlinked; descendants of an unlinked
            pruned node are not searched.
        """
        removed = 0
        for parent, child in self._collect_links(root, skip=PRUNED):
            if parent.remove_child(child):
                removed += 1
                self._record(
                    "pruned_compaction", f"Unlinked pruned <{child.name}>", child.name
                )
        return removed

    def _collect_links(
        self, root: TagNode, skip: Optional[TagNodeCondition] = None
    ) -> List[Tuple[TagNode, TagNode]]:
        """Parent/child pairs below ``root``, each parent listed before its children.

        With ``skip`` given, only links to matching children are returned and
        their subtrees are not entered.
        """
        max_depth = self.config.repair.max_tree_depth
        links: List[Tuple[TagNode, TagNode]] = []
        stack: List[Tuple[TagNode, int]] = [(root, 0)]
        visited = 0

        while stack:
            node, depth = stack.pop()
            if depth >= max_depth:
                self._diagnose(
                    DiagnosticSeverity.WARNING,
                    f"Maximum tree depth {max_depth} reached; subtree not repaired",
                    node.name,
                )
                continue
            for child in node.get_child_tags():
                visited += 1
                if skip is not None:
                    if skip.satisfy(child):
                        links.append((node, child))
                        continue
                else:
                    links.append((node, child))
                stack.append((child, depth + 1))

        if self._result is not None:
            self._result.metrics.nodes_visited += visited
        return links

    def _record(self, repair_type: str, description: str, node_name: Optional[str]) -> None:
        if self._result is not None:
            self._result.repairs.append(StructureRepair(repair_type, description, node_name))

    def _diagnose(
        self,
        severity: DiagnosticSeverity,
        message: str,
        node_name: Optional[str],
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        if self._result is not None and self.config.global_.collect_diagnostics:
            self._result.add_diagnostic(severity, message, node_name, details)


def remove_auto_generated_empty(root: TagNode) -> int:
    """Remove empty auto-generated nodes below ``root`` with default settings."""
    return StructureRepairer().remove_auto_generated_empty(root)
