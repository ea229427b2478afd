"""Robust HTML Cleaner tag tree.

In-memory tree built by the HTML cleaner's balancer, with condition-based
search and the structural repair pass that removes the filler nodes created
while recovering from malformed markup.
"""

__version__ = "0.1.0"
__author__ = "Robust HTML Cleaner Team"

from .shared.config import CleanerConfig, RepairConfig
from .tree import (
    AUTO_GENERATED_AND_EMPTY,
    CommentNode,
    ContentNode,
    DoctypeToken,
    RepairResult,
    StructureRepairer,
    TagNode,
    TagNodeCondition,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Tree nodes
    "TagNode",
    "ContentNode",
    "CommentNode",
    "DoctypeToken",

    # Search and repair
    "TagNodeCondition",
    "AUTO_GENERATED_AND_EMPTY",
    "StructureRepairer",
    "RepairResult",

    # Configuration
    "CleanerConfig",
    "RepairConfig",
]
