"""Tag tree representation and structural repair.

Key Components:
    TagNode: Element node with attributes, children and repair flags
    AttributeStore: Ordered, normalizing attribute mapping
    TagNodeCondition: Base class of the predicates used by tree searches
    StructureRepairer: Removes filler nodes and compacts pruned ones
"""

from .attributes import AttributeStore
from .conditions import (
    AUTO_GENERATED_AND_EMPTY,
    PRUNED,
    TagAllCondition,
    TagNodeAttExistsCondition,
    TagNodeAttNameValueRegexCondition,
    TagNodeAttValueCondition,
    TagNodeAutoGeneratedCondition,
    TagNodeCondition,
    TagNodeNameCondition,
    TagNodePrunedCondition,
)
from .nodes import CommentNode, ContentNode, DoctypeToken, ProxyTagNode, TagNode
from .repair import (
    RepairResult,
    StructureRepair,
    StructureRepairer,
    remove_auto_generated_empty,
)
from .traversal import find_element, get_element_list, iter_elements

__all__ = [
    "AttributeStore",
    "AUTO_GENERATED_AND_EMPTY",
    "PRUNED",
    "TagAllCondition",
    "TagNodeAttExistsCondition",
    "TagNodeAttNameValueRegexCondition",
    "TagNodeAttValueCondition",
    "TagNodeAutoGeneratedCondition",
    "TagNodeCondition",
    "TagNodeNameCondition",
    "TagNodePrunedCondition",
    "CommentNode",
    "ContentNode",
    "DoctypeToken",
    "ProxyTagNode",
    "TagNode",
    "RepairResult",
    "StructureRepair",
    "StructureRepairer",
    "remove_auto_generated_empty",
    "find_element",
    "get_element_list",
    "iter_elements",
]
