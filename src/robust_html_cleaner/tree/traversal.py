"""Depth-first search over tag node children.

The receiver node is never tested, only its descendants. Children are visited
in document order; with ``recursive`` set, a child's subtree is searched
before moving on to the next sibling. Non-tag children (text, comments) are
skipped.

The walk keeps an explicit stack, so tree depth is bounded by memory rather
than by the interpreter's recursion limit.
"""

from typing import TYPE_CHECKING, Iterator, List, Optional

from .conditions import TagNodeCondition

if TYPE_CHECKING:
    from .nodes import TagNode


def iter_elements(
    node: "TagNode", condition: Optional[TagNodeCondition], recursive: bool = True
) -> Iterator["TagNode"]:
    """Yield matching descendants of ``node`` in pre-order.

    A match does not stop the descent: descendants of a matching node are
    tested as well. Each node's children are snapshotted when it is reached,
    so the caller may remove yielded nodes while iterating.
    """
    if condition is None:
        return
    stack = list(reversed(node.get_child_tags()))
    while stack:
        child = stack.pop()
        if condition.satisfy(child):
            yield child
        if recursive:
            stack.extend(reversed(child.get_child_tags()))


def find_element(
    node: "TagNode", condition: Optional[TagNodeCondition], recursive: bool = True
) -> Optional["TagNode"]:
    """Return the first descendant satisfying ``condition``, or None."""
    return next(iter_elements(node, condition, recursive), None)


def get_element_list(
    node: "TagNode", condition: Optional[TagNodeCondition], recursive: bool = True
) -> List["TagNode"]:
    """Return every descendant satisfying ``condition`` in document order."""
    return list(iter_elements(node, condition, recursive))
