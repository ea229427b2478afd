"""Tag tree node types.

The cleaned tree consists of :class:`TagNode` instances whose children are
other tag nodes, text runs (:class:`ContentNode`) and comments
(:class:`CommentNode`). A tag node exclusively owns its children list and
its attributes; ``parent`` is a back-reference that the owner of the root is
expected to keep alive.

Key Components:
    TagNode: Element node with attributes, children and repair flags
    ContentNode: Text run leaf
    CommentNode: Comment leaf, never treated as discardable
    DoctypeToken: Value held in a root node's doctype slot
    ProxyTagNode: Transparent wrapper unwrapped by ``TagNode.add_child``
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from .attributes import AttributeStore
from .conditions import (
    TagAllCondition,
    TagNodeAttExistsCondition,
    TagNodeAttValueCondition,
    TagNodeCondition,
    TagNodeNameCondition,
)
from .traversal import find_element, get_element_list, iter_elements


@dataclass(eq=False)
class ContentNode:
    """Run of character data."""

    content: str = ""

    @property
    def is_blank(self) -> bool:
        """True when the run holds nothing but whitespace."""
        return not self.content or self.content.isspace()

    def __str__(self) -> str:
        return self.content


@dataclass(eq=False)
class CommentNode:
    """Comment leaf.

    Comments are kept even around empty content: pages routinely hide
    browser specific directives in them.
    """

    content: str = ""

    @property
    def comment_text(self) -> str:
        return f"<!--{self.content}-->"

    def __str__(self) -> str:
        return self.comment_text


@dataclass
class DoctypeToken:
    """Doctype declaration split into its up to four parts."""

    part1: Optional[str] = None
    part2: Optional[str] = None
    part3: Optional[str] = None
    part4: Optional[str] = None

    @property
    def content(self) -> str:
        parts = [p for p in (self.part1, self.part2, self.part3, self.part4) if p]
        return "<!DOCTYPE " + " ".join(parts) + ">"

    def __str__(self) -> str:
        return self.content


@dataclass(eq=False)
class ProxyTagNode:
    """Wrapper the balancer hands around a token it has not yet placed."""

    token: Any


ChildNode = Union["TagNode", ContentNode, CommentNode]


@dataclass(eq=False, repr=False)
class TagNode:
    """Element node of the cleaned tree.

    Besides name, attributes and children, a node carries the flags used by
    structural repair:

    - ``auto_generated``: the balancer synthesized this node while recovering
      from unbalanced tags; it may be removed again if it stays empty.
    - ``pruned``: the node is logically deleted but may still be linked.
      Emptiness checks ignore pruned nodes.
    - ``formed``: the node's end tag has been seen during construction.
    """

    name: Optional[str] = None
    attributes: Union[AttributeStore, Mapping[str, str]] = field(default_factory=AttributeStore)
    children: List[Any] = field(default_factory=list)
    parent: Optional["TagNode"] = None
    doctype: Optional[DoctypeToken] = None
    auto_generated: bool = False
    pruned: bool = False
    formed: bool = False
    items_to_move: Optional[List[Any]] = None

    def __post_init__(self) -> None:
        """Normalize the name and attach any children passed in."""
        if self.name is not None:
            self.name = self.name.lower()
        if isinstance(self.attributes, AttributeStore):
            self.attributes = self.attributes.copy()
        else:
            self.attributes = AttributeStore(self.attributes)

        initial_children, self.children = self.children, []
        self.add_children(initial_children)

    # Attributes

    def get_attribute(self, name: Optional[str]) -> Optional[str]:
        """Value of attribute ``name``, or None if this node doesn't carry it."""
        return self.attributes.get(name)

    def set_attribute(self, name: Optional[str], value: Optional[str]) -> None:
        """Add attribute ``name`` or override the existing one."""
        self.attributes.set(name, value)

    add_attribute = set_attribute

    def remove_attribute(self, name: Optional[str]) -> None:
        self.attributes.remove(name)

    def has_attribute(self, name: Optional[str]) -> bool:
        return self.attributes.has(name)

    def set_attributes(self, mapping: Mapping[str, str]) -> None:
        """Replace all attributes with the normalized pairs of ``mapping``."""
        self.attributes = AttributeStore(mapping)

    # Children

    def add_child(self, child: Any) -> None:
        """Append ``child``.

        Lists and tuples are flattened in order and proxies are unwrapped.
        An appended tag node's parent is set to this node without detaching
        it from any previous parent.
        """
        if child is None:
            return
        if isinstance(child, (list, tuple)):
            self.add_children(child)
        elif isinstance(child, ProxyTagNode):
            self.add_child(child.token)
        else:
            self.children.append(child)
            if isinstance(child, TagNode):
                child.parent = self

    def add_children(self, new_children: Optional[Iterable[Any]]) -> None:
        """Add every element of ``new_children`` through :meth:`add_child`."""
        if new_children is None:
            return
        for child in list(new_children):
            self.add_child(child)

    def insert_child(self, index: int, child: Any) -> None:
        """Insert ``child`` at ``index``, clamped to the children bounds."""
        if child is None:
            return
        self.children.insert(index, child)
        if isinstance(child, TagNode):
            child.parent = self

    def insert_child_before(self, reference: Any, child: Any) -> bool:
        """Insert ``child`` right before ``reference``; False if it's not a child."""
        index = self._index_of(reference)
        if index < 0:
            return False
        self.insert_child(index, child)
        return True

    def insert_child_after(self, reference: Any, child: Any) -> bool:
        """Insert ``child`` right after ``reference``; False if it's not a child."""
        index = self._index_of(reference)
        if index < 0:
            return False
        self.insert_child(index + 1, child)
        return True

    def replace_child(self, old: Any, new: Any) -> bool:
        """Put ``new`` in the position of ``old``; False if ``old`` is not a child."""
        index = self._index_of(old)
        if index < 0 or new is None:
            return False
        self.children[index] = new
        if isinstance(new, TagNode):
            new.parent = self
        return True

    def remove_child(self, child: Any) -> bool:
        """Remove the first occurrence of ``child``.

        The removed node keeps its ``parent`` reference.

        Returns:
            True if ``child`` was in the children list.
        """
        index = self._index_of(child)
        if index < 0:
            return False
        del self.children[index]
        return True

    def remove_all_children(self) -> None:
        self.children.clear()

    def remove_from_tree(self) -> bool:
        """Remove this node from its parent.

        Returns:
            True if the node was removed, False for the root.
        """
        if self.parent is None:
            return False
        return self.parent.remove_child(self)

    def has_child(self, child: Any) -> bool:
        """True if ``child`` itself (not an equal node) is a direct child."""
        return self._index_of(child) >= 0

    def get_child_tags(self) -> List["TagNode"]:
        """Direct children that are tag nodes."""
        return [child for child in self.children if isinstance(child, TagNode)]

    def _index_of(self, child: Any) -> int:
        if child is None:
            return -1
        for index, item in enumerate(self.children):
            if item is child:
                return index
        return -1

    # Deferred relocation

    def add_item_for_moving(self, item: Any) -> None:
        """Stage ``item`` to be moved out of this node by the repair pass."""
        if self.items_to_move is None:
            self.items_to_move = []
        self.items_to_move.append(item)

    # Flags

    def set_formed(self, formed: bool = True) -> None:
        self.formed = formed

    # Content

    def get_text(self) -> str:
        """Concatenated text of this node and its descendants."""
        parts: List[str] = []
        stack: List[Any] = list(reversed(self.children))
        while stack:
            child = stack.pop()
            if isinstance(child, ContentNode):
                parts.append(child.content)
            elif isinstance(child, TagNode):
                stack.extend(reversed(child.children))
        return "".join(parts)

    @property
    def text(self) -> str:
        return self.get_text()

    def is_empty(self) -> bool:
        """Check whether the node holds nothing worth keeping.

        A pruned node is always empty. Otherwise the node is empty unless it
        has a non-pruned tag child, a non-blank text run, a comment, or any
        other kind of child.
        """
        if self.pruned:
            return True
        for child in self.children:
            if isinstance(child, TagNode):
                if not child.pruned:
                    return False
            elif isinstance(child, ContentNode):
                if not child.is_blank:
                    return False
            else:
                return False
        return True

    def make_copy(self) -> "TagNode":
        """Disconnected copy carrying only name and attributes."""
        copy = TagNode(self.name)
        copy.attributes = self.attributes.copy()
        return copy

    # Navigation

    def get_depth(self) -> int:
        """Depth of this node in the tree (root = 0)."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def iter_descendants(self) -> Iterator["TagNode"]:
        """All descendant tag nodes in document order."""
        return iter_elements(self, TagAllCondition(), recursive=True)

    # Queries

    def find_element(
        self, condition: Optional[TagNodeCondition], recursive: bool = True
    ) -> Optional["TagNode"]:
        return find_element(self, condition, recursive)

    def get_element_list(
        self, condition: Optional[TagNodeCondition], recursive: bool = True
    ) -> List["TagNode"]:
        return get_element_list(self, condition, recursive)

    def get_all_elements(self, recursive: bool = True) -> List["TagNode"]:
        return get_element_list(self, TagAllCondition(), recursive)

    def find_element_by_name(self, name: str, recursive: bool = True) -> Optional["TagNode"]:
        return find_element(self, TagNodeNameCondition(name), recursive)

    def get_elements_by_name(self, name: str, recursive: bool = True) -> List["TagNode"]:
        return get_element_list(self, TagNodeNameCondition(name), recursive)

    def find_element_having_attribute(
        self, att_name: str, recursive: bool = True
    ) -> Optional["TagNode"]:
        return find_element(self, TagNodeAttExistsCondition(att_name), recursive)

    def get_elements_having_attribute(
        self, att_name: str, recursive: bool = True
    ) -> List["TagNode"]:
        return get_element_list(self, TagNodeAttExistsCondition(att_name), recursive)

    def find_element_by_att_value(
        self,
        att_name: str,
        att_value: str,
        recursive: bool = True,
        case_sensitive: bool = False,
    ) -> Optional["TagNode"]:
        condition = TagNodeAttValueCondition(att_name, att_value, case_sensitive)
        return find_element(self, condition, recursive)

    def get_elements_by_att_value(
        self,
        att_name: str,
        att_value: str,
        recursive: bool = True,
        case_sensitive: bool = False,
    ) -> List["TagNode"]:
        condition = TagNodeAttValueCondition(att_name, att_value, case_sensitive)
        return get_element_list(self, condition, recursive)

    def to_dict(self) -> Dict[str, Any]:
        """Debug representation of the subtree; pruned children are skipped."""
        result: Dict[str, Any] = {
            "name": self.name,
            "attributes": self.attributes.to_dict(),
        }
        if self.auto_generated:
            result["auto_generated"] = True

        children: List[Any] = []
        for child in self.children:
            if isinstance(child, TagNode):
                if not child.pruned:
                    children.append(child.to_dict())
            elif isinstance(child, CommentNode):
                children.append({"comment": child.content})
            else:
                children.append(str(child))
        if children:
            result["children"] = children
        return result

    def __repr__(self) -> str:
        flags = [
            flag for flag in ("auto_generated", "pruned", "formed") if getattr(self, flag)
        ]
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f"<TagNode {self.name!r} children={len(self.children)}{suffix}>"
