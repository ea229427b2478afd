"""Node conditions used to parametrize tree searches.

A condition is a pure test over a single tag node. Conditions never look at
children or walk the tree; recursion is decided by the traversal functions in
:mod:`robust_html_cleaner.tree.traversal`.
"""

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Pattern, Union

if TYPE_CHECKING:
    from .nodes import TagNode

RegexLike = Union[str, Pattern[str], None]


class TagNodeCondition(ABC):
    """Boolean predicate over one tag node."""

    @abstractmethod
    def satisfy(self, node: Optional["TagNode"]) -> bool:
        """Return True when ``node`` matches."""

    def __call__(self, node: Optional["TagNode"]) -> bool:
        return self.satisfy(node)


class TagAllCondition(TagNodeCondition):
    """Matches every node."""

    def satisfy(self, node: Optional["TagNode"]) -> bool:
        return True


class TagNodeNameCondition(TagNodeCondition):
    """Matches nodes whose name equals ``name``, ignoring case."""

    def __init__(self, name: Optional[str]) -> None:
        self.name = name

    def satisfy(self, node: Optional["TagNode"]) -> bool:
        if node is None or node.name is None or self.name is None:
            return False
        return node.name.lower() == self.name.lower()

    def __repr__(self) -> str:
        return f"TagNodeNameCondition({self.name!r})"


class TagNodeAttExistsCondition(TagNodeCondition):
    """Matches nodes carrying attribute ``att_name``."""

    def __init__(self, att_name: Optional[str]) -> None:
        self.att_name = att_name

    def satisfy(self, node: Optional["TagNode"]) -> bool:
        return node is not None and node.has_attribute(self.att_name)

    def __repr__(self) -> str:
        return f"TagNodeAttExistsCondition({self.att_name!r})"


class TagNodeAttValueCondition(TagNodeCondition):
    """Matches nodes whose ``att_name`` attribute equals ``att_value``."""

    def __init__(
        self,
        att_name: Optional[str],
        att_value: Optional[str],
        case_sensitive: bool = False,
    ) -> None:
        self.att_name = att_name
        self.att_value = att_value
        self.case_sensitive = case_sensitive

    def satisfy(self, node: Optional["TagNode"]) -> bool:
        if node is None or self.att_name is None or self.att_value is None:
            return False
        actual = node.get_attribute(self.att_name)
        if actual is None:
            return False
        if self.case_sensitive:
            return actual == self.att_value
        return actual.lower() == self.att_value.lower()

    def __repr__(self) -> str:
        return (
            f"TagNodeAttValueCondition({self.att_name!r}, {self.att_value!r}, "
            f"case_sensitive={self.case_sensitive})"
        )


class TagNodeAttNameValueRegexCondition(TagNodeCondition):
    """Matches nodes having an attribute whose name and value match the patterns.

    Patterns are searched, not anchored: ``"ref"`` matches ``"href"``. A
    ``None`` pattern accepts anything. Both patterns must hold for the same
    attribute pair.
    """

    def __init__(self, name_regex: RegexLike = None, value_regex: RegexLike = None) -> None:
        self.name_regex = re.compile(name_regex) if isinstance(name_regex, str) else name_regex
        self.value_regex = (
            re.compile(value_regex) if isinstance(value_regex, str) else value_regex
        )

    def satisfy(self, node: Optional["TagNode"]) -> bool:
        if node is None:
            return False
        for name, value in node.attributes.items():
            if self.name_regex is not None and not self.name_regex.search(name):
                continue
            if self.value_regex is not None and not self.value_regex.search(value):
                continue
            return True
        return False


class TagNodeAutoGeneratedCondition(TagNodeCondition):
    """Matches auto-generated nodes that turned out to be empty.

    These are the filler nodes the balancer synthesizes when reopening tags
    across an unbalanced close, e.g. the second ``<i>`` in
    ``<b><i>foo</b>bar`` -> ``<b><i>foo</i></b><i>bar</i>``.
    """

    def satisfy(self, node: Optional["TagNode"]) -> bool:
        return node is not None and node.auto_generated and node.is_empty()


class TagNodePrunedCondition(TagNodeCondition):
    """Matches nodes marked as pruned."""

    def satisfy(self, node: Optional["TagNode"]) -> bool:
        return node is not None and node.pruned


AUTO_GENERATED_AND_EMPTY = TagNodeAutoGeneratedCondition()
PRUNED = TagNodePrunedCondition()
