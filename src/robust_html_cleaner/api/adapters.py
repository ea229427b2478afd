"""Export of cleaned tag trees to lxml.

Downstream code that needs path queries converts a cleaned tree with
:class:`LxmlAdapter` and evaluates XPath on the resulting ``lxml.etree``
element. The export is read-only: the source tree is never modified, and
pruned nodes are left out exactly as a serializer would leave them out.
"""

import re
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from robust_html_cleaner.shared import get_logger
from robust_html_cleaner.tree.nodes import CommentNode, ContentNode, TagNode

# Characters XML 1.0 does not allow in character data
_XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class LxmlExportError(Exception):
    """Raised when a tree cannot be represented as an lxml element."""


@dataclass
class ConversionResult:
    """Result of converting a tag tree to lxml."""

    success: bool
    converted_data: Any
    conversion_time_ms: float = 0.0
    skipped_attributes: List[str] = field(default_factory=list)
    skipped_comments: int = 0
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class LxmlAdapter:
    """Converts a :class:`TagNode` tree to ``lxml.etree`` elements."""

    def __init__(
        self,
        include_comments: bool = True,
        root_name: str = "html",
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize adapter.

        Args:
            include_comments: Export comment children as lxml comments
            root_name: Element name used for a root node without a name
            correlation_id: Optional correlation ID for request tracking
        """
        self.include_comments = include_comments
        self.root_name = root_name
        self.logger = get_logger(__name__, correlation_id, "lxml_adapter")

    def to_target(self, root: TagNode) -> ConversionResult:
        """Convert the tree under ``root`` to an lxml element.

        Attributes whose names lxml rejects and comments lxml cannot hold are
        skipped and reported in the result. Characters XML cannot carry in
        text are replaced with a space, with a warning.

        Raises:
            LxmlExportError: A tag name is not a valid element name, or
                ``root`` itself is pruned.
        """
        import lxml.etree as etree

        if root.pruned:
            raise LxmlExportError("Cannot export a pruned root node")

        start_time = time.time()
        result = ConversionResult(success=True, converted_data=None)
        lxml_root = self._new_element(root, etree, result, self.root_name)

        stack: List[Tuple[TagNode, Any]] = [(root, lxml_root)]
        while stack:
            node, element = stack.pop()
            last = None
            for child in node.children:
                if isinstance(child, TagNode):
                    if child.pruned:
                        continue
                    last = self._new_element(child, etree, result)
                    element.append(last)
                    stack.append((child, last))
                elif isinstance(child, ContentNode):
                    self._append_text(element, last, child.content, result)
                elif isinstance(child, CommentNode):
                    if not self.include_comments:
                        continue
                    try:
                        last = etree.Comment(child.content)
                    except ValueError:
                        result.skipped_comments += 1
                        result.warnings.append(
                            f"Skipped comment in <{element.tag}>: invalid content"
                        )
                        continue
                    element.append(last)

        result.converted_data = lxml_root
        result.conversion_time_ms = (time.time() - start_time) * 1000
        result.metadata = {
            "lxml_version": etree.LXML_VERSION,
            "element_count": len(lxml_root.xpath("//*")),
        }

        if result.warnings:
            self.logger.warning(
                "Tree exported with omissions",
                extra={"warning_count": len(result.warnings)},
            )
        return result

    def _new_element(
        self,
        node: TagNode,
        etree: Any,
        result: ConversionResult,
        fallback_name: Optional[str] = None,
    ) -> Any:
        name = node.name or fallback_name
        try:
            element = etree.Element(name)
        except (TypeError, ValueError) as e:
            raise LxmlExportError(f"Invalid element name {name!r}: {e}") from e

        for att_name, att_value in node.attributes.items():
            try:
                element.set(att_name, att_value)
            except ValueError:
                result.skipped_attributes.append(att_name)
                result.warnings.append(
                    f"Skipped attribute {att_name!r} on <{name}>: invalid name or value"
                )
        return element

    def _append_text(
        self, element: Any, last: Any, text: str, result: ConversionResult
    ) -> None:
        """Add ``text`` after ``last``, or as leading text when nothing precedes it."""
        cleaned = _XML_INVALID_CHARS.sub(" ", text)
        if cleaned != text:
            result.warnings.append(
                f"Replaced characters not allowed in XML text in <{element.tag}>"
            )
        if last is None:
            element.text = (element.text or "") + cleaned
        else:
            last.tail = (last.tail or "") + cleaned


def to_lxml(root: TagNode, include_comments: bool = True, root_name: str = "html") -> Any:
    """Convert ``root`` to an ``lxml.etree`` element.

    Example:
        >>> tree = TagNode("div", children=[TagNode("a", {"href": "/x"})])
        >>> to_lxml(tree).xpath("//a/@href")
        ['/x']
    """
    adapter = LxmlAdapter(include_comments=include_comments, root_name=root_name)
    return adapter.to_target(root).converted_data
