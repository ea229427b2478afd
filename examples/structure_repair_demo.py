#!/usr/bin/env python3
"""
Demonstration of structural repair on a balanced tag tree.

Builds the tree a balancer would produce for ``<b><i>foo</b>bar</i><p>``,
including the auto-generated filler it synthesizes, then runs the repair
pass and exports the result to lxml for an XPath query.
"""

import json
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from robust_html_cleaner.api import to_lxml
from robust_html_cleaner.shared import CleanerConfig
from robust_html_cleaner.tree import (
    CommentNode,
    ContentNode,
    StructureRepairer,
    TagNode,
    TagNodeNameCondition,
)


def build_balanced_tree() -> TagNode:
    """Tree for ``<b><i>foo</b>bar</i><p>`` after balancing."""
    body = TagNode("body")

    bold = TagNode("b")
    italic = TagNode("i", children=[ContentNode("foo")])
    bold.add_child(italic)

    # The balancer reopens <i> after </b>; this copy ends up holding "bar"
    reopened = italic.make_copy()
    reopened.auto_generated = True
    reopened.add_child(ContentNode("bar"))

    # A second reopened <i> before <p> that never receives content
    filler = italic.make_copy()
    filler.auto_generated = True
    filler.add_child(TagNode("u", auto_generated=True))

    body.add_children([bold, reopened, filler, CommentNode("[if IE]>x<![endif]")])
    body.add_child(TagNode("p", children=[TagNode("script", children=[ContentNode("x()")])]))
    return body


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(component)s: %(message)s")

    body = build_balanced_tree()
    print("Before repair:")
    print(json.dumps(body.to_dict(), indent=2))

    repairer = StructureRepairer(CleanerConfig.aggressive(), correlation_id="demo")
    repairer.mark_pruned(body, [TagNodeNameCondition("script")])
    result = repairer.repair(body)

    print("\nAfter repair:")
    print(json.dumps(body.to_dict(), indent=2))
    print("\nSummary:")
    print(json.dumps(result.summary(), indent=2))

    html = to_lxml(body)
    print("\nItalic text via XPath:", html.xpath("//i/text()"))


if __name__ == "__main__":
    main()
