"""Neutralize unwanted elements in a parsed tree.

Elements whose tag is disallowed are not dropped: they are replaced by a
text node holding their HTML, so the markup shows up as inert, escaped text
when the tree is rendered again.
"""

from __future__ import annotations

from collections.abc import Callable, Collection

from .entities import decode_html
from .node import Element, Node, Text
from .serialize import COMPACT, render_element
from .tags import TagDescriptor


def _normalize_tags(tags):
    return {(tag.name if isinstance(tag, TagDescriptor) else tag).lower() for tag in tags}


def sanitize_elements(
    nodes: Node | list[Node],
    disallowed_tags: Collection[str | TagDescriptor],
    extra: Callable[[Element], Node] | None = None,
):
    """Recursively replace disallowed elements by text.

    `extra` is called on every kept element after its children have been
    sanitized; whatever it returns takes the element's place.

    Lists are updated in place and returned. A single node is sanitized and
    the node that should take its place is returned.
    """
    blocked = _normalize_tags(disallowed_tags)

    def sanitize_node(node):
        if not isinstance(node, Element):
            return node
        if node.tag.name.lower() in blocked:
            return Text(decode_html(render_element(node, COMPACT)))
        sanitize_list(node.children)
        return extra(node) if extra is not None else node

    def sanitize_list(children):
        for index, child in enumerate(children):
            children[index] = sanitize_node(child)

    if isinstance(nodes, list):
        sanitize_list(nodes)
        return nodes
    return sanitize_node(nodes)
