"""HTML serialization for softhtml trees.

Compact output writes the tree exactly as it is. Pretty output indents the
tree, but only breaks lines where the content already has boundary
whitespace or next to a block element. Inline elements that touch keep
touching, so `<a>x</a><b>y</b>` never gains a space, and pretty-printing the
result again gives the same string.
"""

from __future__ import annotations

from dataclasses import dataclass

from .entities import encode_html
from .node import Comment, Element, Text
from .tags import DOCTYPE
from .utils import get_leading_spaces, get_trailing_spaces


@dataclass(frozen=True, slots=True)
class RenderStyle:
    """Indentation settings for rendering.

    An empty indent unit means compact output. Any other unit (a tab, some
    spaces) enables pretty output, starting at the given nesting level.
    """

    indent_unit: str = "\t"
    level: int = 0

    def is_pretty(self) -> bool:
        return self.indent_unit != ""

    def indent(self, amount: int = 1) -> RenderStyle:
        return RenderStyle(self.indent_unit, self.level + amount)

    @property
    def indent_value(self) -> str:
        return self.indent_unit * self.level


COMPACT = RenderStyle("")
DEFAULT_STYLE = RenderStyle("\t")


def render(node, style: RenderStyle | None = None) -> str:
    """Render any node to HTML."""
    if isinstance(node, Element):
        return render_element(node, style)
    if isinstance(node, (Text, Comment)):
        return node.render()
    msg = f"Not a valid node: {node!r}"
    raise TypeError(msg)


def render_start_tag(element: Element) -> str:
    parts = ["<", element.tag.name]
    for attribute in element.attributes:
        parts.extend([" ", attribute.render()])

    if not element.children and element.tag.self_closing and element.tag is not DOCTYPE:
        parts.append(" />")
    else:
        parts.append(">")
    return "".join(parts)


def render_element(element: Element, style: RenderStyle | None = None) -> str:
    """Return the outer HTML of element."""
    if style is None:
        style = DEFAULT_STYLE
    return style.indent_value + _render_element(element, style)


def _render_element(element, style):
    start = render_start_tag(element)
    if element.tag.self_closing:
        return start
    end = f"</{element.tag.name}>"

    if not style.is_pretty() or element.tag.preserve_format:
        return start + _render_compact_children(element) + end

    inner = style.indent()
    content, first_break, last_break = _render_pretty_children(element, inner)
    if first_break and content:
        start += "\n" + inner.indent_value
    if last_break:
        end = "\n" + style.indent_value + end
    return start + content + end


def render_children(element: Element, style: RenderStyle | None = None) -> str:
    """Return the inner HTML of element.

    With a pretty style, line breaks are only put between children where the
    content already has boundary whitespace or next to block elements.
    Breaks right after the start tag and before the end tag are left out.
    """
    if style is None:
        style = DEFAULT_STYLE
    if not style.is_pretty() or element.tag.preserve_format:
        return _render_compact_children(element)
    return _render_pretty_children(element, style)[0]


def _render_compact_children(element):
    escape = element.tag.escape_inside
    parts = []
    for child in element.children:
        if isinstance(child, Text):
            parts.append(child.render(escape=escape))
        elif isinstance(child, Element):
            parts.append(_render_element(child, COMPACT))
        else:
            parts.append(child.render())
    return "".join(parts)


def _render_pretty_children(element, style):
    """Render the children of element at style's level.

    Returns the HTML and whether line breaks go after the start tag and
    before the end tag.
    """
    items, breaks = layout_children(element)
    escape = element.tag.escape_inside
    newline = "\n" + style.indent_value
    parts = []

    for index, item in enumerate(items):
        if index and breaks[index]:
            parts.append(newline)
        if isinstance(item, Text):
            # Boundary whitespace has become a line break.
            data = item.data
            data = data[get_leading_spaces(data) : len(data) - get_trailing_spaces(data)]
            parts.append(encode_html(data) if escape else data)
        elif isinstance(item, Element):
            parts.append(_render_element(item, style))
        else:
            parts.append(item.render())

    return "".join(parts), breaks[0], breaks[-1]


def layout_children(element: Element) -> tuple[list, list[bool]]:
    """Decide where pretty output of element breaks lines.

    Returns the children to render and, for each boundary around them, whether
    a line break goes there: `breaks[k]` is the boundary before `items[k]` and
    `breaks[-1]` the one before the end tag. Whitespace-only text is not
    rendered, its boundary breaks instead.
    """
    items = []
    breaks = [False]

    for child in element.children:
        if isinstance(child, Text):
            if not child.data:
                continue
            leading = get_leading_spaces(child.data)
            if leading:
                breaks[-1] = True
            if leading == len(child.data):
                continue
            items.append(child)
            breaks.append(get_trailing_spaces(child.data) != 0)
        elif isinstance(child, Element):
            if can_indent_first_child(child):
                breaks[-1] = True
            items.append(child)
            breaks.append(can_indent_end_tag(child))
        else:
            items.append(child)
            breaks.append(False)

    if items and not element.tag.inline:
        breaks[0] = breaks[-1] = True
    return items, breaks


def _first_content(element):
    for child in element.children:
        if not isinstance(child, Text) or child.data:
            return child
    return None


def _last_content(element):
    for child in reversed(element.children):
        if not isinstance(child, Text) or child.data:
            return child
    return None


def can_indent_first_child(element: Element) -> bool:
    """Check if a line break may be put after the start tag of element.

    Always true for block elements. The content of an inline element must
    already start with whitespace or with a block element, looking through
    leading inline elements. Empty inline elements never qualify.
    """
    node = element
    while node.tag.inline:
        if node.tag.self_closing or node.tag.preserve_format:
            return False
        first = _first_content(node)
        if isinstance(first, Text):
            return get_leading_spaces(first.data) != 0
        if not isinstance(first, Element):
            return False
        node = first
    return True


def can_indent_end_tag(element: Element) -> bool:
    """Check if a line break may be put before the end tag of element."""
    node = element
    while node.tag.inline:
        if node.tag.self_closing or node.tag.preserve_format:
            return False
        last = _last_content(node)
        if isinstance(last, Text):
            return get_trailing_spaces(last.data) != 0
        if not isinstance(last, Element):
            return False
        node = last
    return True


def can_insert_separator(element: Element, index: int) -> bool:
    """Check if a line break may follow the child at index."""
    child = element.children[index]
    if isinstance(child, Text) and get_trailing_spaces(child.data):
        return True
    if isinstance(child, Element) and can_indent_end_tag(child):
        return True

    for following in element.children[index + 1 :]:
        if isinstance(following, Text):
            if following.data:
                return get_leading_spaces(following.data) != 0
        elif isinstance(following, Element):
            return can_indent_first_child(following)
        else:
            return False
    return False
