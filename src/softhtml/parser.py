"""Lenient HTML parser.

The parser walks the source once, trying a few productions at every `<`:
an element start, an end tag, a comment, and finally a literal `<`. Anything
else is text. Recursion over the input position replaces an explicit state
machine: parsing an element's children is a nested call that returns once
the matching end tag has been consumed.

Malformed input never raises. End tags that do not match the open element
are dropped, unterminated comments run to the end of the input, and stray
`<` characters become text. With error collection enabled each of these is
recorded as a ParseError; strict mode raises on the first one.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from .entities import decode_html
from .errors import ParseError, StrictModeError
from .node import Comment, Element, Text, create_element
from .serialize import render
from .tags import make_tag, tag_name_matches
from .utils import line_and_column

_TAG_START_PATTERN = re.compile(r"<([^<>\s/]+)")
_TAG_END_PATTERN = re.compile(r"\s*</\s*([^<>\s]+)\s*>")
_ATTRIBUTE_PATTERN = re.compile(
    r"""\s*([^ \t\n\r"'>/=]+)(?:\s*=\s*([^"' \t\n\r<>`]+|'([^']*)'|"([^"]*)"))?""",
)
_COMMENT_START = "<!--"
_COMMENT_END = "-->"

# Stands in for "no parent" at the top level. Its name contains a space, so
# no end tag can ever match it and parsing runs to the end of the input.
END_TAG = make_tag("parse end")

# Elements nest at most this deep. Deeper start tags still produce elements,
# but their content goes to the enclosing element.
MAX_NESTING_DEPTH = 200


class ParserOpts:
    __slots__ = ("collect_errors", "debug", "strict")

    def __init__(self, debug=False, collect_errors=False, strict=False):
        self.debug = bool(debug)
        self.strict = bool(strict)
        self.collect_errors = bool(collect_errors) or self.strict


class ElementParseResult(NamedTuple):
    element: Element
    # Number of source characters consumed by the element, end tag included.
    length: int


class TagParseResult(NamedTuple):
    element: Element
    length: int
    self_closing: bool


class CommentParseResult(NamedTuple):
    comment: Comment
    length: int


class TreeParser:
    """Builds nodes from one source string.

    Positions passed around are absolute offsets into the source, so error
    locations stay meaningful in nested calls.
    """

    __slots__ = ("debug_enabled", "errors", "opts", "source")

    def __init__(self, source, opts=None):
        self.source = source
        self.opts = opts or ParserOpts()
        self.debug_enabled = self.opts.debug
        self.errors = []

    def debug(self, message, indent=0):
        print(f"{' ' * indent}{message}")

    def report(self, code, offset, message=None):
        if not self.opts.collect_errors:
            return
        line, column = line_and_column(self.source, offset)
        error = ParseError(code, line, column, message)
        self.errors.append(error)
        if self.opts.strict:
            raise StrictModeError(error)

    def parse_html(self, pos, parent, depth=0):
        """Parse nodes into parent starting at pos. Returns the position after the last consumed character."""
        source = self.source
        length = len(source)
        raw_text = not parent.tag.parse_inside
        i = pos

        while i < length:
            # A `<` as the very last character cannot start markup.
            if source[i] == "<" and i + 1 < length:
                end_match = _TAG_END_PATTERN.match(source, i)
                if end_match and tag_name_matches(parent.tag, end_match.group(1)):
                    if self.debug_enabled:
                        self.debug(f"</{parent.tag.name}> closes element", depth)
                    return end_match.end()

                if not raw_text:
                    i = self._parse_markup(i, parent, end_match, depth)
                    continue

            end = self._scan_text(i, parent)
            text = source[i:end]
            if not raw_text:
                text = decode_html(text)
            _append_text(parent, text)
            i = end

        # Top-level containers (depth 0) are not closed by the source.
        if depth:
            self.report("expected-closing-tag-but-got-eof", length, f"<{parent.tag.name}> was never closed")
        return i

    def _parse_markup(self, pos, parent, end_match, depth):
        """Handle a `<` in markup context. Returns the position to resume from."""
        result = self.parse_element(pos, depth)
        if result is not None:
            element, end = result
            parent.append_child(element)
            return end

        if end_match is not None:
            if self.debug_enabled:
                self.debug(f"ignoring </{end_match.group(1)}> inside <{parent.tag.name}>", depth)
            self.report("unexpected-end-tag", pos, f"</{end_match.group(1)}> does not close <{parent.tag.name}>")
            return end_match.end()

        result = self.parse_comment(pos)
        if result is not None:
            comment, end = result
            parent.append_child(comment)
            return end

        self.report("invalid-first-character-of-tag-name", pos)
        _append_text(parent, "<")
        return pos + 1

    def _scan_text(self, pos, parent):
        """Find where the text starting at pos ends."""
        source = self.source
        length = len(source)

        if parent.tag.parse_inside:
            end = source.find("<", pos + 1)
            if end == -1 or end == length - 1:
                return length
            return end

        # Raw text only ends at the container's own end tag.
        i = source.find("<", pos + 1)
        while i != -1:
            end_match = _TAG_END_PATTERN.match(source, i)
            if end_match and tag_name_matches(parent.tag, end_match.group(1)):
                return i
            i = source.find("<", i + 1)
        return length

    def parse_element(self, pos, depth=0):
        """Parse one element at pos. Returns (element, end position), or None."""
        result = self.parse_tag_start(pos)
        if result is None:
            return None

        element, end, self_closing = result
        if self.debug_enabled:
            self.debug(f"<{element.tag.name}> at {pos}", depth)
        if self_closing or element.tag.self_closing:
            return element, end

        # Raw text cannot nest further, so it is always read.
        if depth < MAX_NESTING_DEPTH or not element.tag.parse_inside:
            end = self.parse_html(end, element, depth + 1)
        else:
            if self.debug_enabled:
                self.debug(f"<{element.tag.name}> is too deep, not nesting", depth)
            message = f"<{element.tag.name}> is nested more than {MAX_NESTING_DEPTH} levels deep"
            self.report("nesting-too-deep", pos, message)
        return element, end

    def parse_tag_start(self, pos):
        """Parse a start tag at pos. Returns (element, end position, explicitly self-closed), or None."""
        source = self.source
        match = _TAG_START_PATTERN.match(source, pos)
        if match is None or source.startswith(_COMMENT_START, pos):
            return None

        element = create_element(match.group(1))
        i = self.parse_attributes(match.end(), element)

        close = source.find(">", i)
        if close == -1:
            self.report("eof-in-tag", pos, f"<{element.tag.name}> start tag is not terminated")
            return element, len(source), False
        self_closing = close > i and source[close - 1] == "/"
        return element, close + 1, self_closing

    def parse_attributes(self, pos, element):
        """Parse attributes into element. Returns the position after the last attribute."""
        source = self.source
        length = len(source)
        while pos < length:
            if source[pos] == ">":
                break
            match = _ATTRIBUTE_PATTERN.match(source, pos)
            if match is None:
                break
            pos = match.end()

            name, unquoted, single_quoted, double_quoted = match.groups()
            if single_quoted is not None:
                value = single_quoted
            elif double_quoted is not None:
                value = double_quoted
            else:
                value = unquoted or ""
            element.attribute(name, decode_html(value))
        return pos

    def parse_comment(self, pos):
        """Parse a comment at pos. Returns (comment, end position), or None.

        The comment ends at the first `-->`. The extra restrictions the HTML
        standard puts on comment text are ignored, as most parsers do.
        """
        source = self.source
        if not source.startswith(_COMMENT_START, pos):
            return None

        content_start = pos + len(_COMMENT_START)
        # Searching from inside the opener makes `<!-->` an empty comment.
        close = source.find(_COMMENT_END, pos + 2)
        if close == -1:
            self.report("eof-in-comment", pos)
            return Comment(source[content_start:].strip()), len(source)
        content = source[content_start:close] if close > content_start else ""
        return Comment(content.strip()), close + len(_COMMENT_END)


def _append_text(parent, text):
    """Append text to parent, merging with a trailing text child."""
    if not text:
        return
    if parent.children and isinstance(parent.children[-1], Text):
        parent.children[-1].data += text
    else:
        parent.append_child(Text(text))


def parse_nodes(source, opts=None):
    """Parse all the nodes of an HTML source."""
    container = Element(END_TAG)
    TreeParser(source, opts).parse_html(0, container)
    return container.children


def parse_element(source, opts=None):
    """Parse the element at the start of source.

    Returns an ElementParseResult with the element and the number of
    characters consumed, so callers can continue parsing after it. Returns
    None when source does not start with an element.
    """
    result = TreeParser(source, opts).parse_element(0)
    if result is None:
        return None
    return ElementParseResult(*result)


def parse(source, container=None, opts=None):
    """Parse source into container and return it, or return the first parsed node."""
    if container is not None:
        TreeParser(source, opts).parse_html(0, container)
        return container
    nodes = parse_nodes(source, opts)
    return nodes[0] if nodes else None


def parse_tag_start(source):
    result = TreeParser(source).parse_tag_start(0)
    if result is None:
        return None
    return TagParseResult(*result)


def parse_comment(source):
    result = TreeParser(source).parse_comment(0)
    if result is None:
        return None
    return CommentParseResult(*result)


class SoftHTML:
    """Parse an HTML source on construction.

    Top-level nodes end up in `nodes`; with a container they are appended to
    it instead and `root` is the container. `errors` holds the ParseErrors
    recorded when collect_errors or strict is set.
    """

    __slots__ = ("container", "debug", "errors", "nodes", "root")

    def __init__(self, html, *, container=None, debug=False, collect_errors=False, strict=False):
        self.debug = bool(debug)
        self.container = container
        parser = TreeParser(html or "", ParserOpts(debug=debug, collect_errors=collect_errors, strict=strict))

        if container is None:
            holder = Element(END_TAG)
            parser.parse_html(0, holder)
            self.nodes = holder.children
            self.root = self.nodes[0] if self.nodes else None
        else:
            parser.parse_html(0, container)
            self.nodes = container.children
            self.root = container
        self.errors = parser.errors

    def render(self, style=None):
        return "".join(render(node, style) for node in self.nodes)

    def to_text(self):
        return "".join(node.to_text() for node in self.nodes)
