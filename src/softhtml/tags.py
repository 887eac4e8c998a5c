"""HTML tag registry.

Every known tag name maps to an immutable TagDescriptor telling the parser
and the serializer how to treat elements of that tag. Descriptors are shared:
elements hold a reference to the registry entry and never copy it.

Usage:
    from softhtml.tags import TAGS, get_tag

    TAGS["div"].inline        # False
    get_tag("my-widget")      # synthesized descriptor with default settings
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TagDescriptor:
    """Parsing and serialization rules for one tag name."""

    name: str
    # Can be written as <tag /> and never owns children.
    self_closing: bool = False
    # False for raw-text containers whose inside is not markup (script, style).
    parse_inside: bool = True
    # False when text inside must be written out without escaping.
    escape_inside: bool = True
    # True freezes whitespace normalization and pretty printing for the subtree.
    preserve_format: bool = False
    # Layout hint for the pretty printer: inline elements never gain new lines
    # that were not already whitespace in the source.
    inline: bool = True
    # Advisory only, not enforced when building elements.
    required_attributes: tuple[str, ...] = ()


def make_tag(name: str, **options) -> TagDescriptor:
    """Build a descriptor, using the permissive defaults for missing options."""
    if "required_attributes" in options:
        options["required_attributes"] = tuple(options["required_attributes"])
    return TagDescriptor(name, **options)


_BLOCK = {"inline": False}
_VOID = {"self_closing": True}
_RAW_TEXT = {"parse_inside": False, "preserve_format": True, "escape_inside": False, "inline": False}

DOCTYPE = make_tag("!DOCTYPE", **_VOID)

TAGS: dict[str, TagDescriptor] = {
    "!doctype": DOCTYPE,
    "a": make_tag("a"),
    "abbr": make_tag("abbr"),
    "address": make_tag("address", **_BLOCK),
    "area": make_tag("area", **_VOID),
    "article": make_tag("article", **_BLOCK),
    "aside": make_tag("aside", **_BLOCK),
    "audio": make_tag("audio", **_BLOCK),
    "b": make_tag("b"),
    "base": make_tag("base", **_VOID),
    "bdi": make_tag("bdi"),
    "bdo": make_tag("bdo"),
    "blockquote": make_tag("blockquote", **_BLOCK),
    "body": make_tag("body", **_BLOCK),
    "br": make_tag("br", self_closing=True, inline=False),
    "button": make_tag("button"),
    "canvas": make_tag("canvas", **_BLOCK),
    "caption": make_tag("caption"),
    "cite": make_tag("cite"),
    "code": make_tag("code"),
    "col": make_tag("col", **_VOID),
    "colgroup": make_tag("colgroup", **_BLOCK),
    "data": make_tag("data"),
    "datalist": make_tag("datalist", **_BLOCK),
    "dd": make_tag("dd"),
    "del": make_tag("del"),
    "details": make_tag("details", **_BLOCK),
    "dfn": make_tag("dfn"),
    "dialog": make_tag("dialog", **_BLOCK),
    "div": make_tag("div", **_BLOCK),
    "dl": make_tag("dl", **_BLOCK),
    "dt": make_tag("dt"),
    "em": make_tag("em"),
    "embed": make_tag("embed", **_VOID),
    "fieldset": make_tag("fieldset", **_BLOCK),
    "figcaption": make_tag("figcaption"),
    "figure": make_tag("figure", **_BLOCK),
    "footer": make_tag("footer", **_BLOCK),
    "form": make_tag("form", **_BLOCK),
    "h1": make_tag("h1"),
    "h2": make_tag("h2"),
    "h3": make_tag("h3"),
    "h4": make_tag("h4"),
    "h5": make_tag("h5"),
    "h6": make_tag("h6"),
    "head": make_tag("head", **_BLOCK),
    "header": make_tag("header", **_BLOCK),
    "hr": make_tag("hr", **_VOID),
    "html": make_tag("html", **_BLOCK),
    "i": make_tag("i"),
    "iframe": make_tag("iframe", **_BLOCK),
    "img": make_tag("img", required_attributes=("src", "alt"), **_VOID),
    "input": make_tag("input", **_VOID),
    "ins": make_tag("ins"),
    "kbd": make_tag("kbd"),
    "label": make_tag("label"),
    "legend": make_tag("legend"),
    "li": make_tag("li"),
    "link": make_tag("link", **_VOID),
    "main": make_tag("main", **_BLOCK),
    "map": make_tag("map", **_BLOCK),
    "mark": make_tag("mark"),
    "meta": make_tag("meta", **_VOID),
    "meter": make_tag("meter"),
    "nav": make_tag("nav", **_BLOCK),
    "noscript": make_tag("noscript", **_BLOCK),
    "ol": make_tag("ol", **_BLOCK),
    "optgroup": make_tag("optgroup", **_BLOCK),
    "option": make_tag("option"),
    "output": make_tag("output"),
    "p": make_tag("p", **_BLOCK),
    "param": make_tag("param", **_VOID),
    "picture": make_tag("picture", **_BLOCK),
    "pre": make_tag("pre", preserve_format=True),
    "progress": make_tag("progress"),
    "q": make_tag("q"),
    "rp": make_tag("rp"),
    "rt": make_tag("rt"),
    "ruby": make_tag("ruby", **_BLOCK),
    "s": make_tag("s"),
    "samp": make_tag("samp"),
    "script": make_tag("script", **_RAW_TEXT),
    "section": make_tag("section", **_BLOCK),
    "select": make_tag("select", **_BLOCK),
    "small": make_tag("small"),
    "source": make_tag("source", **_VOID),
    "span": make_tag("span"),
    "strong": make_tag("strong"),
    "style": make_tag("style", **_RAW_TEXT),
    "sub": make_tag("sub"),
    "summary": make_tag("summary"),
    "sup": make_tag("sup"),
    "svg": make_tag("svg", **_BLOCK),
    "table": make_tag("table", **_BLOCK),
    "tbody": make_tag("tbody", **_BLOCK),
    "td": make_tag("td"),
    "template": make_tag("template"),
    "textarea": make_tag("textarea"),
    "tfoot": make_tag("tfoot", **_BLOCK),
    "th": make_tag("th"),
    "thead": make_tag("thead", **_BLOCK),
    "time": make_tag("time"),
    "title": make_tag("title"),
    "tr": make_tag("tr", **_BLOCK),
    "track": make_tag("track", **_VOID),
    "u": make_tag("u"),
    "ul": make_tag("ul", **_BLOCK),
    "var": make_tag("var"),
    "video": make_tag("video", **_BLOCK),
    "wbr": make_tag("wbr", **_VOID),
}

VOID_ELEMENTS = frozenset(name for name, tag in TAGS.items() if tag.self_closing)
RAW_TEXT_ELEMENTS = frozenset(name for name, tag in TAGS.items() if not tag.parse_inside)


def get_tag(name: str) -> TagDescriptor:
    """Look up a tag by name, case-insensitively.

    Unknown names never fail: a descriptor with default settings is
    synthesized, keeping the name as written. Custom elements and even
    invalid names are accepted on purpose.
    """
    tag = TAGS.get(name.lower())
    if tag is None:
        return make_tag(name)
    return tag


def tag_name_matches(tag: TagDescriptor, name: str) -> bool:
    return tag.name.lower() == name.lower()
