from .attributes import Attribute, ClassAttribute, SimpleAttribute, StyleAttribute, create_attribute
from .entities import decode_html, encode_html
from .errors import InvalidOperation, InvalidTag, ParseError, SoftHTMLError, StrictModeError
from .node import NODE_TYPES, Comment, Element, ImageElement, LinkElement, Node, Text, create_element
from .parser import ParserOpts, SoftHTML, parse, parse_comment, parse_element, parse_nodes, parse_tag_start
from .sanitize import sanitize_elements
from .serialize import COMPACT, DEFAULT_STYLE, RenderStyle, render
from .tags import DOCTYPE, TAGS, TagDescriptor, get_tag, make_tag

__all__ = [
    "COMPACT",
    "DEFAULT_STYLE",
    "DOCTYPE",
    "NODE_TYPES",
    "TAGS",
    "Attribute",
    "ClassAttribute",
    "Comment",
    "Element",
    "ImageElement",
    "InvalidOperation",
    "InvalidTag",
    "LinkElement",
    "Node",
    "ParseError",
    "ParserOpts",
    "RenderStyle",
    "SimpleAttribute",
    "SoftHTML",
    "SoftHTMLError",
    "StrictModeError",
    "StyleAttribute",
    "TagDescriptor",
    "Text",
    "create_attribute",
    "create_element",
    "decode_html",
    "encode_html",
    "get_tag",
    "make_tag",
    "parse",
    "parse_comment",
    "parse_element",
    "parse_nodes",
    "parse_tag_start",
    "render",
    "sanitize_elements",
]
