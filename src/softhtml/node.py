"""HTML tree nodes.

A tree is made of three node kinds sharing one behavior contract:

- Element: a tag descriptor, ordered attributes and ordered children
- Text: a mutable string payload, stored decoded
- Comment: a string payload

Each node can render itself to HTML (`render`), extract its plain text
(`to_text`), export a JSON-ready value (`to_json`) and deep-copy itself
(`clone`). Children are owned by exactly one parent element and hold no
reference back to it, so subtrees can be moved around freely by removing
them from one list and appending them to another.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Union

from .attributes import Attribute, StyleAttribute, create_attribute
from .entities import encode_html
from .errors import InvalidOperation, InvalidTag
from .tags import TAGS, TagDescriptor, get_tag, tag_name_matches
from .utils import is_blank_text, simplify_text


class Text:
    __slots__ = ("data",)

    def __init__(self, data=""):
        self.data = data

    def render(self, style=None, *, escape=True):
        """Return the HTML form of this text. Style has no effect on text."""
        return encode_html(self.data) if escape else self.data

    def to_text(self):
        return self.data

    def to_json(self):
        return self.data

    def clone(self):
        return Text(self.data)

    def __eq__(self, other):
        if not isinstance(other, Text):
            return NotImplemented
        return self.data == other.data

    __hash__ = None

    def __repr__(self):
        return f"Text({self.data[:30]!r})"


class Comment:
    __slots__ = ("data",)

    def __init__(self, data=""):
        self.data = data

    def render(self, style=None):
        return f"<!--{self.data}-->"

    def to_text(self):
        return ""

    def to_json(self):
        return {"type": "comment", "content": self.data}

    def clone(self):
        return Comment(self.data)

    def __eq__(self, other):
        if not isinstance(other, Comment):
            return NotImplemented
        return self.data == other.data

    __hash__ = None

    def __repr__(self):
        return f"Comment({self.data[:30]!r})"


class Element:
    """An HTML element: a shared tag descriptor, attributes and children.

    Attributes are name-unique and ordered. Children are exclusively owned.
    Elements whose tag is self-closing never have children.
    """

    __slots__ = ("attributes", "children", "tag")

    def __init__(self, tag: TagDescriptor | str):
        if isinstance(tag, str):
            tag = TAGS.get(tag.lower())
        if not isinstance(tag, TagDescriptor):
            msg = f"Invalid tag {tag!r} was specified"
            raise InvalidTag(msg)
        self.tag = tag
        self.attributes: list[Attribute] = []
        self.children: list[Node] = []

    @property
    def name(self) -> str:
        return self.tag.name

    def __repr__(self):
        return f"Element(<{self.tag.name}>, attributes={len(self.attributes)}, children={len(self.children)})"

    # Children

    def append_child(self, node: Node | str) -> Node:
        """Append a child node, wrapping strings as Text. Returns the appended node."""
        if self.tag.self_closing:
            msg = f'Cannot append children to self-closing tag "{self.tag.name}"'
            raise InvalidOperation(msg)
        if isinstance(node, str):
            node = Text(node)
        elif not isinstance(node, NODE_TYPES):
            msg = f"The appended node must be a Node or a string, found {node!r}"
            raise InvalidOperation(msg)
        self.children.append(node)
        return node

    def with_child(self, node: Node | str) -> Element:
        self.append_child(node)
        return self

    def apply(self, callback: Callable[[Element], Any]) -> Element:
        callback(self)
        return self

    # Attributes

    def attribute(self, name: str, value: Any = None) -> Attribute:
        """Get, create or replace the attribute called name.

        With a value, the attribute is replaced in place if present, or
        appended otherwise. Without a value this acts as a getter, but
        creates an empty attribute when it is missing: reading an absent
        attribute this way adds it to the element. Use get_attribute for a
        lookup without side effects.
        """
        for index, attribute in enumerate(self.attributes):
            if attribute.name == name:
                if value is not None:
                    attribute = create_attribute(name, value)
                    self.attributes[index] = attribute
                return attribute

        attribute = create_attribute(name, value)
        self.attributes.append(attribute)
        return attribute

    def with_attribute(self, name: str, value: Any = "") -> Element:
        self.attribute(name, value)
        return self

    def get_attribute(self, name: str) -> Attribute | None:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def remove_attribute(self, name: str) -> None:
        for index, attribute in enumerate(self.attributes):
            if attribute.name == name:
                del self.attributes[index]
                return

    def style(self, prop: str, value: Any = None):
        """Set a style property and return self, or get its value when no value is given."""
        if value is not None:
            style = self.attribute("style")
            style.set(prop, value)
            return self

        style = self.get_attribute("style")
        if isinstance(style, StyleAttribute):
            return style.get(prop)
        return None

    # Whitespace

    def purge_blank_children(self) -> None:
        """Recursively drop text and comment children that are insignificant whitespace.

        Single spaces are kept: in `<a>x</a> <code>y</code>` the space is
        what separates the two inline elements.
        """
        if self.tag.preserve_format:
            return

        kept = []
        for child in self.children:
            if isinstance(child, Element):
                child.purge_blank_children()
            elif is_blank_text(child.data):
                continue
            kept.append(child)
        self.children = kept

    def simplify_whitespaces(self) -> None:
        """Recursively purge blank children and collapse boundary whitespace in text children."""
        if self.tag.preserve_format:
            return

        self.purge_blank_children()
        for child in self.children:
            if isinstance(child, Text):
                child.data = simplify_text(child.data)
            elif isinstance(child, Element):
                child.simplify_whitespaces()

    # Search

    def find_first(self, predicate: Callable[[Element], bool]) -> Element | None:
        """Return the first direct child element matching predicate."""
        for child in self.children:
            if isinstance(child, Element) and predicate(child):
                return child
        return None

    def find_deep(self, predicate: Callable[[Element], bool]) -> Element | None:
        """Return the first descendant element matching predicate, in document order."""
        for child in self.children:
            if isinstance(child, Element):
                if predicate(child):
                    return child
                found = child.find_deep(predicate)
                if found is not None:
                    return found
        return None

    def get_by_tag_name(self, name: TagDescriptor | str) -> Element | None:
        """Return the first direct child element with the given tag."""
        name = _tag_name(name)
        return self.find_first(lambda element: tag_name_matches(element.tag, name))

    def find_by_tag_name(self, name: TagDescriptor | str) -> Element | None:
        name = _tag_name(name)
        return self.find_deep(lambda element: tag_name_matches(element.tag, name))

    def find_by_id(self, element_id: str) -> Element | None:
        def has_id(element):
            attribute = element.get_attribute("id")
            return attribute is not None and attribute.value == element_id

        return self.find_deep(has_id)

    # Node contract

    def render(self, style=None) -> str:
        """Return the outer HTML of this element. Defaults to tab-indented pretty output."""
        from .serialize import render_element

        return render_element(self, style)

    def render_inner(self, style=None) -> str:
        """Return the HTML of the children of this element."""
        from .serialize import render_children

        return render_children(self, style)

    def to_text(self) -> str:
        return "".join(child.to_text() for child in self.children)

    def to_json(self) -> dict[str, Any]:
        return {
            "type": "tag",
            "tag": self.tag.name,
            "attributes": [attribute.to_json() for attribute in self.attributes],
            "children": [child.to_json() for child in self.children],
        }

    def clone_children(self) -> list[Node]:
        return [child.clone() for child in self.children]

    def clone_attributes(self) -> list[Attribute]:
        return [attribute.clone() for attribute in self.attributes]

    def clone(self) -> Element:
        cloned = self._new_empty()
        cloned.attributes = self.clone_attributes()
        cloned.children = self.clone_children()
        return cloned

    def _new_empty(self):
        return Element(self.tag)


class LinkElement(Element):
    """An `a` element with shortcuts for its usual attributes."""

    __slots__ = ()

    def __init__(self, tag=None):
        super().__init__(tag or TAGS["a"])

    @property
    def href(self) -> str:
        return self.attribute("href").value

    @href.setter
    def href(self, value: str) -> None:
        self.attribute("href", value)

    @property
    def title(self) -> str:
        return self.attribute("title").value

    @title.setter
    def title(self, value: str) -> None:
        self.attribute("title", value)

    def _new_empty(self):
        return LinkElement(self.tag)


class ImageElement(Element):
    """An `img` element with shortcuts for its usual attributes."""

    __slots__ = ()

    def __init__(self, tag=None):
        super().__init__(tag or TAGS["img"])

    @property
    def src(self) -> str:
        return self.attribute("src").value

    @src.setter
    def src(self, value: str) -> None:
        self.attribute("src", value)

    @property
    def alt(self) -> str:
        return self.attribute("alt").value

    @alt.setter
    def alt(self, value: str) -> None:
        self.attribute("alt", value)

    @property
    def title(self) -> str:
        return self.attribute("title").value

    @title.setter
    def title(self, value: str) -> None:
        self.attribute("title", value)

    def _new_empty(self):
        return ImageElement(self.tag)


Node = Union[Element, Text, Comment]

NODE_TYPES = (Element, Text, Comment)

_ELEMENT_CLASSES = {
    "a": LinkElement,
    "img": ImageElement,
}


def create_element(tag: TagDescriptor | str) -> Element:
    """Create an element for a tag name or descriptor.

    Names are resolved case-insensitively. Unknown names are accepted and
    get a descriptor with default settings.
    """
    if isinstance(tag, str):
        tag = get_tag(tag)
    elif not isinstance(tag, TagDescriptor):
        msg = f"Invalid tag {tag!r} was specified"
        raise InvalidTag(msg)

    element_class = _ELEMENT_CLASSES.get(tag.name, Element)
    return element_class(tag)


def _tag_name(name):
    if isinstance(name, TagDescriptor):
        return name.name
    return name
