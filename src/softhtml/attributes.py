"""Typed HTML attributes.

Attribute values are stored in their most useful form: a plain string for
most attributes, an ordered list of class names for `class`, and an ordered
property -> value mapping for `style`. The `value` property always gives the
string form used in HTML output.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from .entities import encode_html

_CSS_COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)


def create_attribute(name: str, value: Any = None) -> Attribute:
    """Create the attribute class matching name, normalizing value."""
    if name == "class":
        return ClassAttribute(value)
    if name == "style":
        return StyleAttribute(value)
    return SimpleAttribute(name, value)


class Attribute:
    """Shared behavior of all attribute kinds.

    Subclasses define `name`, `value`, `set_value`, `to_json` and `clone`.
    """

    __slots__ = ("_value",)

    @property
    def real_value(self):
        """The underlying typed value (str, list of class names, or style dict)."""
        return self._value

    def render(self) -> str:
        value = self.value
        if not value:
            return self.name
        return f'{self.name}="{encode_html(value)}"'

    def __eq__(self, other):
        if not isinstance(other, Attribute):
            return NotImplemented
        return type(self) is type(other) and self.name == other.name and self._value == other._value

    __hash__ = None


class SimpleAttribute(Attribute):
    __slots__ = ("name",)

    def __init__(self, name: str, value: str | None = None):
        self.name = name
        self._value = _build_simple_value(value)

    @property
    def value(self) -> str:
        return self._value

    def set_value(self, value: str | None) -> None:
        self._value = _build_simple_value(value)

    def __repr__(self):
        return f"SimpleAttribute({self.name!r}, {self._value!r})"

    def to_json(self) -> dict[str, Any]:
        return {"type": "attribute", "name": self.name, "value": self.value}

    def clone(self) -> SimpleAttribute:
        return SimpleAttribute(self.name, self._value)


def _build_simple_value(value):
    if value is None:
        return ""
    return str(value).strip()


class ClassAttribute(Attribute):
    """The `class` attribute, kept as an ordered list of class names.

    Order is preserved and duplicates are kept as written.
    """

    __slots__ = ()

    name = "class"

    def __init__(self, value: str | Iterable[str] | None = None):
        self._value = _build_class_value(value)

    @property
    def value(self) -> str:
        return " ".join(self._value)

    def set_value(self, value: str | Iterable[str] | None) -> None:
        self._value = _build_class_value(value)

    def add(self, class_name: str) -> None:
        self._value.append(class_name)

    def remove(self, class_name: str) -> bool:
        """Remove the first occurrence of class_name. Returns False if it was absent."""
        try:
            self._value.remove(class_name)
        except ValueError:
            return False
        return True

    def contains(self, class_name: str) -> bool:
        return class_name in self._value

    def __repr__(self):
        return f"ClassAttribute({self._value!r})"

    def to_json(self) -> dict[str, Any]:
        return {"type": "class_attribute", "name": self.name, "value": self.value, "classes": list(self._value)}

    def clone(self) -> ClassAttribute:
        return ClassAttribute(self._value)


def _build_class_value(value):
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(class_name) for class_name in value]


class StyleAttribute(Attribute):
    """The `style` attribute, kept as an ordered property -> value mapping."""

    __slots__ = ()

    name = "style"

    def __init__(self, value: str | Mapping[str, Any] | None = None):
        self._value = _build_style_value(value)

    @property
    def value(self) -> str:
        declarations = "; ".join(f"{prop}: {value}" for prop, value in self._value.items())
        return f"{declarations};" if declarations else ""

    def set_value(self, value: str | Mapping[str, Any] | None) -> None:
        self._value = _build_style_value(value)

    def set(self, prop: str, value: Any) -> None:
        self._value[prop.strip()] = str(value).strip()

    def get(self, prop: str) -> str | None:
        return self._value.get(prop)

    def remove(self, prop: str) -> bool:
        """Remove a property. Returns False if it was absent."""
        return self._value.pop(prop, None) is not None

    def __repr__(self):
        return f"StyleAttribute({self._value!r})"

    def to_json(self) -> dict[str, Any]:
        return {"type": "style_attribute", "name": self.name, "value": self.value, "style": dict(self._value)}

    def clone(self) -> StyleAttribute:
        return StyleAttribute(self._value)


def _build_style_value(value):
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {str(prop).strip(): str(prop_value).strip() for prop, prop_value in value.items()}

    declarations = {}
    for declaration in _CSS_COMMENT_PATTERN.sub("", str(value)).split(";"):
        prop, colon, prop_value = declaration.partition(":")
        prop = prop.strip()
        # Segments without a colon or without a property name are malformed.
        if not colon or not prop:
            continue
        declarations[prop] = prop_value.strip()
    return declarations
