"""HTML character reference encoding and decoding.

Decoding handles named references (&amp;, &nbsp;) and numeric references
(&#60;, &#x3C;). Named references must carry their trailing semicolon;
anything that does not resolve is left in the text untouched.

Encoding only touches the characters that are part of HTML syntax, plus the
non-breaking space so that it stays visible in the output.
"""

import html.entities
import re

# Python's complete HTML5 entity list. Keys include the trailing semicolon
# (e.g. "amp;"), and the legacy forms without it are present as well.
_HTML5_ENTITIES = html.entities.html5

# Lookup without semicolons, restricted to the terminated forms.
NAMED_ENTITIES = {key[:-1]: value for key, value in _HTML5_ENTITIES.items() if key.endswith(";")}

NBSP = "\u00a0"

_REPLACEMENT_CHARACTER = "\ufffd"

_ENTITY_PATTERN = re.compile(r"&(?:([A-Za-z][A-Za-z0-9]*)|#([0-9]+)|#[xX]([0-9A-Fa-f]+));")

# Order matters: "&" first so later replacements are not double-escaped.
_ENCODE_TABLE = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
    (NBSP, "&nbsp;"),
)


def decode_numeric_entity(text, is_hex=False):
    """Decode the digits of a numeric character reference like &#60; or &#x3C;.

    Args:
        text: The numeric part (without &# or ;)
        is_hex: Whether this is hexadecimal (&#x) or decimal (&#)

    Returns:
        The decoded character, or None if the digits are not a number
    """
    try:
        codepoint = int(text, 16 if is_hex else 10)
    except ValueError:
        return None

    # Surrogates and values past the last plane cannot be represented.
    if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        return _REPLACEMENT_CHARACTER
    return chr(codepoint)


def _decode_match(match):
    named, decimal, hexadecimal = match.groups()
    if named is not None:
        return NAMED_ENTITIES.get(named, match.group(0))
    if decimal is not None:
        decoded = decode_numeric_entity(decimal)
    else:
        decoded = decode_numeric_entity(hexadecimal, is_hex=True)
    return decoded if decoded is not None else match.group(0)


def decode_html(text):
    """Decode all character references in text."""
    if "&" not in text:
        return text
    return _ENTITY_PATTERN.sub(_decode_match, text)


def encode_html(text):
    """Escape the characters that are part of HTML syntax."""
    for char, entity in _ENCODE_TABLE:
        if char in text:
            text = text.replace(char, entity)
    return text
