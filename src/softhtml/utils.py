"""Whitespace and position helpers shared by the tree model, parser and serializer."""

import re

# Characters treated as boundary whitespace around text.
SPACES = frozenset(" \t\r\n")

_SIMPLIFY_PATTERN = re.compile(r"\A[\t ]+|[\t ]*\n[\t ]*|[\t ]+\Z")


def get_leading_spaces(text):
    """Count the whitespace characters at the start of text."""
    count = 0
    for char in text:
        if char not in SPACES:
            break
        count += 1
    return count


def get_trailing_spaces(text):
    """Count the whitespace characters at the end of text."""
    count = 0
    for char in reversed(text):
        if char not in SPACES:
            break
        count += 1
    return count


def is_blank_text(text):
    """Check if text is insignificant whitespace that can be purged.

    Blank means either a run of two or more spaces/tabs, or only spaces, tabs
    and newlines with at least one newline. A single space is not blank: it
    may be all that separates two inline elements.
    """
    if text.strip(" \t\n"):
        return False
    return "\n" in text or len(text) >= 2


def _simplify_match(match):
    return "\n" if "\n" in match.group(0) else " "


def simplify_text(text):
    """Collapse boundary runs of spaces/tabs to one space and spaces around newlines to one newline."""
    return _SIMPLIFY_PATTERN.sub(_simplify_match, text)


def line_and_column(source, offset):
    """Map a character offset in source to a 1-based (line, column) pair."""
    line = source.count("\n", 0, offset) + 1
    last_newline = source.rfind("\n", 0, offset)
    return line, offset - last_newline
