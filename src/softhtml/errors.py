"""Exceptions and parse diagnostics for softhtml."""


class SoftHTMLError(Exception):
    """Base class for all errors raised by softhtml."""


class InvalidOperation(SoftHTMLError):
    """Raised when a tree mutation is not allowed (e.g. children on a self-closing tag)."""


class InvalidTag(SoftHTMLError):
    """Raised when an element is built from something that is not a tag."""


# Readable descriptions of the leniency events the parser records.
MESSAGES = {
    "unexpected-end-tag": "end tag does not close the open element and was dropped",
    "eof-in-comment": "comment runs to the end of the input",
    "eof-in-tag": "start tag runs to the end of the input",
    "expected-closing-tag-but-got-eof": "element was still open at the end of the input",
    "invalid-first-character-of-tag-name": "'<' does not start a tag and was kept as text",
    "nesting-too-deep": "element is nested too deeply, its content was added to the enclosing element",
}


class ParseError:
    """A place where the parser absorbed or reinterpreted malformed input.

    The parser never fails on malformed input. When error collection is
    enabled, each such event is recorded as a ParseError instead. `message`
    defaults to the description of `code` in MESSAGES. Errors compare and
    hash by code and location.
    """

    __slots__ = ("code", "column", "line", "message")

    def __init__(self, code, line=None, column=None, message=None):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or MESSAGES.get(code, code)

    @property
    def location(self):
        if self.line is None or self.column is None:
            return None
        return self.line, self.column

    def __repr__(self):
        if self.location is None:
            return f"ParseError({self.code!r})"
        return f"ParseError({self.code!r}, line={self.line}, column={self.column})"

    def __str__(self):
        text = self.code if self.message == self.code else f"{self.code} - {self.message}"
        if self.location is None:
            return text
        return f"({self.line},{self.column}): {text}"

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return (self.code, self.location) == (other.code, other.location)

    def __hash__(self):
        return hash((self.code, self.location))


class StrictModeError(SoftHTMLError):
    """Raised by strict parsing on the first recorded ParseError."""

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))
