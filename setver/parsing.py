import enum
import logging

from pyparsing import (
    Forward,
    Optional,
    ParseException,
    Suppress,
    ZeroOrMore,
)

from .types import SetVersion

logger = logging.getLogger("setver.parsing")

DEFAULT_MAX_DEPTH = 32

ASCII_WHITESPACE = " \t\n\r\f\v"


class SetVerParseError(ValueError):
    """Base class of everything :func:`parse_version` raises.

    ``offset`` is the byte offset of the problem in the UTF-8 encoded input.
    """

    description = "Invalid version"

    def __init__(self, offset, character=None, text=None) -> None:
        self.offset = offset
        self.character = character
        self.text = text
        super().__init__(str(self))

    def __str__(self):
        if self.character is not None:
            return f"{self.description} {self.character!r} at offset {self.offset}"

        return f"{self.description} at offset {self.offset}"


class UnexpectedCharacter(SetVerParseError):
    description = "Unexpected character"


class UnbalancedBraces(SetVerParseError):
    description = "Unbalanced braces"


class TrailingData(SetVerParseError):
    description = "Trailing data after version"


class EmptyInput(SetVerParseError):
    description = "Empty input"


class DepthExceeded(SetVerParseError):

    def __init__(self, offset, max_depth, text=None, out_of_stack=False) -> None:
        self.max_depth = max_depth
        self.out_of_stack = out_of_stack
        super().__init__(offset, "{", text)

    def __str__(self):
        if self.out_of_stack:
            return f"Nesting too deep for the interpreter stack at offset {self.offset}"

        return f"Nesting deeper than {self.max_depth} levels at offset {self.offset}"


#
# Scanning
#
"""
The scanner walks the input once, character by character, tracking which token
may come next at the current nesting level. It rejects anything outside the
grammar with a precise error and hands a whitespace-free copy of the input to
the grammar below, together with the original offset of every kept character.
"""

class State(enum.Enum):
    EXPECT_OPEN_BRACE = 0
    EXPECT_ELEMENT_OR_CLOSE = 1
    EXPECT_COMMA_OR_CLOSE = 2
    DONE = 3


def scan(text, max_depth=DEFAULT_MAX_DEPTH):
    tokens = []
    offsets = []

    state = State.EXPECT_OPEN_BRACE
    depth = 0

    # Only ASCII is ever accepted, so until the first error the character
    # index is also the byte offset.
    for offset, char in enumerate(text):
        if char in ASCII_WHITESPACE:
            continue

        if state is State.DONE:
            if char == "}":
                raise UnbalancedBraces(offset, char, text)
            raise TrailingData(offset, char, text)

        if char == "{":
            if state is State.EXPECT_COMMA_OR_CLOSE:
                raise UnexpectedCharacter(offset, char, text)

            depth += 1
            if depth > max_depth:
                raise DepthExceeded(offset, max_depth, text)

            state = State.EXPECT_ELEMENT_OR_CLOSE

        elif char == "}":
            if depth == 0:
                raise UnbalancedBraces(offset, char, text)

            if state is State.EXPECT_OPEN_BRACE:
                # A comma directly followed by a closing brace.
                raise UnexpectedCharacter(offset, char, text)

            depth -= 1
            state = State.DONE if depth == 0 else State.EXPECT_COMMA_OR_CLOSE

        elif char == ",":
            if state is not State.EXPECT_COMMA_OR_CLOSE:
                raise UnexpectedCharacter(offset, char, text)

            state = State.EXPECT_OPEN_BRACE

        else:
            raise UnexpectedCharacter(offset, char, text)

        tokens.append(char)
        offsets.append(offset)

    if not tokens:
        raise EmptyInput(len(text), text=text)

    if state is not State.DONE:
        raise UnbalancedBraces(len(text), text=text)

    return "".join(tokens), offsets


#
# Grammar
#

def _build_version(tokens):
    return [SetVersion.from_children(tokens)]


LBRACE = Suppress("{")
RBRACE = Suppress("}")
COMMA = Suppress(",")

VERSION = Forward().set_name("version")
VERSION <<= (
    LBRACE + Optional(VERSION + ZeroOrMore(COMMA + VERSION)) + RBRACE
).set_parse_action(_build_version)


def as_text(string):
    """Decodes bytes as UTF-8 and rejects anything that is not text.

    Undecodable bytes are kept as lone surrogates, so the scanner reports them
    as unexpected characters at their own offset.
    """
    if isinstance(string, (bytes, bytearray)):
        return bytes(string).decode("utf-8", errors="surrogateescape")

    if not isinstance(string, str):
        raise ValueError(f"Invalid version string type '{type(string)}'.")

    return string


def _deepest_open_brace(compact):
    depth = deepest = index = 0

    for i, char in enumerate(compact):
        if char == "{":
            depth += 1
            if depth > deepest:
                deepest, index = depth, i
        elif char == "}":
            depth -= 1

    return index


def parse_version(string, max_depth=DEFAULT_MAX_DEPTH):
    """Parses SetVer brace syntax, e.g. ``{{},{{}}}``, into a :class:`SetVersion`.

    Whitespace between tokens is ignored. Repeated elements collapse into
    one, and children are put into canonical order.

    Args:
        string (str | bytes): The text to parse. Bytes are decoded as UTF-8.
        max_depth (int): Maximum brace nesting accepted.

    Raises:
        SetVerParseError: One of its subclasses, carrying the byte offset of
        the problem.

    Returns:
        :class:`SetVersion`: The canonical version.
    """
    string = as_text(string)

    try:
        compact, offsets = scan(string, max_depth)
    except SetVerParseError as e:
        logger.debug(f"Rejected {string!r}: {e}")
        raise

    try:
        version = VERSION.parse_string(compact, parse_all=True)[0]
    except ParseException as e:
        offset = offsets[e.loc] if e.loc < len(offsets) else len(string)
        raise UnexpectedCharacter(offset, compact[e.loc:e.loc + 1] or None, string) from e
    except RecursionError as e:
        # The grammar recurses once per brace level, so a generous max_depth
        # can still outgrow the interpreter stack.
        offset = offsets[_deepest_open_brace(compact)]
        raise DepthExceeded(offset, max_depth, string, out_of_stack=True) from e

    logger.debug(f"Parsed {string!r} as {version}")

    return version
