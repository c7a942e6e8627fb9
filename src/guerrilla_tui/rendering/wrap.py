# =============================================================================
# Text Wrapping
# =============================================================================
# Two line-fitting strategies for panel content:
#
#   - MARKUP: Word wrapping for styled text. Rich markup tags such as
#             [bold] or [/blue] are zero-width and never broken. Runs of
#             spaces collapse to one.
#   - FIXED:  Column chopping for raw text (message bodies). Each line is
#             trimmed and then cut into chunks of exactly `width` columns,
#             with no regard for word boundaries.
#
# Callers pick the strategy explicitly; nothing here guesses which one a
# string needs.
# =============================================================================

import re
from dataclasses import dataclass
from enum import Enum, auto

from rich.errors import MarkupError
from rich.text import Text

from guerrilla_tui.rendering.width import display_width

# Same shape Rich uses to recognise a tag: lowercase name, #colour, @handler
# or a closing slash. A preceding backslash escapes it.
MARKUP_TAG_RE = re.compile(r"(?<!\\)\[[a-z#/@][^\[\]\n]*\]")

_SPLIT_RE = re.compile(r"((?<!\\)\[[a-z#/@][^\[\]\n]*\]|\n)")


class WrapStrategy(Enum):
    """How a block of content is fitted into a panel."""
    MARKUP = auto()     # Word wrap, markup aware
    FIXED = auto()      # Hard column cuts, no markup


class TokenKind(Enum):
    """Kinds of token produced by tokenize()."""
    MARKUP = auto()
    BREAK = auto()
    WORD = auto()


@dataclass(frozen=True)
class Token:
    """A single unit of styled text."""
    kind: TokenKind
    text: str


def strip_markup(text: str) -> str:
    """
    Return the visible text of a Rich markup string.

    Tags are removed and escaped brackets are unescaped. If the markup is
    malformed, tags are removed by pattern instead.
    """
    try:
        return Text.from_markup(text, emoji=False).plain
    except MarkupError:
        return MARKUP_TAG_RE.sub("", text)


def tokenize(text: str) -> list[Token]:
    """
    Split styled text into markup tags, explicit line breaks and words.

    Whitespace between words is discarded; wrap_markup() re-inserts single
    spaces when it joins words back together.
    """
    tokens: list[Token] = []
    text = text.replace("\r\n", "\n")

    # re.split with a capture group alternates text, separator, text, ...
    for index, piece in enumerate(_SPLIT_RE.split(text)):
        if not piece:
            continue
        if index % 2:
            if piece == "\n":
                tokens.append(Token(TokenKind.BREAK, piece))
            else:
                tokens.append(Token(TokenKind.MARKUP, piece))
            continue
        for word in piece.split(" "):
            if word:
                tokens.append(Token(TokenKind.WORD, word))

    return tokens


def wrap_markup(text: str, width: int) -> list[str]:
    """
    Word-wrap styled text into lines of at most ``width`` visible columns.

    Markup tags are copied through untouched and do not count toward the
    width. A word wider than ``width`` is put on a line of its own rather
    than being cut.

    Always returns at least one line.

    Example:
        >>> wrap_markup("[blue]one two[/blue] three", 8)
        ['[blue]one two[/blue]', 'three']
    """
    width = max(width, 1)
    lines: list[str] = []
    line = ""
    used = 0
    has_words = False

    for token in tokenize(text):
        if token.kind is TokenKind.BREAK:
            lines.append(line)
            line, used, has_words = "", 0, False
            continue

        if token.kind is TokenKind.MARKUP:
            line += token.text
            continue

        word_width = display_width(strip_markup(token.text))
        if has_words and used + 1 + word_width > width:
            lines.append(line)
            line, used = token.text, word_width
        else:
            if has_words:
                line += " "
                used += 1
            line += token.text
            used += word_width
        has_words = True

    if line:
        lines.append(line)

    return lines or [""]


def _cut(line: str, width: int) -> tuple[str, str]:
    """Split ``line`` after at most ``width`` columns (at least one character)."""
    used = 0
    for index, char in enumerate(line):
        char_width = display_width(char)
        if used + char_width > width and index > 0:
            return line[:index], line[index:]
        used += char_width
    return line, ""


def split_fixed(text: str, width: int) -> list[str]:
    """
    Chop plain text into chunks of exactly ``width`` columns.

    Each input line is stripped first. Blank input lines are kept as empty
    chunks. A wide glyph that would straddle the boundary moves to the next
    chunk, so a chunk may come up one column short.

    Example:
        >>> split_fixed("abcdefgh\\n\\n  xy  ", 3)
        ['abc', 'def', 'gh', '', 'xy']
    """
    width = max(width, 1)
    output: list[str] = []

    for raw_line in text.replace("\r\n", "\n").split("\n"):
        line = raw_line.strip()
        while display_width(line) > width:
            head, line = _cut(line, width)
            output.append(head)
        output.append(line)

    return output


def fit_lines(text: str, width: int, strategy: WrapStrategy) -> list[str]:
    """Fit ``text`` into ``width`` columns using the chosen strategy."""
    if strategy is WrapStrategy.FIXED:
        return split_fixed(text, width)
    return wrap_markup(text, width)
