# =============================================================================
# Panel Renderer
# =============================================================================
# Draws fixed-width boxed panels out of Rich Text lines:
#
#   ╭─┤ Email #42 ├──────────────────────────────╮
#   │                                            │
#   │ Subject:  Hi                               │
#   │                                            │
#   ├─┤ Body ├───────────────────────────────────┤
#   │                                            │
#   │ plain text, no tags                        │
#   │                                            │
#   ╰────────────────────────────────────────────╯
#
# Every line a renderer produces is exactly `width` columns wide, whatever
# the content: titles are truncated, content is wrapped and padded, and any
# word too long for the panel is folded.
# =============================================================================

import logging
import re

from rich.errors import MarkupError
from rich.text import Text

from guerrilla_tui.rendering.width import display_width
from guerrilla_tui.rendering.wrap import WrapStrategy, fit_lines, strip_markup

logger = logging.getLogger(__name__)

# Box drawing glyphs
BORDER_TOP_LEFT = "╭"
BORDER_TOP_RIGHT = "╮"
BORDER_BOTTOM_LEFT = "╰"
BORDER_BOTTOM_RIGHT = "╯"
BORDER_VERTICAL = "│"
BORDER_HORIZONTAL = "─"
BORDER_LEFT_T = "├"
BORDER_RIGHT_T = "┤"

DEFAULT_WIDTH = 80
MIN_WIDTH = 10
TAB_SIZE = 4

BORDER_STYLE = "dim"
TITLE_STYLE = "bold"

# Columns used by "│ " on the left and " │" on the right of a content line
CONTENT_CHROME = 4
# Columns used by "╭─┤ " + " ├" + "╮" around a title
TITLE_CHROME = 7

# C0 and C1 control characters other than tab and newline
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


def strip_controls(text: str) -> str:
    """Remove control characters (escape sequences included) from untrusted text."""
    return _CONTROL_RE.sub("", text)


class PanelRenderer:
    """
    Builds the lines of a bordered panel.

    The renderer holds nothing but the panel width, so one instance can
    render any number of panels.

    Usage:
        >>> renderer = PanelRenderer(60)
        >>> lines = [
        ...     *renderer.header("Hello"),
        ...     *renderer.content("[blue]styled[/blue] text"),
        ...     *renderer.footer(),
        ... ]

    Attributes:
        width: Total width of every line, borders included.
    """

    def __init__(self, width: int = DEFAULT_WIDTH) -> None:
        self.width = max(width, MIN_WIDTH)

    # -------------------------------------------------------------------------
    # Borders
    # -------------------------------------------------------------------------

    def _titled_rule(self, title: str, left: str, right: str) -> Text:
        """A horizontal rule with a bold title near its left end."""
        # Titles are plain text, never markup
        title_text = Text(strip_controls(title), style=TITLE_STYLE)
        room = self.width - TITLE_CHROME
        if title_text.cell_len > room:
            title_text.truncate(room, overflow="ellipsis")

        fill = BORDER_HORIZONTAL * max(room - title_text.cell_len, 0)
        return Text.assemble(
            (f"{left}{BORDER_HORIZONTAL}{BORDER_RIGHT_T}", BORDER_STYLE),
            " ",
            title_text,
            " ",
            (f"{BORDER_LEFT_T}{fill}{right}", BORDER_STYLE),
        )

    def top_border(self, title: str) -> Text:
        """The first line of a panel, carrying its title."""
        return self._titled_rule(title, BORDER_TOP_LEFT, BORDER_TOP_RIGHT)

    def divider(self, title: str) -> Text:
        """A titled separator between two sections of a panel."""
        return self._titled_rule(title, BORDER_LEFT_T, BORDER_RIGHT_T)

    def bottom_border(self) -> Text:
        """The last line of a panel."""
        return Text(
            f"{BORDER_BOTTOM_LEFT}{BORDER_HORIZONTAL * (self.width - 2)}{BORDER_BOTTOM_RIGHT}",
            style=BORDER_STYLE,
        )

    def blank(self) -> Text:
        """An empty content line."""
        return self._frame(Text(), 0)

    # Composite sections, spaced the way every panel is laid out

    def header(self, title: str) -> list[Text]:
        return [self.top_border(title), self.blank()]

    def section(self, title: str) -> list[Text]:
        return [self.blank(), self.divider(title), self.blank()]

    def footer(self) -> list[Text]:
        return [self.blank(), self.bottom_border()]

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def content(
        self,
        text: str,
        *,
        indent: int = 0,
        strategy: WrapStrategy = WrapStrategy.MARKUP,
    ) -> list[Text]:
        """
        Fit ``text`` into the panel and return the framed lines.

        Args:
            text: Content to show. Rich markup when ``strategy`` is MARKUP,
                  raw text (shown literally) when it is FIXED.
            indent: Extra spaces between the left border and the text.
            strategy: Which wrapper fits the text to the panel.

        Returns:
            One or more lines, each exactly ``width`` columns wide.
        """
        indent = min(max(indent, 0), self.width - CONTENT_CHROME - 1)
        inner = self.width - CONTENT_CHROME - indent

        text = text.expandtabs(TAB_SIZE)
        if strategy is WrapStrategy.FIXED:
            text = strip_controls(text.replace("\r\n", "\n"))

        lines = fit_lines(text, inner, strategy)
        if strategy is WrapStrategy.FIXED:
            styled = [Text(line) for line in lines]
        else:
            styled = self._style_lines(lines)

        framed: list[Text] = []
        for line in styled:
            for piece in self._fold(line, inner):
                framed.append(self._frame(piece, indent))
        return framed

    def _style_lines(self, lines: list[str]) -> list[Text]:
        """
        Parse wrapped markup lines as one block.

        A tag opened on one line keeps applying on the lines after it, so the
        lines are parsed together and split apart again afterwards.
        """
        joined = "\n".join(lines)
        try:
            block = Text.from_markup(joined, emoji=False)
        except MarkupError as e:
            logger.warning(f"Invalid markup in panel content, showing plain text: {e}")
            block = Text("\n".join(strip_markup(line) for line in lines))

        return list(block.split("\n", allow_blank=True))

    @staticmethod
    def _fold(line: Text, width: int) -> list[Text]:
        """Break a line wider than ``width`` at column boundaries."""
        if line.cell_len <= width:
            return [line]

        offsets: list[int] = []
        used = 0
        for index, char in enumerate(line.plain):
            char_width = display_width(char)
            if used + char_width > width and used > 0:
                offsets.append(index)
                used = 0
            used += char_width
        return list(line.divide(offsets))

    def _frame(self, line: Text, indent: int) -> Text:
        """Add borders, indent and right padding around a content line."""
        padding = self.width - CONTENT_CHROME - indent - line.cell_len
        return Text.assemble(
            (BORDER_VERTICAL, BORDER_STYLE),
            " " * (indent + 1),
            line,
            " " * max(padding, 0),
            " ",
            (BORDER_VERTICAL, BORDER_STYLE),
        )
