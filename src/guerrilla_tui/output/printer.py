# =============================================================================
# Printer
# =============================================================================
# Writes the two views of the application as boxed panels:
#
#   - Summary: the disposable addresses created at startup
#   - Message: one received email (metadata, then body)
#
# Output goes through a Rich Console bound to the caller's stream, one panel
# at a time, so nothing accumulates between messages. The console width is
# sampled once when the printer is created; terminal resizes are not tracked.
# =============================================================================

import logging
import os
import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, TextIO

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from guerrilla_tui.rendering.html import ConversionOptions, HTMLConverter
from guerrilla_tui.rendering.panel import DEFAULT_WIDTH, PanelRenderer, strip_controls
from guerrilla_tui.rendering.wrap import WrapStrategy

if TYPE_CHECKING:
    from guerrilla_tui.core import Message

logger = logging.getLogger(__name__)

# RFC 1123, e.g. "Mon, 15 Jan 2024 10:30:00 UTC"
DEFAULT_TIME_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"

SUMMARY_TITLE = "New Address Created"
BODY_TITLE = "Body"
VALUE_STYLE = "blue"
ADDRESS_INDENT = 4

# Metadata labels are padded with non-breaking spaces: the wrapper collapses
# ordinary space runs, and the values should still line up.
LABEL_WIDTH = 10
NBSP = "\u00a0"


def terminal_width(stream: TextIO | None = None) -> int:
    """
    Return the column count of the terminal behind ``stream``.

    Falls back to DEFAULT_WIDTH when the stream is not a terminal or the
    size cannot be read.
    """
    stream = stream or sys.stdout
    try:
        columns = os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, ValueError, OSError):
        return DEFAULT_WIDTH
    return columns or DEFAULT_WIDTH


class Printer(Protocol):
    """What the application needs from an output device."""

    def render_summary(self, addresses: Iterable[str]) -> None:
        """Show the list of addresses that will receive mail."""
        ...

    def render_message(self, message: "Message") -> None:
        """Show one received message."""
        ...


class ConsolePrinter:
    """
    Printer that draws panels on a text stream.

    Usage:
        >>> printer = ConsolePrinter(sys.stdout)
        >>> printer.render_summary(["abc@sharklasers.com"])
        >>> printer.render_message(message)

    Attributes:
        width: Panel width, fixed for the life of the printer.
        converter: HTML to text converter applied to HTML bodies.
        time_format: strftime format for the message timestamp.
    """

    def __init__(
        self,
        sink: TextIO | None = None,
        *,
        width: int | None = None,
        options: ConversionOptions | None = None,
        time_format: str = DEFAULT_TIME_FORMAT,
    ) -> None:
        """
        Initialize the printer.

        Args:
            sink: Stream to write to. Defaults to stdout.
            width: Panel width. Defaults to the terminal width of ``sink``.
            options: HTML conversion options.
            time_format: strftime format for message timestamps.
        """
        self.sink = sink or sys.stdout
        self.width = width if width is not None else terminal_width(self.sink)
        self.converter = HTMLConverter(options)
        self.time_format = time_format

        self._renderer = PanelRenderer(self.width)
        self._console = Console(
            file=self.sink,
            width=self._renderer.width,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def render_summary(self, addresses: Iterable[str]) -> None:
        """
        Show the created addresses. Blank entries are skipped.
        """
        panel = self._renderer
        lines = [
            *panel.header(SUMMARY_TITLE),
            *panel.content("Your disposable email addresses are:"),
            panel.blank(),
        ]

        for address in addresses:
            address = strip_controls(address).strip()
            if address:
                lines.extend(panel.content(
                    f"[{VALUE_STYLE}]{escape(address)}[/{VALUE_STYLE}]",
                    indent=ADDRESS_INDENT,
                ))

        lines.extend([
            panel.blank(),
            *panel.content("Emails will appear below as they are received."),
            *panel.footer(),
        ])
        self._write(lines)

    def render_message(self, message: "Message") -> None:
        """
        Show a message: subject, sender and time, then the body.

        HTML bodies are flattened to text first; if that fails for any
        reason the raw body is shown instead.
        """
        panel = self._renderer
        timestamp = message.timestamp.strftime(self.time_format).strip()

        lines = [
            *panel.header(f"Email #{message.id}"),
            *panel.content(self._field("Subject:", message.subject)),
            *panel.content(self._field("From:", message.sender)),
            *panel.content(self._field("Time:", timestamp)),
            *panel.section(BODY_TITLE),
            *panel.content(self._body_text(message), strategy=WrapStrategy.FIXED),
            *panel.footer(),
        ]
        self._write(lines)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _field(label: str, value: str) -> str:
        """Markup for a "Label:   value" metadata line."""
        # Header values come from the sender and may carry escape sequences
        value = escape(strip_controls(value))
        return f"{label.ljust(LABEL_WIDTH, NBSP)}[{VALUE_STYLE}]{value}[/{VALUE_STYLE}]"

    def _body_text(self, message: "Message") -> str:
        if not message.has_body:
            return ""

        try:
            return self.converter.convert(message.body)
        except Exception as e:
            logger.warning(f"HTML conversion failed for message {message.id}, showing raw body: {e}")
            return message.body

    def _write(self, lines: list[Text]) -> None:
        """Write one panel, preceded by an empty separator line."""
        self._console.line()
        for line in lines:
            self._console.print(line)
