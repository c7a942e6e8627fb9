# =============================================================================
# Rendering Module
# =============================================================================
# Turns message content into aligned, fixed-width terminal panels.
#
# Building blocks, leaf first:
#   - width: Display width of text in terminal columns
#   - wrap:  Markup-aware word wrapping and fixed-column splitting
#   - html:  Regex pipeline that flattens HTML bodies to plain text
#   - panel: Bordered panels built from Rich Text lines
#
# Applications should not use these directly; guerrilla_tui.output.Printer
# is the public surface.
# =============================================================================

from guerrilla_tui.rendering.html import ConversionOptions, HTMLConverter, html_to_text, is_html
from guerrilla_tui.rendering.panel import DEFAULT_WIDTH, PanelRenderer
from guerrilla_tui.rendering.width import display_width
from guerrilla_tui.rendering.wrap import WrapStrategy, split_fixed, wrap_markup

__all__ = [
    "ConversionOptions",
    "DEFAULT_WIDTH",
    "HTMLConverter",
    "PanelRenderer",
    "WrapStrategy",
    "display_width",
    "html_to_text",
    "is_html",
    "split_fixed",
    "wrap_markup",
]
