# =============================================================================
# Output Module
# =============================================================================
# The printer is the only piece of the rendering stack the application talks
# to. It knows two things: how to show the freshly created addresses, and how
# to show a received message.
# =============================================================================

from guerrilla_tui.output.printer import ConsolePrinter, Printer, terminal_width

__all__ = ["ConsolePrinter", "Printer", "terminal_width"]
