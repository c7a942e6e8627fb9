# =============================================================================
# guerrilla-tui: Disposable Email in Your Terminal
# =============================================================================
#
# guerrilla-tui creates a temporary Guerrilla Mail address and prints every
# email it receives as a neatly boxed panel in the terminal.
#
# Features:
#   - One-shot disposable address with all shared domain aliases
#   - Live polling of the inbox
#   - HTML email flattened to readable plain text
#   - Width-aware panels that stay aligned with wide glyphs
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "guerrilla-tui"

# Main entry point - this is what gets called by the 'guerrilla-tui' command
from guerrilla_tui.app import main

__all__ = ["main", "__version__", "__app_name__"]
