# =============================================================================
# guerrilla-tui Entry Point for `python -m guerrilla_tui`
# =============================================================================
# This module allows guerrilla-tui to be run as a Python module:
#
#   python -m guerrilla_tui
#
# This is equivalent to running the 'guerrilla-tui' command after installation.
# =============================================================================

import sys

from guerrilla_tui.app import main

if __name__ == "__main__":
    sys.exit(main())
