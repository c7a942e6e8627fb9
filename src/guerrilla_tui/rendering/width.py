# =============================================================================
# Display Width
# =============================================================================
# Measures how many terminal columns a string occupies.
#
# Python's len() counts code points, which is wrong for terminal layout:
#   - East Asian wide glyphs and most emoji take 2 columns
#   - Combining marks and zero-width characters take 0 columns
#
# Rich already ships a cell width table for exactly this, so we use it.
# =============================================================================

from rich.cells import cell_len


def display_width(text: str | bytes) -> int:
    """
    Return the number of terminal columns ``text`` occupies.

    Markup must already be stripped. Byte strings are decoded as UTF-8; any
    malformed sequence becomes U+FFFD and is measured as one column.

    Examples:
        >>> display_width("hello")
        5
        >>> display_width("日本")
        4
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    return cell_len(text)
