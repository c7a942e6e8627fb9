# =============================================================================
# Display Width Tests
# =============================================================================

from guerrilla_tui.rendering.width import display_width


def test_ascii_is_one_column_per_character():
    assert display_width("hello") == 5
    assert display_width("") == 0


def test_wide_glyphs_take_two_columns():
    assert display_width("日本") == 4
    assert display_width("a日b") == 4


def test_combining_marks_take_no_columns():
    # "e" followed by COMBINING ACUTE ACCENT
    assert display_width("e\u0301") == 1


def test_bytes_are_decoded():
    assert display_width("日本".encode("utf-8")) == 4


def test_malformed_bytes_do_not_raise():
    # Each invalid byte becomes one replacement character
    assert display_width(b"ab\xff") == 3
