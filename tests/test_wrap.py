# =============================================================================
# Wrapping Tests
# =============================================================================
# Covers the markup-aware word wrapper and the fixed-column splitter.
# =============================================================================

import pytest

from guerrilla_tui.rendering.width import display_width
from guerrilla_tui.rendering.wrap import (
    MARKUP_TAG_RE,
    TokenKind,
    WrapStrategy,
    fit_lines,
    split_fixed,
    strip_markup,
    tokenize,
    wrap_markup,
)


# -----------------------------------------------------------------------------
# Tokenizer
# -----------------------------------------------------------------------------

def test_tokenize_separates_markup_breaks_and_words():
    tokens = tokenize("[b]hi   there[/b]\nx")
    assert [t.kind for t in tokens] == [
        TokenKind.MARKUP,
        TokenKind.WORD,
        TokenKind.WORD,
        TokenKind.MARKUP,
        TokenKind.BREAK,
        TokenKind.WORD,
    ]
    assert [t.text for t in tokens] == ["[b]", "hi", "there", "[/b]", "\n", "x"]


def test_tokenize_treats_escaped_brackets_as_text():
    tokens = tokenize(r"\[bold] x")
    assert [t.kind for t in tokens] == [TokenKind.WORD, TokenKind.WORD]


def test_tokenize_ignores_bracketed_text_that_is_not_a_tag():
    # Rich tags start lowercase; "[SPAM]" is literal text
    tokens = tokenize("[SPAM] offer")
    assert all(t.kind is TokenKind.WORD for t in tokens)


def test_strip_markup():
    assert strip_markup("[blue]a@b.com[/blue]") == "a@b.com"
    assert strip_markup(r"\[bold] x") == "[bold] x"


def test_strip_markup_falls_back_on_bad_markup():
    assert strip_markup("[/blue]hello") == "hello"


# -----------------------------------------------------------------------------
# Markup-aware wrapper
# -----------------------------------------------------------------------------

def test_empty_input_yields_one_empty_line():
    assert wrap_markup("", 10) == [""]


def test_short_input_is_a_single_unchanged_line():
    text = "[bold]hello world[/bold]"
    assert wrap_markup(text, 40) == [text]


def test_space_runs_collapse():
    assert wrap_markup("a    b", 10) == ["a b"]


def test_greedy_word_wrap():
    assert wrap_markup("one two three four", 9) == ["one two", "three", "four"]


def test_markup_has_no_width():
    # 4 + 1 + 4 visible columns: fits exactly in 9
    lines = wrap_markup("[red]aaaa[/red] [blue]bbbb[/blue]", 9)
    assert len(lines) == 1
    assert strip_markup(lines[0]) == "aaaa bbbb"


@pytest.mark.parametrize("width", [1, 3, 5, 8, 13])
def test_markup_tags_are_never_split(width):
    text = "[bold]Subject:[/bold] [blue]a rather long subject line[/blue] [link=http://x.test]x[/link]"
    lines = wrap_markup(text, width)

    tags_in = MARKUP_TAG_RE.findall(text)
    tags_out = [tag for line in lines for tag in MARKUP_TAG_RE.findall(line)]
    assert tags_out == tags_in


def test_long_word_gets_its_own_line_uncut():
    assert wrap_markup("a verylongword b", 5) == ["a", "verylongword", "b"]


def test_explicit_breaks_close_lines():
    assert wrap_markup("a\n\nb", 10) == ["a", "", "b"]


def test_wide_glyphs_count_double():
    assert wrap_markup("日本 日本", 5) == ["日本", "日本"]


def test_wrapped_lines_fit_the_width():
    text = "The quick brown fox jumps over the lazy dog " * 5
    for line in wrap_markup(text, 17):
        assert display_width(strip_markup(line)) <= 17


# -----------------------------------------------------------------------------
# Fixed-column splitter
# -----------------------------------------------------------------------------

def test_split_fixed_cuts_at_exact_columns():
    assert split_fixed("abcdefgh", 3) == ["abc", "def", "gh"]


def test_split_fixed_ignores_word_boundaries():
    assert split_fixed("hello world", 4) == ["hell", "o wo", "rld"]


def test_split_fixed_trims_and_keeps_blank_lines():
    assert split_fixed("  hi  \n\nthere", 10) == ["hi", "", "there"]


def test_split_fixed_exact_multiple_has_no_trailing_chunk():
    assert split_fixed("abcdef", 3) == ["abc", "def"]


def test_split_fixed_does_not_straddle_wide_glyphs():
    assert split_fixed("日本語", 3) == ["日", "本", "語"]


def test_split_fixed_leaves_markup_alone():
    assert split_fixed("[bold]x[/bold]", 20) == ["[bold]x[/bold]"]


def test_fit_lines_uses_the_requested_strategy():
    text = "hello world"
    assert fit_lines(text, 4, WrapStrategy.FIXED) == ["hell", "o wo", "rld"]
    assert fit_lines(text, 4, WrapStrategy.MARKUP) == ["hello", "world"]
