# =============================================================================
# HTML to Text Conversion
# =============================================================================
# Flattens an HTML email body into plain text for a fixed-width console.
#
# This is deliberately not an HTML parser. Email bodies are frequently
# truncated or malformed, and all we need is readable text, so conversion is
# a fixed sequence of regex substitutions:
#
#   1. Detection      - is this HTML at all? If not, leave it alone.
#   2. Structure      - <br>, <p>, <div>, <h1>-<h6> become newlines
#   3. Tables         - <table>/<tr> become newlines, cells become a separator
#   4. Lists          - <ul>/<ol> become newlines, <li> becomes a bullet
#   5. Links          - <a href="u">text</a> becomes "text (u)" or "text"
#   6. Tag stripping  - everything else between < and > goes
#   7. Entities       - &amp; &lt; &#8217; ... are decoded
#   8. Whitespace     - blank line runs collapse, ends are trimmed
#
# Order matters: links must be rewritten before tags are stripped, and
# entities must be decoded after stripping so that &lt;b&gt; survives as
# literal text.
# =============================================================================

import html
import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionOptions:
    """
    Options for HTML to text conversion.

    Attributes:
        show_link_urls: Append " (url)" after link text.
        use_list_bullets: Prefix list items with a bullet.
        table_separator: Text inserted where a table cell starts or ends.
    """
    show_link_urls: bool = True
    use_list_bullets: bool = True
    table_separator: str = "\t"


LIST_BULLET = "• "

# -----------------------------------------------------------------------------
# Patterns
# -----------------------------------------------------------------------------

_FLAGS = re.IGNORECASE

RE_HTML_TAG = re.compile(
    r"<\s*(?:html|body|div|p|br|a|table|tr|td|th|ul|ol|li|h[1-6]|img|input)\b[^>]*>",
    _FLAGS,
)

RE_BR = re.compile(r"</?br\b[^>]*>", _FLAGS)
RE_P = re.compile(r"</?p\b[^>]*>", _FLAGS)
RE_DIV = re.compile(r"</?div\b[^>]*>", _FLAGS)
RE_HEADING = re.compile(r"</?h[1-6]\b[^>]*>", _FLAGS)

RE_TABLE = re.compile(r"</?table\b[^>]*>", _FLAGS)
RE_TR = re.compile(r"</?tr\b[^>]*>", _FLAGS)
RE_CELL = re.compile(r"</?t[dh]\b[^>]*>", _FLAGS)

RE_LIST = re.compile(r"</?[uo]l\b[^>]*>", _FLAGS)
RE_LI = re.compile(r"<li\b[^>]*>", _FLAGS)
RE_LI_END = re.compile(r"</li\s*>", _FLAGS)

RE_LINK = re.compile(
    r"""<a\b[^>]*href=["']([^"']*)["'][^>]*>([^<]*)</a\s*>""",
    _FLAGS,
)

RE_ANY_TAG = re.compile(r"<[^>]+>")
RE_BLANK_RUN = re.compile(r"\n\s*\n")


# -----------------------------------------------------------------------------
# Stage 1: Detection
# -----------------------------------------------------------------------------

def is_html(content: str) -> bool:
    """
    Decide whether ``content`` should be treated as HTML.

    Any one of these is enough:
        - a known structural tag (p, div, br, a, table, li, h1 ...)
        - three or more entity markers ("&" and "&#" both count, so
          numeric entities weigh double)
        - a doctype or <html declaration, in any case
    """
    if RE_HTML_TAG.search(content):
        return True

    if content.count("&") + content.count("&#") >= 3:
        return True

    lowered = content.lower()
    return "<!doctype html" in lowered or "<html" in lowered


# -----------------------------------------------------------------------------
# Stages 2-8
# -----------------------------------------------------------------------------

def flatten_structure(text: str) -> str:
    """Turn line breaks, paragraphs, divs and headings into newlines."""
    text = RE_BR.sub("\n", text)
    text = RE_P.sub("\n", text)
    text = RE_DIV.sub("\n", text)
    return RE_HEADING.sub("\n", text)


def flatten_tables(text: str, options: ConversionOptions) -> str:
    """Turn tables and rows into newlines and cells into the separator."""
    text = RE_TABLE.sub("\n", text)
    text = RE_TR.sub("\n", text)
    # Callable replacement so a separator containing backslashes is literal
    return RE_CELL.sub(lambda _: options.table_separator, text)


def flatten_lists(text: str, options: ConversionOptions) -> str:
    """Turn list containers into newlines and items into bullet lines."""
    text = RE_LIST.sub("\n", text)
    item_prefix = "\n" + LIST_BULLET if options.use_list_bullets else "\n"
    text = RE_LI.sub(item_prefix, text)
    return RE_LI_END.sub("", text)


def flatten_links(text: str, options: ConversionOptions) -> str:
    """Replace simple anchors with their text, optionally followed by the URL."""
    if options.show_link_urls:
        return RE_LINK.sub(lambda m: f"{m.group(2)} ({m.group(1)})", text)
    return RE_LINK.sub(lambda m: m.group(2), text)


def strip_tags(text: str) -> str:
    """Remove every remaining tag."""
    return RE_ANY_TAG.sub("", text)


def decode_entities(text: str) -> str:
    """Decode HTML character references (&amp;, &#39;, &nbsp; ...)."""
    return html.unescape(text)


def normalize_whitespace(text: str) -> str:
    """Collapse runs of blank lines to a single blank line and trim the ends."""
    return RE_BLANK_RUN.sub("\n\n", text).strip()


def html_to_text(content: str, options: ConversionOptions | None = None) -> str:
    """
    Run the conversion stages (everything after detection) over ``content``.

    Every stage is a total function over text, so this never raises for
    string input.

    Example:
        >>> html_to_text("<p>Hello <b>world</b></p>")
        'Hello world'
    """
    options = options or ConversionOptions()

    text = flatten_structure(content)
    text = flatten_tables(text, options)
    text = flatten_lists(text, options)
    text = flatten_links(text, options)
    text = strip_tags(text)
    text = decode_entities(text)
    return normalize_whitespace(text)


class HTMLConverter:
    """
    Converts message bodies to display text.

    Content that does not look like HTML is returned exactly as given;
    everything else goes through html_to_text().

    Usage:
        >>> converter = HTMLConverter(ConversionOptions(show_link_urls=False))
        >>> converter.convert('<a href="http://x.test">click</a>')
        'click'
    """

    def __init__(self, options: ConversionOptions | None = None) -> None:
        self.options = options or ConversionOptions()

    def convert(self, content: str) -> str:
        """Return display text for ``content``."""
        if not is_html(content):
            return content

        text = html_to_text(content, self.options)
        logger.debug(f"Converted HTML body ({len(content)} -> {len(text)} chars)")
        return text
