# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the guerrilla-tui test suite.
# =============================================================================

import io
from datetime import datetime, timezone

import pytest

from guerrilla_tui.core import Message


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    """Keep Rich from emitting colour codes into captured output."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)


@pytest.fixture
def sink():
    """A text stream standing in for the terminal."""
    return io.StringIO()


@pytest.fixture
def sample_message():
    """The plain text message used across printer tests."""
    return Message(
        id="42",
        subject="Hi",
        sender="a@b.com",
        timestamp=datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc),
        body="plain text, no tags",
    )


@pytest.fixture
def sample_html_email():
    """Sample HTML email content for conversion tests."""
    return """
    <!DOCTYPE html>
    <html>
    <body>
        <div class="header">
            <h1>Welcome to Our Newsletter!</h1>
        </div>
        <div class="content">
            <p>Hello <strong>User</strong>,</p>
            <p>This is a sample HTML email with various formatting:</p>
            <ul>
                <li>Bold text: <b>bold</b></li>
                <li>Links: <a href="https://example.com">Click here</a></li>
            </ul>
            <table>
                <tr><th>Plan</th><th>Price</th></tr>
                <tr><td>Basic</td><td>&euro;5</td></tr>
            </table>
            <img src="cid:logo123" alt="Company Logo" width="200">
        </div>
        <div class="footer">
            <p>Tom &amp; Jerry &lt;3</p>
        </div>
    </body>
    </html>
    """


@pytest.fixture
def html_message(sample_html_email):
    """A message with an HTML body."""
    return Message(
        id="7",
        subject="Newsletter",
        sender="news@example.com",
        timestamp=datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc),
        body=sample_html_email,
    )


@pytest.fixture
def output_lines(sink):
    """Returns a function listing the non-empty lines written to the sink."""
    def read() -> list[str]:
        return [line for line in sink.getvalue().split("\n") if line]
    return read
