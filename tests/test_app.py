# =============================================================================
# Application Tests
# =============================================================================

import asyncio

from guerrilla_tui import app
from guerrilla_tui.core import Message
from guerrilla_tui.mail import MailConnectionError


class RecordingPrinter:
    def __init__(self):
        self.summaries = []
        self.messages = []

    def render_summary(self, addresses):
        self.summaries.append(list(addresses))

    def render_message(self, message):
        self.messages.append(message)


class FakePoller:
    """An async iterable over a fixed list of messages."""

    def __init__(self, messages, *args, **kwargs):
        self.messages = messages

    async def _iterate(self):
        for message in self.messages:
            yield message

    def __aiter__(self):
        return self._iterate()


WELCOME = Message(id="1", subject=app.WELCOME_SUBJECT)


def test_build_addresses():
    assert app.build_addresses("abc", ["@x.com", "@y.org"]) == ["abc@x.com", "abc@y.org"]


def test_welcome_message_is_skipped_when_first():
    printer = RecordingPrinter()
    messages = [WELCOME, Message(id="2"), Message(id="3", subject=app.WELCOME_SUBJECT)]

    count = asyncio.run(app.stream_messages(printer, FakePoller(messages)))

    assert count == 2
    assert [m.id for m in printer.messages] == ["2", "3"]


def test_welcome_message_can_be_shown():
    printer = RecordingPrinter()

    count = asyncio.run(app.stream_messages(printer, FakePoller([WELCOME]), show_welcome=True))

    assert count == 1
    assert printer.messages == [WELCOME]


def test_parse_args_overrides():
    args = app.parse_args(["-i", "10", "-w", "--debug"])
    assert args.poll_interval == 10
    assert args.show_welcome is True
    assert args.debug is True


def test_parse_args_defaults_leave_config_alone():
    args = app.parse_args([])
    assert args.poll_interval is None
    assert args.show_welcome is None


def test_invalid_poll_interval_exits_with_error(tmp_path, capsys):
    code = app.main(["-i", "0", "--config", str(tmp_path / "none.toml")])

    assert code == 1
    assert "poll-interval must be between 1-600" in capsys.readouterr().err


def test_init_config_writes_the_file(tmp_path):
    path = tmp_path / "config.toml"

    assert app.main(["--init-config", "-i", "9", "--config", str(path)]) == 0
    assert "poll_interval = 9" in path.read_text()


class FakeClient:
    fail = False

    def __init__(self, api_url=None):
        self.local_part = "abc"
        self.closed = False

    def connect(self):
        if self.fail:
            raise MailConnectionError("no network")
        return "abc@guerrillamailblock.com"

    def close(self):
        self.closed = True


def test_session_failure_exits_with_error(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(FakeClient, "fail", True)
    monkeypatch.setattr(app, "GuerrillaClient", FakeClient)

    code = app.main(["--config", str(tmp_path / "none.toml")])

    assert code == 1
    assert "no network" in capsys.readouterr().err


def test_main_prints_summary_and_messages(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(app, "GuerrillaClient", FakeClient)
    monkeypatch.setattr(
        app,
        "Poller",
        lambda client, interval: FakePoller([WELCOME, Message(id="7", subject="Hello", body="Hi there")]),
    )

    code = app.main(["--config", str(tmp_path / "none.toml")])

    out = capsys.readouterr().out
    assert code == 0
    assert "abc@sharklasers.com" in out
    assert "abc@spam4.me" in out
    assert "Email #7" in out
    assert "Hi there" in out
    assert "Email #1" not in out


def test_paths_exits_cleanly(capsys):
    assert app.main(["--paths"]) == 0
    assert "config.toml" in capsys.readouterr().out


def test_wrongly_typed_config_value_exits_with_error(tmp_path, capsys):
    path = tmp_path / "config.toml"
    path.write_text("[rendering]\ntime_format = 5\n")

    assert app.main(["--config", str(path)]) == 1
    assert "time_format must be a string" in capsys.readouterr().err
