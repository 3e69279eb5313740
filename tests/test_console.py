"""Tests for the stream-backed console reporter."""

import io

from conftest import event, make_test
from testrecorder.config import RecorderConfig, RecorderOptions
from testrecorder.events import EventContext, EventKind
from testrecorder.reporters.console import ConsoleReporter, detect_color_support


def test_non_terminal_stream_has_no_color(monkeypatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
    assert detect_color_support(io.StringIO()) == (False, False)


def test_writes_rendered_lines_to_stream():
    stream = io.StringIO()
    reporter = ConsoleReporter(stream=stream, options=RecorderOptions(platform="linux"))
    test = make_test("Module", "a()")
    assert reporter.recorder.record(event(EventKind.TEST_STARTED), EventContext(test=test))
    assert reporter.recorder.record(event(EventKind.TEST_CASE_ENDED), EventContext(test=test)) is False
    assert stream.getvalue() == "◇ Test a() started.\n"


def test_config_forces_ansi_on_plain_stream():
    stream = io.StringIO()
    reporter = ConsoleReporter(RecorderConfig(ansi=True), stream=stream)
    assert reporter.recorder.options.use_ansi_escape_codes is True
    reporter.recorder.record(event(EventKind.RUN_ENDED))
    assert "\x1b[92m" in stream.getvalue()
