"""Tests for replaying YAML event documents through a recorder."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from testrecorder.config import RecorderOptions
from testrecorder.events import EventKind
from testrecorder.model import Tag
from testrecorder.reporters.recorder import Recorder
from testrecorder.runners.replay import ReplayDocument, ReplayError, ReplayRunner, load_document

DATA = Path(__file__).parent / "data"


@pytest.fixture
def document():
    return load_document(str(DATA / "run.yaml"))


def test_document_is_parsed(document):
    assert len(document.tests) == 4
    assert document.events[0].kind is EventKind.RUN_STARTED
    add = document.tests[1].to_test()
    assert add.tags == frozenset({Tag("red"), Tag("critical")})
    assert any(tag.source_code == ".critical" for tag in add.tags)


def test_replay_renders_whole_run(document):
    written = []
    result = ReplayRunner(Recorder(RecorderOptions(platform="linux"), written.append)).run(document)

    assert result.events == 16
    assert result.written == 12
    assert written == result.outputs
    assert result.failed
    assert (result.issue_count, result.known_issue_count) == (1, 1)

    lines = written[1:]
    assert lines == [
        "◇ Test Arithmetic started.\n",
        '◇ Test "Adds two numbers" started.\n',
        '✘ Test "Adds two numbers" recorded an issue at Tests/MathTests.py:14:9: '
        "Expectation failed: 1 + 1 == 3\n± - 2\n+ 3\n",
        '✘ Test "Adds two numbers" failed after 0.250 seconds with 1 issue.\n↳ Exercises the adder\n',
        "◇ Test square(_:) started.\n",
        "◇ Passing 1 argument value → 4 to square(_:)\n",
        "✘ Test square(_:) recorded a known issue with 1 argument value → 4: "
        "Issue recorded: rounding\n↳ tracked upstream\n",
        "✘ Test square(_:) passed after 0.100 seconds with 1 known issue.\n",
        '✘ Test divide() skipped: "flaky"\n',
        "✘ Test Arithmetic failed after 0.700 seconds with 2 issues (including 1 known issue).\n",
        "✘ Test run with 3 tests failed after 1.000 seconds with 2 issues (including 1 known issue).\n",
    ]


def test_passing_run():
    document = load_document(str(DATA / "passing.yaml"))
    written = []
    result = ReplayRunner(Recorder(RecorderOptions(platform="linux"), written.append)).run(document)
    assert not result.failed
    assert written[-1] == "✔ Test run with 1 test passed after 0.500 seconds.\n"


def test_undeclared_test_is_rejected():
    document = ReplayDocument.model_validate(
        {"events": [{"kind": "test_started", "test": "Nowhere/x()"}]}
    )
    with pytest.raises(ReplayError):
        ReplayRunner(Recorder()).run(document)


def test_unknown_event_kind_is_a_validation_error():
    with pytest.raises(ValidationError):
        ReplayDocument.model_validate({"events": [{"kind": "test_exploded"}]})


def test_issue_event_without_issue_is_rejected():
    document = ReplayDocument.model_validate({"events": [{"kind": "issue_recorded"}]})
    with pytest.raises(ValueError):
        ReplayRunner(Recorder()).run(document)


def test_duplicate_test_reference_is_rejected():
    document = ReplayDocument.model_validate(
        {
            "tests": [
                {"id": ["Module", "a/b"], "name": "a/b"},
                {"id": ["Module", "a", "b"], "name": "b"},
            ]
        }
    )
    with pytest.raises(ReplayError, match="declared more than once"):
        ReplayRunner(Recorder()).run(document)


def test_replay_error_message_is_unquoted():
    document = ReplayDocument.model_validate(
        {"events": [{"kind": "test_started", "test": "Nowhere/x()"}]}
    )
    with pytest.raises(ReplayError) as excinfo:
        ReplayRunner(Recorder()).run(document)
    assert str(excinfo.value).startswith("event test_started refers")


def test_run_writes_through_recorder_sink(document):
    written = []
    recorder = Recorder(RecorderOptions(platform="linux"), written.append)
    result = ReplayRunner(recorder).run(document)
    assert written == result.outputs
    # The recorder keeps its own sink once the replay is over.
    recorder.record(ReplayRunner(recorder).build(document)[0][0])
    assert len(written) == result.written + 1
