"""Tests for duration, count, issue-suffix, comment and argument formatting."""

import pytest

from testrecorder.config import RecorderOptions
from testrecorder.model import Comment, Instant, ParameterInfo, TestCase
from testrecorder.reporters.formatting import (
    counting,
    describe_duration,
    format_comments,
    issue_suffix,
    labeled_arguments,
)


@pytest.mark.parametrize(
    "count, noun, expected",
    [
        (1, "test", "1 test"),
        (0, "test", "0 tests"),
        (2, "issue", "2 issues"),
        (1, "known issue", "1 known issue"),
        (12, "argument", "12 arguments"),
    ],
)
def test_counting(count, noun, expected):
    assert counting(count, noun) == expected


@pytest.mark.parametrize(
    "issues, known, expected",
    [
        (0, 0, ""),
        (3, 0, " with 3 issues"),
        (1, 0, " with 1 issue"),
        (0, 1, " with 1 known issue"),
        (0, 4, " with 4 known issues"),
        (2, 1, " with 3 issues (including 1 known issue)"),
    ],
)
def test_issue_suffix(issues, known, expected):
    assert issue_suffix(issues, known) == expected


def test_duration_is_formatted_in_seconds():
    start = Instant.from_seconds(1.0)
    end = Instant.from_seconds(2.25)
    assert describe_duration(start, end) == "1.250 seconds"


def test_duration_never_negative():
    """Clock skew (end before start) clamps to zero."""
    start = Instant.from_seconds(5.0)
    end = Instant.from_seconds(4.0)
    assert describe_duration(start, end) == "0.000 seconds"


def test_comments_empty_returns_none():
    assert format_comments([], RecorderOptions(platform="linux")) is None


def test_comments_multiline_alignment():
    options = RecorderOptions(platform="linux")
    text = format_comments([Comment("first\nsecond\n\nthird"), Comment("other")], options)
    assert text == "↳ first\n  second\n  third\n↳ other"


def test_comments_dimmed_with_ansi():
    options = RecorderOptions(use_ansi_escape_codes=True, platform="linux")
    text = format_comments([Comment("note")], options)
    assert text == "\x1b[90m↳ note\x1b[0m"


def test_comments_sf_symbols_arrow_on_macos():
    options = RecorderOptions(use_sf_symbols=True, platform="darwin")
    assert format_comments([Comment("note")], options) == "\U00100135 note"


def test_labeled_arguments():
    parameters = (ParameterInfo("x"), ParameterInfo("_", "name"), ParameterInfo("_"))
    case = TestCase((1, "abc", 2.5), is_parameterized=True)
    assert labeled_arguments(case, parameters) == 'x → 1, name → "abc", 2.5'
