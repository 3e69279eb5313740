"""Human-readable rendering of test engine events.

A :class:`Recorder` turns each event into a line of text (or nothing) and hands
it to a caller-supplied ``write`` callable. The output is meant for people and
is not a stable format.

``render`` may be called concurrently from every thread running tests. All
counters live in a :class:`RecorderContext`; text is only built from snapshots
taken out of it.
"""
from importlib.metadata import PackageNotFoundError, version
from typing import Callable, Dict, Iterable, List, Optional
import logging
import platform

from ..config import RecorderOptions
from ..events import Event, EventContext, EventKind
from ..model import Comment, Test
from .context import IssueCounts, RecorderContext
from .formatting import (counting, describe_duration, format_comments, issue_suffix,
                         labeled_arguments)
from .symbols import Symbol, color_dots, merge_tag_colors, symbol_text

log = logging.getLogger("testrecorder.recorder")

Write = Callable[[str], None]

UNKNOWN_TEST_NAME = "«unknown»"


def _library_version() -> str:
    try:
        return version("testrecorder")
    except PackageNotFoundError:
        return "unknown"


def environment_comments() -> List[Comment]:
    return [
        Comment(f"Python Version: {platform.python_version()}"),
        Comment(f"Testing Library Version: {_library_version()}"),
        Comment(f"OS Version: {platform.platform()}"),
    ]


class Recorder:
    def __init__(self, options: Optional[RecorderOptions] = None, write: Optional[Write] = None):
        self.options = options or RecorderOptions()
        self.tag_colors = merge_tag_colors(self.options.tag_colors)
        self.write = write or (lambda text: None)
        self.context = RecorderContext()
        self._handlers: Dict[EventKind, Callable[[Event, EventContext, str], Optional[str]]] = {
            EventKind.RUN_STARTED: self._run_started,
            EventKind.PLAN_STEP_STARTED: self._suppressed,
            EventKind.PLAN_STEP_ENDED: self._suppressed,
            EventKind.TEST_STARTED: self._test_started,
            EventKind.TEST_ENDED: self._test_ended,
            EventKind.TEST_SKIPPED: self._test_skipped,
            EventKind.TEST_BYPASSED: self._suppressed,
            EventKind.EXPECTATION_CHECKED: self._suppressed,
            EventKind.ISSUE_RECORDED: self._issue_recorded,
            EventKind.TEST_CASE_STARTED: self._test_case_started,
            EventKind.TEST_CASE_ENDED: self._suppressed,
            EventKind.RUN_ENDED: self._run_ended,
        }

    # ---------- public API ----------
    def render(self, event: Event, context: Optional[EventContext] = None) -> Optional[str]:
        """Text describing ``event``, or None if it is not worth showing."""
        context = context or EventContext()
        handler = self._handlers[event.kind]
        if handler == self._suppressed:
            return None
        return handler(event, context, self.test_name(context.test))

    def record(self, event: Event, context: Optional[EventContext] = None) -> bool:
        """Render ``event`` and pass the text to ``write``. Returns whether anything was written."""
        output = self.render(event, context)
        if output is None:
            return False
        self.write(output)
        return True

    def test_name(self, test: Optional[Test]) -> str:
        if test is None:
            name = UNKNOWN_TEST_NAME
        elif test.display_name is not None:
            name = f'"{test.display_name}"'
        else:
            name = test.name
        if self.options.use_ansi_escape_codes and test is not None and test.tags:
            dots = color_dots(test.tags, self.tag_colors, self.options)
            if dots:
                # color_dots already ends in a reset.
                name = f"{dots} {name}"
        return name

    # ---------- helpers ----------
    def _symbol(self, symbol: Symbol) -> str:
        return symbol_text(symbol, self.options)

    def _comments(self, comments: Iterable[Comment]) -> Optional[str]:
        return format_comments(comments, self.options)

    def _observe(self, test: Optional[Test], event: Event) -> None:
        # Each test counts once, whether it was started or skipped.
        if test is None:
            log.debug("%s event without a test", event.kind.value)
        elif self.context.begin_entry(test.id.key_path, event.instant):
            self.context.increment_run_count(test.is_suite)
        else:
            log.debug("Test %s observed more than once", test.id)

    # ---------- handlers ----------
    def _suppressed(self, event: Event, context: EventContext, name: str) -> Optional[str]:
        return None

    def _run_started(self, event: Event, context: EventContext, name: str) -> str:
        self.context.record_run_start(event.instant)
        symbol = self._symbol(Symbol.DEFAULT)
        comments = self._comments(environment_comments())
        if comments is not None:
            return f"{symbol} Test run started.\n{comments}\n"
        return f"{symbol} Test run started.\n"

    def _test_started(self, event: Event, context: EventContext, name: str) -> str:
        self._observe(context.test, event)
        return f"{self._symbol(Symbol.DEFAULT)} Test {name} started.\n"

    def _test_ended(self, event: Event, context: EventContext, name: str) -> str:
        test = context.test
        start = event.instant
        issues = IssueCounts()
        if test is None:
            log.debug("Test ended event without a test")
        else:
            snapshot = self.context.read_subtree(test.id.key_path)
            if snapshot.test_data is None or not snapshot.test_data.started:
                log.debug("Test %s ended but was never started", test.id)
            else:
                start = snapshot.test_data.start_instant
            issues = snapshot.issues

        duration = describe_duration(start, event.instant)
        suffix = issue_suffix(issues.issue_count, issues.known_issue_count)
        if issues.issue_count > 0:
            symbol = self._symbol(Symbol.FAIL)
            comments = self._comments(test.comments) if test is not None else None
            trailer = f"{comments}\n" if comments is not None else ""
            return f"{symbol} Test {name} failed after {duration}{suffix}.\n{trailer}"
        symbol = self._symbol(Symbol.passing(issues.known_issue_count > 0))
        return f"{symbol} Test {name} passed after {duration}{suffix}.\n"

    def _test_skipped(self, event: Event, context: EventContext, name: str) -> str:
        self._observe(context.test, event)
        symbol = self._symbol(Symbol.SKIP)
        comment = event.skip_info.comment if event.skip_info else None
        if comment is not None:
            return f'{symbol} Test {name} skipped: "{comment.raw_value}"\n'
        return f"{symbol} Test {name} skipped.\n"

    def _issue_recorded(self, event: Event, context: EventContext, name: str) -> str:
        issue = event.issue
        test = context.test
        key = test.id.key_path if test is not None else None
        if key is not None and not self.context.is_tracked(key):
            log.debug("Issue recorded for untracked test %s", test.id)
        self.context.increment_issue(key, issue.is_known, event.instant)

        if issue.is_known:
            symbol = self._symbol(Symbol.PASS_WITH_KNOWN_ISSUES)
            article = " known"
        else:
            symbol = self._symbol(Symbol.FAIL)
            article = "n"

        difference = ""
        if issue.difference is not None:
            difference = f"\n{self._symbol(Symbol.DIFFERENCE)} {issue.difference}"
        issue_comments = ""
        formatted = self._comments(issue.comments)
        if formatted is not None:
            issue_comments = f"\n{formatted}"
        at = f" at {issue.source_location}" if issue.source_location is not None else ""

        parameters = test.parameters if test is not None else None
        if not parameters:
            return f"{symbol} Test {name} recorded a{article} issue{at}: {issue.kind_description}{difference}{issue_comments}\n"
        arguments = labeled_arguments(context.test_case, parameters) if context.test_case else ""
        return (f"{symbol} Test {name} recorded a{article} issue with {counting(len(parameters), 'argument')} "
                f"{arguments}{at}: {issue.kind_description}{difference}{issue_comments}\n")

    def _test_case_started(self, event: Event, context: EventContext, name: str) -> Optional[str]:
        test_case = context.test_case
        parameters = context.test.parameters if context.test is not None else None
        if test_case is None or not test_case.is_parameterized or parameters is None:
            return None
        symbol = self._symbol(Symbol.DEFAULT)
        return (f"{symbol} Passing {counting(len(parameters), 'argument')} "
                f"{labeled_arguments(test_case, parameters)} to {name}\n")

    def _run_ended(self, event: Event, context: EventContext, name: str) -> str:
        snapshot = self.context.read_all()
        start = snapshot.run_start_instant or event.instant
        duration = describe_duration(start, event.instant)
        issues = snapshot.issues
        suffix = issue_suffix(issues.issue_count, issues.known_issue_count)
        tests = counting(snapshot.test_count, "test")
        if issues.issue_count > 0:
            symbol = self._symbol(Symbol.FAIL)
            return f"{symbol} Test run with {tests} failed after {duration}{suffix}.\n"
        symbol = self._symbol(Symbol.passing(issues.known_issue_count > 0))
        return f"{symbol} Test run with {tests} passed after {duration}{suffix}.\n"


def warning(message: str, options: Optional[RecorderOptions] = None) -> str:
    """Advisory message prefixed with the warning glyph; the caller presents it."""
    return f"{symbol_text(Symbol.WARNING, options or RecorderOptions())} {message}"
