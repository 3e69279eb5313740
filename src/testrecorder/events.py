from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .model import Instant, Issue, SkipInfo, Test, TestCase

class EventKind(Enum):
    RUN_STARTED = "run_started"
    PLAN_STEP_STARTED = "plan_step_started"
    TEST_STARTED = "test_started"
    TEST_CASE_STARTED = "test_case_started"
    EXPECTATION_CHECKED = "expectation_checked"
    ISSUE_RECORDED = "issue_recorded"
    TEST_CASE_ENDED = "test_case_ended"
    TEST_ENDED = "test_ended"
    TEST_SKIPPED = "test_skipped"
    # Legacy skip notification, superseded by TEST_SKIPPED.
    TEST_BYPASSED = "test_bypassed"
    PLAN_STEP_ENDED = "plan_step_ended"
    RUN_ENDED = "run_ended"

@dataclass(frozen=True)
class Event:
    """A lifecycle notification emitted by the test engine."""
    kind: EventKind
    instant: Instant = field(default_factory=Instant.now)
    # Set for ISSUE_RECORDED.
    issue: Optional[Issue] = None
    # Set for TEST_SKIPPED.
    skip_info: Optional[SkipInfo] = None

    def __post_init__(self):
        if self.kind is EventKind.ISSUE_RECORDED and self.issue is None:
            raise ValueError("issue_recorded events require an issue")

@dataclass(frozen=True)
class EventContext:
    """Engine-owned state an event is delivered with."""
    test: Optional[Test] = None
    test_case: Optional[TestCase] = None
