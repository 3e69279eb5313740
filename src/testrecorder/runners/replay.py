"""Replay a recorded event document through a recorder.

Document layout (YAML)::

    tests:
      - id: [Module, Suite, "test_add(a:b:)"]
        name: "test_add(a:b:)"
        parameters: [{first_name: a}, {first_name: _, second_name: b}]
    events:
      - {kind: run_started, at: 0.0}
      - {kind: test_started, at: 0.1, test: "Module/Suite/test_add(a:b:)"}
      - {kind: issue_recorded, at: 0.2, test: ..., issue: {kind: expectation_failed, description: "1 == 2"}}
"""
from dataclasses import dataclass, field
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
import logging
import yaml, pathlib

from ..events import Event, EventContext, EventKind
from ..model import (Comment, Instant, Issue, IssueKind, ParameterInfo, SkipInfo, SourceLocation,
                     Tag, Test, TestCase, TestID)
from ..reporters.recorder import Recorder

log = logging.getLogger("testrecorder.replay")

class ReplayError(ValueError):
    pass

# ---------- document schema ----------
class ParameterEntry(BaseModel):
    first_name: str
    second_name: Optional[str] = None

class TestEntry(BaseModel):
    id: List[str] = Field(..., min_length=1, description="Module name followed by name components")
    name: str
    display_name: Optional[str] = None
    suite: bool = False
    tags: List[str] = Field(default_factory=list)
    comments: List[str] = Field(default_factory=list)
    parameters: Optional[List[ParameterEntry]] = None

    def to_test(self) -> Test:
        return Test(
            id=TestID(self.id[0], tuple(self.id[1:])),
            name=self.name,
            display_name=self.display_name,
            is_suite=self.suite,
            tags=frozenset(Tag(t.lstrip("."), source_code=t if t.startswith(".") else None) for t in self.tags),
            comments=tuple(Comment(c) for c in self.comments),
            parameters=None if self.parameters is None else tuple(
                ParameterInfo(p.first_name, p.second_name) for p in self.parameters),
        )

class LocationEntry(BaseModel):
    path: str
    line: int
    column: int = 1

class IssueEntry(BaseModel):
    kind: IssueKind = IssueKind.UNCONDITIONAL
    description: Optional[str] = None
    known: bool = False
    difference: Optional[str] = None
    comments: List[str] = Field(default_factory=list)
    location: Optional[LocationEntry] = None

    def to_issue(self) -> Issue:
        location = None
        if self.location is not None:
            location = SourceLocation(self.location.path, self.location.line, self.location.column)
        return Issue(kind=self.kind, description=self.description, is_known=self.known,
                     difference=self.difference, comments=tuple(Comment(c) for c in self.comments),
                     source_location=location)

class EventEntry(BaseModel):
    kind: EventKind
    at: float = Field(0.0, description="Seconds since an arbitrary epoch")
    test: Optional[str] = Field(None, description="Slash-separated test id")
    # Arguments of the current test case; omitted for non-parameterized tests.
    arguments: Optional[List[Any]] = None
    issue: Optional[IssueEntry] = None
    skip: Optional[str] = Field(None, description="Skip reason")

class ReplayDocument(BaseModel):
    tests: List[TestEntry] = Field(default_factory=list)
    events: List[EventEntry] = Field(default_factory=list)

def load_document(path: str) -> ReplayDocument:
    data = yaml.safe_load(pathlib.Path(path).read_text()) or {}
    return ReplayDocument.model_validate(data)

# ---------- runner ----------
@dataclass
class ReplayResult:
    events: int = 0
    written: int = 0
    issue_count: int = 0
    known_issue_count: int = 0
    outputs: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.issue_count > 0

class ReplayRunner:
    def __init__(self, recorder: Recorder):
        self.recorder = recorder

    def build(self, document: ReplayDocument) -> List[tuple]:
        """Resolve the document into (Event, EventContext) pairs."""
        tests: Dict[str, Test] = {}
        for entry in document.tests:
            test = entry.to_test()
            ref = str(test.id)
            if ref in tests:
                raise ReplayError(f"test {ref!r} is declared more than once")
            tests[ref] = test
        pairs = []
        for entry in document.events:
            test = None
            if entry.test is not None:
                if entry.test not in tests:
                    raise ReplayError(f"event {entry.kind.value} refers to undeclared test {entry.test!r}")
                test = tests[entry.test]
            test_case = None
            if entry.arguments is not None:
                test_case = TestCase(tuple(entry.arguments), is_parameterized=bool(test and test.parameters))
            skip_info = None
            if entry.kind is EventKind.TEST_SKIPPED:
                skip_info = SkipInfo(Comment(entry.skip) if entry.skip is not None else None)
            event = Event(
                kind=entry.kind,
                instant=Instant.from_seconds(entry.at),
                issue=entry.issue.to_issue() if entry.issue is not None else None,
                skip_info=skip_info,
            )
            pairs.append((event, EventContext(test=test, test_case=test_case)))
        return pairs

    def run(self, document: ReplayDocument) -> ReplayResult:
        result = ReplayResult()
        pairs = self.build(document)
        write = self.recorder.write

        def sink(text: str) -> None:
            result.outputs.append(text)
            write(text)

        self.recorder.write = sink
        try:
            for event, context in pairs:
                result.events += 1
                if self.recorder.record(event, context):
                    result.written += 1
        finally:
            self.recorder.write = write
        totals = self.recorder.context.read_all().issues
        result.issue_count = totals.issue_count
        result.known_issue_count = totals.known_issue_count
        log.debug("Replayed %d events, wrote %d", result.events, result.written)
        return result
