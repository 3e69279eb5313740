from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Sequence, Tuple, FrozenSet
import time

# ---------- clock ----------
@dataclass(frozen=True, order=True)
class Instant:
    """A point on the monotonic test clock, in nanoseconds."""
    nanoseconds: int = 0

    @classmethod
    def now(cls) -> "Instant":
        return cls(time.monotonic_ns())

    @classmethod
    def from_seconds(cls, seconds: float) -> "Instant":
        return cls(int(round(seconds * 1_000_000_000)))

    def seconds_until(self, other: "Instant") -> float:
        return (other.nanoseconds - self.nanoseconds) / 1_000_000_000

# ---------- identity ----------
@dataclass(frozen=True)
class TestID:
    """Hierarchical test identity: module name followed by name components."""
    __test__ = False
    module_name: str
    name_components: Tuple[str, ...] = ()

    @property
    def key_path(self) -> Tuple[str, ...]:
        return (self.module_name, *self.name_components)

    @property
    def parent(self) -> Optional["TestID"]:
        if not self.name_components:
            return None
        return TestID(self.module_name, self.name_components[:-1])

    def is_ancestor_of(self, other: "TestID") -> bool:
        mine, theirs = self.key_path, other.key_path
        return len(mine) < len(theirs) and theirs[:len(mine)] == mine

    def __str__(self) -> str:
        return "/".join(self.key_path)

# ---------- tags ----------
@dataclass(frozen=True)
class Tag:
    value: str
    # Alternate lookup key, e.g. ".critical" for a tag declared as `.critical`.
    source_code: Optional[str] = field(default=None, compare=False)

@dataclass(frozen=True, order=True)
class TagColor:
    red: int
    green: int
    blue: int

    @classmethod
    def parse(cls, text: str) -> "TagColor":
        """Accepts a predefined color name, ``#rrggbb`` or ``rrggbb``."""
        key = text.strip().lower()
        if key in PREDEFINED_COLORS:
            return PREDEFINED_COLORS[key]
        hexdigits = key[1:] if key.startswith("#") else key
        if len(hexdigits) != 6:
            raise ValueError(f"Unrecognized tag color: {text!r}")
        try:
            r, g, b = (int(hexdigits[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError as e:
            raise ValueError(f"Unrecognized tag color: {text!r}") from e
        return cls(r, g, b)

PREDEFINED_COLORS = {
    "red": TagColor(255, 0, 0),
    "orange": TagColor(255, 128, 0),
    "yellow": TagColor(255, 255, 0),
    "green": TagColor(0, 255, 0),
    "blue": TagColor(0, 0, 255),
    "purple": TagColor(128, 0, 255),
}

# ---------- comments / locations ----------
@dataclass(frozen=True)
class Comment:
    raw_value: str

    def __str__(self) -> str:
        return self.raw_value

@dataclass(frozen=True)
class SourceLocation:
    path: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"

# ---------- tests ----------
@dataclass(frozen=True)
class ParameterInfo:
    first_name: str
    second_name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.second_name or self.first_name

@dataclass(frozen=True)
class Test:
    __test__ = False
    id: TestID
    name: str
    display_name: Optional[str] = None
    is_suite: bool = False
    tags: FrozenSet[Tag] = frozenset()
    comments: Tuple[Comment, ...] = ()
    # None for suites and non-parameterized functions.
    parameters: Optional[Tuple[ParameterInfo, ...]] = None

@dataclass(frozen=True)
class TestCase:
    """One invocation of a test function with concrete arguments."""
    __test__ = False
    arguments: Tuple[Any, ...] = ()
    is_parameterized: bool = False

    def arguments_paired_with(self, parameters: Sequence[ParameterInfo]) -> Iterator[Tuple[ParameterInfo, Any]]:
        return zip(parameters, self.arguments)

# ---------- issues ----------
class IssueKind(Enum):
    UNCONDITIONAL = "unconditional"
    EXPECTATION_FAILED = "expectation_failed"
    CONFIRMATION_MISCOUNTED = "confirmation_miscounted"
    ERROR_CAUGHT = "error_caught"
    TIME_LIMIT_EXCEEDED = "time_limit_exceeded"
    KNOWN_ISSUE_NOT_RECORDED = "known_issue_not_recorded"
    API_MISUSED = "api_misused"
    SYSTEM = "system"

@dataclass(frozen=True)
class Issue:
    kind: IssueKind = IssueKind.UNCONDITIONAL
    description: Optional[str] = None
    is_known: bool = False
    # Only meaningful for EXPECTATION_FAILED.
    difference: Optional[str] = None
    comments: Tuple[Comment, ...] = ()
    source_location: Optional[SourceLocation] = None

    @property
    def kind_description(self) -> str:
        detail = self.description
        if self.kind is IssueKind.EXPECTATION_FAILED:
            return f"Expectation failed: {detail}" if detail else "Expectation failed"
        if self.kind is IssueKind.ERROR_CAUGHT:
            return f"Caught error: {detail}" if detail else "Caught error"
        if self.kind is IssueKind.TIME_LIMIT_EXCEEDED:
            return f"Time limit was exceeded: {detail}" if detail else "Time limit was exceeded"
        if self.kind is IssueKind.CONFIRMATION_MISCOUNTED:
            return f"Confirmation was confirmed {detail}" if detail else "Confirmation was miscounted"
        if self.kind is IssueKind.KNOWN_ISSUE_NOT_RECORDED:
            return "Known issue was not recorded"
        if self.kind is IssueKind.API_MISUSED:
            return "An API was misused"
        if self.kind is IssueKind.SYSTEM:
            return "A system failure occurred"
        return f"Issue recorded: {detail}" if detail else "Issue recorded"

@dataclass(frozen=True)
class SkipInfo:
    comment: Optional[Comment] = None
