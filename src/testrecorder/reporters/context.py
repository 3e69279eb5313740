"""Counters shared by every event a recorder sees, guarded by one lock.

Per-test data lives in a flat mapping keyed by the test's key path
(``("Module", "Suite", "test()")``). A suite's totals are the sum over every
key that has the suite's key path as a prefix.
"""
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple
import threading

from ..model import Instant

KeyPath = Tuple[str, ...]


@dataclass(frozen=True)
class TestData:
    start_instant: Instant
    issue_count: int = 0
    known_issue_count: int = 0
    # False while the entry only holds issues recorded ahead of its start.
    started: bool = True


@dataclass(frozen=True)
class IssueCounts:
    issue_count: int = 0
    known_issue_count: int = 0

    @property
    def total(self) -> int:
        return self.issue_count + self.known_issue_count


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of the counters, taken under the lock."""
    run_start_instant: Optional[Instant] = None
    test_count: int = 0
    suite_count: int = 0
    # Data recorded for the queried key path itself, if any.
    test_data: Optional[TestData] = None
    issues: IssueCounts = IssueCounts()


def _is_within(key: KeyPath, root: KeyPath) -> bool:
    return key[:len(root)] == root


class RecorderContext:
    def __init__(self):
        self._lock = threading.Lock()
        self._run_start_instant: Optional[Instant] = None
        self._test_count = 0
        self._suite_count = 0
        self._test_data: Dict[KeyPath, TestData] = {}

    # ---------- mutation ----------
    def record_run_start(self, instant: Instant) -> None:
        with self._lock:
            self._run_start_instant = instant

    def begin_entry(self, key: KeyPath, instant: Instant) -> bool:
        """Mark ``key`` as started at ``instant``. Returns False if it was already started."""
        with self._lock:
            data = self._test_data.get(key)
            if data is None:
                self._test_data[key] = TestData(start_instant=instant)
                return True
            if data.started:
                return False
            self._test_data[key] = replace(data, start_instant=instant, started=True)
            return True

    def increment_run_count(self, is_suite: bool) -> None:
        with self._lock:
            if is_suite:
                self._suite_count += 1
            else:
                self._test_count += 1

    def increment_issue(self, key: Optional[KeyPath], known: bool, instant: Instant) -> None:
        if key is None:
            return
        with self._lock:
            data = self._test_data.get(key) or TestData(start_instant=instant, started=False)
            if known:
                data = replace(data, known_issue_count=data.known_issue_count + 1)
            else:
                data = replace(data, issue_count=data.issue_count + 1)
            self._test_data[key] = data

    # ---------- snapshots ----------
    def read_subtree(self, key: KeyPath) -> Snapshot:
        with self._lock:
            entries = [data for k, data in self._test_data.items() if _is_within(k, key)]
            return Snapshot(
                run_start_instant=self._run_start_instant,
                test_count=self._test_count,
                suite_count=self._suite_count,
                test_data=self._test_data.get(key),
                issues=_sum_issues(entries),
            )

    def read_all(self) -> Snapshot:
        with self._lock:
            return Snapshot(
                run_start_instant=self._run_start_instant,
                test_count=self._test_count,
                suite_count=self._suite_count,
                issues=_sum_issues(self._test_data.values()),
            )

    def is_tracked(self, key: KeyPath) -> bool:
        with self._lock:
            data = self._test_data.get(key)
            return data is not None and data.started


def _sum_issues(entries) -> IssueCounts:
    issue_count = known_issue_count = 0
    for data in entries:
        issue_count += data.issue_count
        known_issue_count += data.known_issue_count
    return IssueCounts(issue_count, known_issue_count)
