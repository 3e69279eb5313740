from typing import Any, Iterable, Optional, Sequence

from ..model import Comment, Instant, ParameterInfo, TestCase
from .symbols import ANSI_RESET, DIM_GRAY, comment_arrow

# Parameter label used for unnamed parameters.
PLACEHOLDER_LABEL = "_"


def counting(count: int, noun: str) -> str:
    """``counting(1, "test") == "1 test"``, ``counting(2, "issue") == "2 issues"``."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def describe_duration(start: Instant, end: Instant) -> str:
    # Clamp clock skew between threads to zero.
    seconds = max(0.0, start.seconds_until(end))
    return f"{seconds:.3f} seconds"


def issue_suffix(issue_count: int, known_issue_count: int) -> str:
    if issue_count > 0 and known_issue_count > 0:
        total = issue_count + known_issue_count
        return f" with {counting(total, 'issue')} (including {counting(known_issue_count, 'known issue')})"
    if known_issue_count > 0:
        return f" with {counting(known_issue_count, 'known issue')}"
    if issue_count > 0:
        return f" with {counting(issue_count, 'issue')}"
    return ""


def format_comments(comments: Iterable[Comment], options) -> Optional[str]:
    """Arrow-prefixed comment block, dimmed when ANSI is on; ``None`` if empty."""
    comments = list(comments)
    if not comments:
        return None
    arrow = comment_arrow(options)
    lines = []
    for comment in comments:
        comment_lines = [line for line in comment.raw_value.splitlines() if line]
        if not comment_lines:
            continue
        lines.append(f"{arrow} {comment_lines[0]}")
        lines.extend(f"  {line}" for line in comment_lines[1:])
    text = "\n".join(lines)
    if options.use_ansi_escape_codes:
        return f"{DIM_GRAY}{text}{ANSI_RESET}"
    return text


def describe_argument(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def labeled_arguments(test_case: TestCase, parameters: Sequence[ParameterInfo]) -> str:
    parts = []
    for parameter, argument in test_case.arguments_paired_with(parameters):
        description = describe_argument(argument)
        if parameter.label == PLACEHOLDER_LABEL:
            parts.append(description)
        else:
            parts.append(f"{parameter.label} → {description}")
    return ", ".join(parts)
