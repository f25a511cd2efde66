"""Structure free-text AI review output into issues and suggestions."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from codegenius_core.classifier import (
    extract_file,
    extract_line_number,
    extract_severity,
    is_code_like,
    is_fence,
    is_issue_line,
    is_suggestion_line,
)


@dataclass(frozen=True)
class ReviewItem:
    """One classified line of the AI response."""

    message: str
    severity: str = "medium"  # "critical" | "high" | "medium" | "low"
    line: int = 0  # 0 = no line reference found
    file: str = ""
    category: str = "issue"  # "issue" | "suggestion"


@dataclass
class ReviewResult:
    """Structured outcome of one (diff, review type) analysis."""

    type: str
    summary: str = ""
    issues: list[ReviewItem] = field(default_factory=list)
    suggestions: list[ReviewItem] = field(default_factory=list)


def clean_response_text(text: str) -> str:
    """Drop fenced code regions and code-looking lines, keep the prose."""
    kept: list[str] = []
    in_fence = False
    for line in text.split("\n"):
        if is_fence(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        if not is_code_like(line):
            kept.append(line)
    return "\n".join(kept)


def build_item(line: str, category: str) -> ReviewItem:
    return ReviewItem(
        message=line,
        severity=extract_severity(line),
        line=extract_line_number(line),
        file=extract_file(line),
        category=category,
    )


def parse_review_response(raw_text: str, category: str) -> ReviewResult:
    """Turn the raw model response into a ReviewResult.

    Classification walks the raw text, not the cleaned summary. Issue
    detection runs before suggestion detection, and the two are independent:
    a line matching both keyword tables lands in both lists.
    """
    if not raw_text.strip():
        return ReviewResult(type=category)

    result = ReviewResult(type=category, summary=clean_response_text(raw_text))

    for raw_line in raw_text.split("\n"):
        line = raw_line.strip()
        if not line or is_code_like(line):
            continue
        if is_issue_line(line):
            result.issues.append(build_item(line, "issue"))
        if is_suggestion_line(line):
            result.suggestions.append(build_item(line, "suggestion"))

    return result


def review_stats(result: ReviewResult | None) -> dict:
    """Summarise a ReviewResult: totals, issue severities and item categories."""
    if result is None:
        return {}

    severity_counter: Counter[str] = Counter(item.severity for item in result.issues)
    category_counter: Counter[str] = Counter(item.category for item in result.issues + result.suggestions)
    return {
        "type": result.type,
        "total_issues": len(result.issues),
        "total_suggestions": len(result.suggestions),
        "severity_breakdown": dict(severity_counter),
        "category_breakdown": dict(category_counter),
    }
