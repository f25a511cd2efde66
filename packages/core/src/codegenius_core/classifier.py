"""Line-level heuristics for turning free-text review output into review items.

Every rule here is a data table at module level. The functions only walk the
tables, so changing the classification policy never touches control flow.
The rule set is deliberately loose: false positives and negatives are
expected, and the tables are kept stable so output stays comparable across
versions.
"""

from __future__ import annotations

import re
from typing import NamedTuple

ISSUE_KEYWORDS = (
    "issue",
    "problem",
    "error",
    "bug",
    "vulnerability",
    "risk",
    "concern",
    "dangerous",
    "unsafe",
    "insecure",
    "critical",
    "warning",
)

SUGGESTION_KEYWORDS = (
    "suggest",
    "recommend",
    "consider",
    "improve",
    "optimize",
    "better",
    "should",
    "could",
    "might",
    "enhancement",
    "refactor",
)

# Checked top to bottom; the first tier with a matching keyword wins.
SEVERITY_TIERS = (
    ("critical", ("critical", "severe")),
    ("high", ("high", "major")),
    ("medium", ("medium", "moderate")),
    ("low", ("low", "minor")),
)
DEFAULT_SEVERITY = "medium"

FENCE = "```"

CODE_TOKENS = (
    "```",
    "```go",
    "```javascript",
    "```python",
    "```java",
    "```rust",
    "```c++",
    "func ",
    "class ",
    "def ",
    "import ",
    "from ",
    "package ",
    "use ",
    "if (",
    "for (",
    "while (",
    "switch (",
    "try {",
    "catch (",
    "=>",
    "->",
    "::",
    "&&",
    "||",
    "!=",
    "===",
    "!==",
)

_LINE_NUMBER_RE = re.compile(r"line\s+(\d+)", re.IGNORECASE)
_FILE_RE = re.compile(r"(?:in|file)\s+([\w\-./]+\.[\w]+)")


class LineClass(NamedTuple):
    is_issue: bool
    is_suggestion: bool


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def is_issue_line(line: str) -> bool:
    return _contains_any(line, ISSUE_KEYWORDS)


def is_suggestion_line(line: str) -> bool:
    return _contains_any(line, SUGGESTION_KEYWORDS)


def classify_line(line: str) -> LineClass:
    """Report both keyword matches. A line may match both tables."""
    return LineClass(is_issue=is_issue_line(line), is_suggestion=is_suggestion_line(line))


def extract_severity(text: str) -> str:
    lowered = text.lower()
    for severity, keywords in SEVERITY_TIERS:
        if any(keyword in lowered for keyword in keywords):
            return severity
    return DEFAULT_SEVERITY


def extract_line_number(text: str) -> int:
    """Return the number following the first ``line <N>``, or 0 when absent."""
    match = _LINE_NUMBER_RE.search(text)
    return int(match.group(1)) if match else 0


def extract_file(text: str) -> str:
    """Return the first path-like token after ``in`` or ``file``, or ''."""
    match = _FILE_RE.search(text)
    return match.group(1) if match else ""


def is_fence(line: str) -> bool:
    return line.strip().startswith(FENCE)


def is_code_like(line: str) -> bool:
    """Heuristically decide whether a line is source code rather than prose."""
    if is_fence(line):
        return True

    if _contains_any(line, CODE_TOKENS):
        return True

    if "{" in line and "}" in line:
        return True

    # Indented lines only count as code when they also carry code punctuation.
    if line.startswith("    ") or line.startswith("\t"):
        if "(" in line and ")" in line:
            return True
        if "=" in line and (";" in line or "{" in line):
            return True

    return False
