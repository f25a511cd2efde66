"""Base AI provider implementing the Template Method pattern.

All providers share the same request flow:
    analyze() / generate_commit_message()
        → _build_*_prompt() → _call_with_retry() → _call_api()   ← only this differs per provider
        → response cleanup

Subclasses implement two things only:
  - __init__: validate and store the SDK/HTTP client settings
  - _call_api: make one raw API call and return the text response

Prompt construction, retry and the per-session interaction log live here so
every provider behaves the same way.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from codegenius_core.errors import ProviderError

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_MAX_TOKENS = 4096
_DEFAULT_TIMEOUT = 30.0

SYSTEM_PROMPT = "You are an experienced software engineer helping with git commits and code reviews."

_ANALYSIS_FOCUS = {
    "security": [
        "Security vulnerabilities and potential risks identified",
        "Authentication and authorization concerns",
        "Data protection and privacy considerations",
        "Input validation and sanitization recommendations",
        "Injection attack prevention measures",
        "Cryptographic and secrets management improvements",
        "Specific actionable security recommendations",
    ],
    "performance": [
        "Performance bottlenecks and inefficiencies detected",
        "Algorithm complexity and optimization opportunities",
        "Memory usage patterns and potential improvements",
        "Database query optimization suggestions",
        "Network and I/O operation improvements",
        "Caching strategies and resource utilization",
        "Scalability considerations and recommendations",
    ],
    "style": [
        "Code style and formatting consistency issues",
        "Naming convention improvements",
        "Code organization and structure suggestions",
        "Documentation and comment quality assessment",
        "Language-specific best practices recommendations",
        "Readability and maintainability improvements",
    ],
    "structure": [
        "Architectural design and modularity assessment",
        "Design pattern usage and recommendations",
        "Separation of concerns evaluation",
        "Dependencies and coupling analysis",
        "Error handling and exception management",
        "Code maintainability and extensibility suggestions",
        "Overall structural improvements",
    ],
}

_GENERIC_FOCUS = [
    "Overall code quality assessment",
    "Potential bugs and issues identified",
    "Best practices and improvement recommendations",
    "Maintainability and reliability considerations",
]

_DEFAULT_TEMPLATES = {
    "default": "This is a standard commit message generation request.",
}


@dataclass
class Interaction:
    """One prompt/response exchange kept for the lifetime of the provider."""

    kind: str  # "commit" | "analysis"
    prompt: str
    response: str
    timestamp: datetime = field(default_factory=datetime.now)


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


class BaseProvider(ABC):
    MAX_TOKENS: int = _MAX_TOKENS

    def __init__(
        self,
        timeout: float = _DEFAULT_TIMEOUT,
        max_retries: int = _MAX_RETRIES,
        context_templates: dict[str, str] | None = None,
    ):
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.context_templates = dict(context_templates or _DEFAULT_TEMPLATES)
        self._interactions: list[Interaction] = []

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def analyze(self, text: str, category: str) -> str:
        """Ask the model for a free-text review of ``text`` focused on ``category``."""
        prompt = self._build_analysis_prompt(text, category)
        response = self._call_with_retry(SYSTEM_PROMPT, prompt)
        self._record("analysis", prompt, response)
        return response

    def generate_commit_message(
        self,
        diff: str,
        files: list[str],
        branch: str,
        extra_context: str = "",
    ) -> str:
        """Generate a commit message for the staged diff.

        Raises ProviderError when the model returns an empty message once
        surrounding quotes and backticks are stripped.
        """
        prompt = self._build_commit_prompt(diff, files, branch, extra_context)
        raw = self._call_with_retry(SYSTEM_PROMPT, prompt)
        message = raw.strip().strip("`\"'")
        if not message:
            raise ProviderError("AI generated an empty commit message")
        self._record("commit", prompt, message)
        return message

    @property
    def interactions(self) -> list[Interaction]:
        return list(self._interactions)

    def reset_session(self) -> None:
        self._interactions = []

    def contextual_prompt(self, base_prompt: str) -> str:
        """Prefix ``base_prompt`` with the last three responses of this session."""
        if not self._interactions:
            return base_prompt
        lines = ["Previous interactions context:"]
        for interaction in self._interactions[-3:]:
            lines.append(f"- {interaction.kind}: {_truncate(interaction.response, 100)}")
        lines.append("")
        lines.append("Current request:")
        lines.append(base_prompt)
        return "\n".join(lines)

    # ------------------------------------------------------------------ #
    # Abstract: implement in each provider                                #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response.

        This is the only method subclasses must implement. It should raise
        on failure; _call_with_retry handles retries and logging.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _call_with_retry(self, system_prompt: str, user_prompt: str) -> str:
        """Call _call_api up to max_retries times with exponential backoff.

        Raises ProviderError once every attempt has failed.
        """
        for attempt in range(self.max_retries):
            try:
                return self._call_api(system_prompt, user_prompt)
            except Exception as e:
                if attempt == self.max_retries - 1:
                    logger.error(
                        "%s API failed after %d attempt(s): %s",
                        self.__class__.__name__,
                        self.max_retries,
                        e,
                    )
                    raise ProviderError(f"AI request failed: {e}") from e
                delay = 2**attempt
                logger.warning(
                    "%s API error (attempt %d/%d): %s. Retrying in %ds...",
                    self.__class__.__name__,
                    attempt + 1,
                    self.max_retries,
                    e,
                    delay,
                )
                time.sleep(delay)
        raise ProviderError("AI request was never attempted")

    def _record(self, kind: str, prompt: str, response: str) -> None:
        self._interactions.append(Interaction(kind=kind, prompt=prompt, response=response))

    def _select_template(self, branch: str) -> str:
        """Pick the commit context template that matches the branch naming."""
        template = self.context_templates.get("default", "")
        if not branch:
            return template
        if "bug" in branch or "fix" in branch:
            return self.context_templates.get("bugfix", template)
        if "feature" in branch or "feat" in branch:
            return self.context_templates.get("feature", template)
        return template

    def _build_commit_prompt(self, diff: str, files: list[str], branch: str, extra_context: str = "") -> str:
        lines = [
            f"Context: {self._select_template(branch)}",
            "",
            "Generate a concise, meaningful Git commit message based on the following changes:",
            "",
        ]
        if branch:
            lines.append(f"Branch: {branch}")
        if files:
            lines.append(f"Modified files: {', '.join(files)}")
        if extra_context:
            lines.append(f"Context: {extra_context}")

        return (
            "\n".join(lines)
            + f"""
Git diff:
{diff}

Requirements:
- Use conventional commit format if applicable
- Be specific about what changed
- Keep it under 50 characters for the subject line
- Focus on the 'why' and 'what', not the 'how'
- Do not include file names unless essential
- Respond with the commit message only"""
        )

    def _build_analysis_prompt(self, code: str, category: str) -> str:
        focus = _ANALYSIS_FOCUS.get(category, _GENERIC_FOCUS)
        checklist = "\n".join(f"- {item}" for item in focus)
        return f"""Perform {category} analysis on the following code changes.

IMPORTANT: Provide ONLY text-based analysis and recommendations. \
Do NOT include any code snippets, code blocks, or code examples in your response. \
Focus on descriptive explanations, recommendations, and actionable insights.

Code changes to analyze:
{code}

Please provide a comprehensive text-based review covering:
{checklist}

Format your response as:
1. Summary: Brief overview of findings
2. Issues: List specific problems found (if any)
3. Recommendations: Actionable improvement suggestions
4. Priority: Indicate which items should be addressed first

Remember: Use descriptive text only, no code snippets or examples."""
