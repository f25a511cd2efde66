"""Code review orchestration over staged diffs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from codegenius_core.config import DEFAULT_REVIEW_TYPES
from codegenius_core.errors import ProviderError, ValidationError
from codegenius_core.parser import ReviewResult, parse_review_response

if TYPE_CHECKING:
    from codegenius_core.interfaces import AIClient

logger = logging.getLogger(__name__)

NO_CHANGES_SUMMARY = "No changes to review."


class Reviewer:
    """Runs one or more review categories against a diff through an AI client."""

    def __init__(self, provider: AIClient, review_types: list[str] | None = None):
        self.provider = provider
        self._review_types = list(review_types) if review_types else list(DEFAULT_REVIEW_TYPES)

    @property
    def supported_types(self) -> list[str]:
        return list(self._review_types)

    def is_valid_type(self, review_type: str) -> bool:
        return review_type in self._review_types

    def perform_review(self, diff: str, review_type: str) -> ReviewResult:
        """Review ``diff`` for one category.

        An empty diff short-circuits without calling the provider. Provider
        failures propagate as ProviderError.
        """
        if not self.is_valid_type(review_type):
            raise ValidationError(
                f"Invalid review type: {review_type!r}. Choose one of: {', '.join(self._review_types)}."
            )

        if not diff.strip():
            return ReviewResult(type=review_type, summary=NO_CHANGES_SUMMARY)

        logger.debug("Requesting %s review for %d chars of diff", review_type, len(diff))
        response = self.provider.analyze(diff, review_type)
        return parse_review_response(response, review_type)

    def batch_review(self, diff: str, review_types: list[str] | None = None) -> dict[str, ReviewResult]:
        """Run several categories, skipping unknown ones and ones whose AI call fails.

        Results are keyed by review type in request order.
        """
        results: dict[str, ReviewResult] = {}
        for review_type in review_types or self._review_types:
            if not self.is_valid_type(review_type):
                logger.warning("Skipping unknown review type %r", review_type)
                continue
            try:
                results[review_type] = self.perform_review(diff, review_type)
            except ProviderError as e:
                logger.warning("%s review failed: %s", review_type, e)
        return results
