"""Key term extraction for section summaries.

Pulls bold text and inline code out of a section's own content. This is a
pattern scan, not a markdown parser: nested emphasis, escaped markers and
code fences are not understood.
"""

from __future__ import annotations

import re

BOLD_PATTERN = re.compile(r"\*\*([^*]+)\*\*|__([^_]+)__")
CODE_PATTERN = re.compile(r"`([^`]+)`")

MAX_KEY_TERMS = 5
MAX_CODE_MATCHES = 10
MAX_BOLD_LENGTH = 50
MAX_CODE_LENGTH = 40


class KeyTermExtractor:
    """Extracts up to ``max_terms`` salient terms from a block of text.

    Bold terms come first, then inline code, each in the order found.
    Terms are de-duplicated by exact string.

    Args:
        max_terms: Maximum number of terms returned.
        max_code_matches: Only this many inline code spans are examined.

    Example::

        extractor = KeyTermExtractor()
        extractor.extract("Use **retries** with `backoff=2`.")
        # ['retries', 'backoff=2']
    """

    def __init__(
        self,
        max_terms: int = MAX_KEY_TERMS,
        max_code_matches: int = MAX_CODE_MATCHES,
    ) -> None:
        self._max_terms = max_terms
        self._max_code_matches = max_code_matches

    def extract(self, content: str) -> list[str]:
        """Return the key terms found in ``content``.

        Args:
            content: The section's own text, without descendants.

        Returns:
            Ordered, de-duplicated terms, at most ``max_terms`` long.
        """
        terms: list[str] = []
        seen: set[str] = set()

        for match in BOLD_PATTERN.finditer(content):
            term = (match.group(1) or match.group(2) or "").strip()
            self._record(term, MAX_BOLD_LENGTH, terms, seen)

        for index, match in enumerate(CODE_PATTERN.finditer(content)):
            if index >= self._max_code_matches:
                break
            self._record(match.group(1).strip(), MAX_CODE_LENGTH, terms, seen)

        return terms[: self._max_terms]

    @staticmethod
    def _record(
        term: str, max_length: int, terms: list[str], seen: set[str]
    ) -> None:
        if term and term not in seen and len(term) < max_length:
            terms.append(term)
            seen.add(term)


_default_extractor = KeyTermExtractor()


def extract_key_terms(content: str) -> list[str]:
    """Extract key terms with the default limits."""
    return _default_extractor.extract(content)
