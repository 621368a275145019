"""Term matching and snippet extraction shared by the entity scorers."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class FieldMatch:
    strength: float
    first_index: int
    matched_term: str
    matched_length: int = 0


def tokenize_query(query: str) -> list[str]:
    """Split a query into lowercase, de-duplicated whitespace terms."""
    terms: list[str] = []
    for word in query.lower().split():
        if word not in terms:
            terms.append(word)
    return terms


def match_field(text: str | None, terms: list[str]) -> FieldMatch | None:
    """Case-insensitive containment of any term in ``text``.

    Strength is the share of terms found. The reported position is the
    earliest occurrence across all matching terms, as an offset into
    ``text`` itself.
    """
    if not text or not terms:
        return None

    found = 0
    first: re.Match[str] | None = None
    first_term = ""
    for term in terms:
        # Searched on the original text: lowercasing can change its length.
        m = re.search(re.escape(term), text, re.IGNORECASE)
        if m is None:
            continue
        found += 1
        if first is None or m.start() < first.start():
            first = m
            first_term = term

    if first is None:
        return None
    return FieldMatch(
        strength=found / len(terms),
        first_index=first.start(),
        matched_term=first_term,
        matched_length=first.end() - first.start(),
    )


def extract_context(text: str, term_index: int, context_length: int, term_length: int = 0) -> str:
    """Return the text around a match, at most ``2 * context_length`` characters.

    The window is centred on the matched term and pulled in to the nearest
    whitespace on either side so words are not cut, as long as the term
    itself stays inside the window. A term longer than the window widens
    it to the term.
    """
    window = max(2 * context_length, term_length)
    if len(text) <= window:
        return text

    centre = term_index + term_length // 2
    start = max(0, centre - window // 2)
    end = min(len(text), start + window)
    start = max(0, end - window)

    term_end = term_index + term_length
    if start > 0 and not text[start - 1].isspace():
        for i in range(start, term_index):
            if text[i].isspace():
                start = i + 1
                break
    if end < len(text) and not text[end].isspace():
        for i in range(end - 1, max(start, term_end) - 1, -1):
            if text[i].isspace():
                end = i
                break

    return text[start:end].strip()
