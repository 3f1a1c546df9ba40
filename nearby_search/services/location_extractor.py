"""
Place-name extraction from AI answers.

The completion prompt asks for business names in **bold**; every bold span
that is long enough and not a generic word becomes a candidate.
"""

import re

from loguru import logger

BOLD_SPAN_PATTERN = re.compile(r"\*\*([^*]+)\*\*")

STOP_WORDS = frozenset({
    "the", "and", "or", "in", "at", "on", "near",
    "best", "good", "great", "popular", "famous", "top",
    "here", "there", "this", "that",
    "where", "what", "how", "when", "why",
})

MIN_CANDIDATE_LENGTH = 3
DEFAULT_CANDIDATE_LIMIT = 10


def candidate_key(name: str) -> str:
    """Case-insensitive identity used to deduplicate candidates."""
    return name.strip().lower()


def is_generic(name: str) -> bool:
    return candidate_key(name) in STOP_WORDS


def extract_candidates(text: str, limit: int = DEFAULT_CANDIDATE_LIMIT) -> list[str]:
    """Return distinct bold-marked place names in first-seen order."""
    candidates: list[str] = []
    seen: set[str] = set()

    for match in BOLD_SPAN_PATTERN.finditer(text):
        name = match.group(1).strip()
        if len(name) < MIN_CANDIDATE_LENGTH or is_generic(name):
            continue
        key = candidate_key(name)
        if key in seen:
            continue
        seen.add(key)
        candidates.append(name)
        if len(candidates) >= limit:
            break

    logger.debug(f"Extracted {len(candidates)} candidate(s): {candidates}")
    return candidates
