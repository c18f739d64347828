"""
Incremental match filter for the fuzzy bar.

Filtering is recomputed from scratch on every query change; nothing is
carried over between queries.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List

from gitools.config.constants import MAX_MATCHES

logger = logging.getLogger(__name__)


@dataclass
class MatchItem:
    """A candidate that matched the current query."""

    text: str
    is_active: bool = False


def filter_candidates(
    source: Iterable[str],
    query: str,
    limit: int = MAX_MATCHES,
) -> List[MatchItem]:
    """
    Keep candidates containing ``query`` (case-sensitive), in source order.

    Args:
        source: Candidate strings
        query: Substring to look for; empty matches everything
        limit: Max results, scanning stops once reached

    Returns:
        Up to ``limit`` items; the first one is active. Empty when nothing
        matched, so callers must not assume an active item exists.
    """
    matches: List[MatchItem] = []
    if limit <= 0:
        return matches

    for candidate in source:
        if query in candidate:
            matches.append(MatchItem(candidate, is_active=not matches))
            if len(matches) >= limit:
                break

    logger.debug(f"Filter {query!r} kept {len(matches)} candidates")
    return matches
