from __future__ import annotations

import logging

from ..catalog.models import Item
from ..search.openlibrary import FetchResult, OpenLibraryClient
from .cancellation import CancellationToken
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .dedup import merge_unique

logger = logging.getLogger(__name__)


def build_query(item: Item) -> str:
    """Search text from the item's title, author and notes."""
    parts = [p for p in (item.title, item.author, item.notes) if p]
    return " ".join(parts).strip()


def fetch_limit(top_k: int, config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG) -> int:
    """Over-fetch so enough candidates survive exclusion and dedup."""
    return min(max(top_k * config.fetch_multiplier, config.min_fetch_limit), config.max_fetch_limit)


def fetch_candidates(
    client: OpenLibraryClient,
    item: Item,
    top_k: int,
    excluded: set[str],
    token: CancellationToken | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> FetchResult:
    """
    Primary search on the full query, widened by a title-only search when sparse.

    The widening search runs only when the primary one returns fewer than
    ``min(widen_threshold, top_k)`` candidates and the item has a title. The
    result is degraded only when every search issued failed.
    """
    query = build_query(item)
    if not query:
        return FetchResult()

    limit = fetch_limit(top_k, config)
    primary = client.search(query, limit, excluded, token=token)
    if len(primary.candidates) >= min(config.widen_threshold, top_k) or not item.title:
        return primary

    widen_limit = min(limit * 2, config.max_widen_limit)
    logger.info(
        "Primary search returned %d candidates, widening with title-only query (limit=%d)",
        len(primary.candidates),
        widen_limit,
    )
    widened = client.search(item.title, widen_limit, excluded, token=token)
    return FetchResult(
        candidates=merge_unique(primary.candidates, widened.candidates),
        degraded=primary.degraded and widened.degraded,
    )
