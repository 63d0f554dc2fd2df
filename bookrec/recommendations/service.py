from __future__ import annotations

import logging
import math
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, TypeVar

from ..catalog.models import Item
from ..catalog.store import ItemStore
from ..search.openlibrary import OpenLibraryClient
from .cancellation import CancellationToken
from .candidates import build_query, fetch_candidates
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .dedup import normalized_titles, select_unique
from .errors import BadRequestError, NotFoundError, RequestCancelledError
from .models import (
    RankRecommendation,
    RankRequest,
    RankResponse,
    WebRecommendRequest,
    WebRecommendResponse,
)
from .shuffle import make_rng, shuffle
from .similarity import rank_by_similarity

logger = logging.getLogger(__name__)

T = TypeVar("T")


def clamp_top_k(top_k: Any, config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG) -> int:
    """Clamp a requested result count to ``[1, max_top_k]``; missing means the default."""
    if top_k is None or isinstance(top_k, bool):
        return config.default_top_k
    try:
        value = float(top_k)
    except (TypeError, ValueError):
        return config.default_top_k
    if not math.isfinite(value):
        return config.default_top_k
    return int(max(1.0, min(value, float(config.max_top_k))))


def _require_target(target_id: str | None) -> str:
    if target_id is None or not str(target_id).strip():
        raise BadRequestError("Missing targetId")
    return str(target_id).strip()


def _await(future: Future[T], token: CancellationToken, cap: float) -> T:
    token.raise_if_cancelled()
    try:
        return future.result(timeout=token.remaining(cap))
    except FutureTimeoutError:
        raise RequestCancelledError() from None


def rank_similar(
    store: ItemStore,
    request: RankRequest,
    token: CancellationToken | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> RankResponse:
    """
    Local path: rank catalog books by embedding similarity to the target.

    The target item, its embedding and every other embedding are read
    concurrently. A missing target or target embedding raises
    ``NotFoundError``; store failures on these reads propagate.
    """
    target_id = _require_target(request.target_id)
    top_k = clamp_top_k(request.top_k, config)
    token = token or CancellationToken(config.request_timeout)
    start_time = time.time()

    pool = ThreadPoolExecutor(max_workers=config.max_workers)
    try:
        item_future = pool.submit(store.get, target_id)
        meta_future = pool.submit(store.get_embedding_meta, target_id)
        others_future = pool.submit(store.list_embedding_metas, target_id)

        target_item = _await(item_future, token, config.request_timeout)
        if target_item is None:
            raise NotFoundError("Book not found")
        target_meta = _await(meta_future, token, config.request_timeout)
        if target_meta is None or not target_meta.embedding:
            raise NotFoundError("Target embedding not available")
        others = _await(others_future, token, config.request_timeout)
    finally:
        pool.shutdown(wait=False, cancel_futures=True)

    metas_by_id = {m.item_id: m for m in others if m.item_id != target_id and m.embedding}
    ranked = rank_by_similarity(
        target_meta.embedding,
        [(item_id, meta.embedding) for item_id, meta in metas_by_id.items()],
    )[:top_k]

    if not ranked:
        return RankResponse(recommendations=[])

    items = _item_details(store, [item_id for item_id, _ in ranked])
    token.raise_if_cancelled()

    recommendations = [
        RankRecommendation(
            score=score,
            tags=metas_by_id[item_id].tags,
            summary=metas_by_id[item_id].summary,
            item=items.get(item_id),
        )
        for item_id, score in ranked
    ]
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Ranked %d of %d embedded books for %s in %sms",
        len(recommendations),
        len(metas_by_id),
        target_id,
        elapsed_ms,
    )
    return RankResponse(recommendations=recommendations)


def _item_details(store: ItemStore, item_ids: list[str]) -> dict[str, Item]:
    try:
        return {item.id: item for item in store.get_many(item_ids)}
    except Exception:
        logger.warning("Could not load book details, returning scores only", exc_info=True)
        return {}


def _local_titles(store: ItemStore) -> set[str]:
    try:
        return normalized_titles(store.list_all_titles())
    except Exception:
        logger.warning("Could not read local titles, nothing will be excluded", exc_info=True)
        return set()


def recommend_from_web(
    store: ItemStore,
    client: OpenLibraryClient,
    request: WebRecommendRequest,
    token: CancellationToken | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> WebRecommendResponse:
    """
    Web path: books related to the target from Open Library, minus local ones.

    Candidates are fetched (with a widening retry when sparse) and
    deduplicated against local titles and the currently displayed set. Every
    fresh candidate is kept, so the request seed picks which ``topK`` of them
    are returned after the shuffle. Upstream failures only shrink the
    result; an empty list is a normal outcome.
    """
    target_id = _require_target(request.target_id)
    top_k = clamp_top_k(request.top_k, config)
    token = token or CancellationToken(config.request_timeout)
    start_time = time.time()

    target_item = store.get(target_id)
    if target_item is None:
        raise NotFoundError("Book not found")

    if not build_query(target_item):
        return WebRecommendResponse(recommendations=[])

    local_titles = _local_titles(store)
    fetched = fetch_candidates(client, target_item, top_k, local_titles, token=token, config=config)
    token.raise_if_cancelled()
    if fetched.degraded:
        logger.warning("External search unavailable for %s, returning fallback results", target_id)

    displayed = request.displayed
    excluded = local_titles | normalized_titles(c.title for c in displayed)
    # Keep the whole fresh pool so the seed decides which items survive truncation.
    selected = select_unique(
        fetched.candidates,
        excluded,
        top_k,
        previous=displayed,
        strict_limit=len(fetched.candidates),
    )
    recommendations = shuffle(selected, make_rng(request.seed))[:top_k]

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Web recommendations for %s: %d fetched, %d returned in %sms",
        target_id,
        len(fetched.candidates),
        len(recommendations),
        elapsed_ms,
    )
    return WebRecommendResponse(recommendations=recommendations)
