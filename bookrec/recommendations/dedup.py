from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .models import Candidate

logger = logging.getLogger(__name__)


def normalize_title(title: str | None) -> str:
    """Dedup key: trimmed, lower-cased title."""
    return (title or "").strip().lower()


def normalized_titles(titles: Iterable[str | None]) -> set[str]:
    return {key for key in (normalize_title(t) for t in titles) if key}


def merge_unique(*batches: Sequence[Candidate]) -> list[Candidate]:
    """Concatenate batches, keeping the first candidate seen for each title."""
    seen: set[str] = set()
    merged: list[Candidate] = []
    for batch in batches:
        for candidate in batch:
            key = normalize_title(candidate.title)
            if not key or key in seen:
                continue
            seen.add(key)
            merged.append(candidate)
    return merged


def select_unique(
    candidates: Sequence[Candidate],
    excluded: set[str],
    limit: int,
    previous: Sequence[Candidate] | None = None,
    strict_limit: int | None = None,
) -> list[Candidate]:
    """
    Pick candidates with distinct titles.

    Passes run in order:

    1. strict: skip titles already chosen or present in ``excluded``; stops
       at ``strict_limit`` items (default ``limit``);
    2. relaxed: only when strict chose fewer than ``limit``, skip titles
       already chosen and top up to ``limit`` with excluded items;
    3. rotate: nothing chosen at all but ``previous`` is non-empty, so reuse
       ``previous`` rotated left by one, deduplicated, up to ``limit``.

    A ``strict_limit`` above ``limit`` keeps the whole fresh pool so the
    caller can sample from it; the result may then exceed ``limit``.
    The caller only gets an empty list when there is no usable data anywhere.
    """
    if limit <= 0:
        return []
    if strict_limit is None:
        strict_limit = limit

    chosen: list[Candidate] = []
    seen: set[str] = set()

    for candidate in candidates:
        if len(chosen) >= strict_limit:
            break
        key = normalize_title(candidate.title)
        if not key or key in seen or key in excluded:
            continue
        chosen.append(candidate)
        seen.add(key)

    if len(chosen) < limit:
        strict_count = len(chosen)
        for candidate in candidates:
            if len(chosen) >= limit:
                break
            key = normalize_title(candidate.title)
            if not key or key in seen:
                continue
            chosen.append(candidate)
            seen.add(key)
        if len(chosen) > strict_count:
            logger.debug("Relaxed pass admitted %d excluded candidates", len(chosen) - strict_count)

    if not chosen and previous:
        rotated = merge_unique(list(previous[1:]) + [previous[0]])
        logger.info("No fresh candidates, rotating %d previous recommendations", len(rotated))
        return rotated[:limit]

    return chosen
