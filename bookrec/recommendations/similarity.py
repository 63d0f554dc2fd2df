from __future__ import annotations

from typing import Sequence

import numpy as np

EPSILON = float(np.finfo(np.float64).eps)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity over the overlapping prefix of two vectors.

    Vectors of different length are compared on their first
    ``min(len(a), len(b))`` components only. ``EPSILON`` in the denominator
    makes a zero-norm vector score 0 instead of dividing by zero.
    """
    n = min(len(a), len(b))
    va = np.asarray(a[:n], dtype=np.float64)
    vb = np.asarray(b[:n], dtype=np.float64)
    dot = float(np.dot(va, vb))
    denom = float(np.sqrt(np.dot(va, va))) * float(np.sqrt(np.dot(vb, vb))) + EPSILON
    return dot / denom


def rank_by_similarity(
    target: Sequence[float],
    candidates: Sequence[tuple[str, Sequence[float]]],
) -> list[tuple[str, float]]:
    """
    Score every ``(item_id, vector)`` pair against ``target``, best first.

    ``sorted`` is stable, so equal scores keep their input order.
    """
    scored = [(item_id, cosine_similarity(target, vector)) for item_id, vector in candidates]
    return sorted(scored, key=lambda pair: pair[1], reverse=True)
