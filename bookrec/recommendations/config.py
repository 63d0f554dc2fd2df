from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class RecommendationConfig:
    """
    Tunable limits of the recommendation pipeline.

    The widening threshold and fetch sizing are heuristics, not API
    guarantees.
    """

    default_top_k: int = 5
    max_top_k: int = 50
    widen_threshold: int = 2
    fetch_multiplier: int = 6
    min_fetch_limit: int = 20
    max_fetch_limit: int = 100
    max_widen_limit: int = 200
    request_timeout: float = float(os.getenv("RECOMMEND_TIMEOUT_SECONDS", "15.0"))
    max_workers: int = 3


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
