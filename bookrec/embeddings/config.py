from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class EmbeddingConfig:
    model_name: str = "all-MiniLM-L6-v2"
    dimension: int = 384
    fallback_dimension: int = 153
    enabled: bool = os.getenv("EMBEDDINGS_ENABLED", "1").lower() not in ("0", "false", "no")


DEFAULT_EMBEDDING_CONFIG = EmbeddingConfig()
