from __future__ import annotations

import logging

import numpy as np

from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig

logger = logging.getLogger(__name__)

_model = None


def _get_model(config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG):
    global _model
    if _model is None:
        from sentence_transformers import SentenceTransformer

        _model = SentenceTransformer(config.model_name)
    return _model


def fallback_embedding(text: str, dimension: int = DEFAULT_EMBEDDING_CONFIG.fallback_dimension) -> list[float]:
    """
    Deterministic stand-in vector derived from character codes.

    Component ``i`` sums ``ord(c) % 97`` over ``text[i:]`` and keeps the last
    two decimal digits, so equal texts always map to equal vectors.
    """
    codes = [ord(c) % 97 for c in text]
    vector: list[float] = []
    for i in range(dimension):
        total = sum(codes[i:])
        vector.append(round((total % 100) / 100, 4))
    return vector


def encode_text(text: str, config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> list[float]:
    """
    Encode a single string into an embedding vector.

    Uses the sentence-transformer model when enabled; otherwise, or if
    encoding fails, returns :func:`fallback_embedding`.
    """
    if config.enabled and text.strip():
        try:
            vector = _get_model(config).encode(text, show_progress_bar=False)
            return np.asarray(vector, dtype=np.float64).tolist()
        except Exception:
            logger.warning("Sentence-transformer encoding failed, using fallback embedding", exc_info=True)
    return fallback_embedding(text, config.fallback_dimension)
