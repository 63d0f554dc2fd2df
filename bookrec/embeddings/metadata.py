from __future__ import annotations

import logging
from datetime import datetime, timezone

from ..catalog.models import EmbeddingMeta, Item
from ..catalog.store import ItemStore
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import summarize_and_tag
from ..recommendations.errors import BadRequestError, NotFoundError
from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig
from .encoder import encode_text

logger = logging.getLogger(__name__)

_SUMMARY_FALLBACK_CHARS = 200
_TAG_FALLBACK_WORDS = 4


def _source_text(item: Item) -> str:
    return "\n\n".join(p for p in (item.title, item.author, item.notes) if p)


def _fallback_summary(item: Item) -> str:
    if item.notes:
        return item.notes[:_SUMMARY_FALLBACK_CHARS]
    return f'A book titled "{item.title}"'


def _fallback_tags(item: Item) -> list[str]:
    return [w.lower() for w in (item.title or "").split()[:_TAG_FALLBACK_WORDS] if w]


def build_metadata(
    item: Item,
    llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
    embedding_config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG,
) -> EmbeddingMeta:
    """Summary, tags and embedding for one book, with catalog-derived fallbacks."""
    text = _source_text(item)
    summary, tags = summarize_and_tag(text, config=llm_config)
    return EmbeddingMeta(
        item_id=item.id,
        summary=summary or _fallback_summary(item),
        tags=tags or _fallback_tags(item),
        embedding=encode_text(text or item.title, config=embedding_config),
        updated_at=datetime.now(timezone.utc),
    )


def generate_metadata(
    store: ItemStore,
    target_id: str | None,
    llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
    embedding_config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG,
) -> EmbeddingMeta:
    """
    Generate and upsert AI metadata for one catalog book.

    Raises ``BadRequestError`` for a missing id and ``NotFoundError`` for an
    unknown book. Upsert failures propagate to the caller.
    """
    if target_id is None or not target_id.strip():
        raise BadRequestError("Missing targetId")

    item = store.get(target_id.strip())
    if item is None:
        raise NotFoundError("Book not found")

    record = build_metadata(item, llm_config, embedding_config)
    store.upsert_embedding_meta(record)
    logger.info("Stored metadata for %s (%d tags, %d dims)", item.id, len(record.tags), len(record.embedding))
    return record
