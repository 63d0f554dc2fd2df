"""
Offline script to precompute summary, tags and embeddings for every book.

Usage:
    python -m bookrec.embeddings.precompute
"""
from __future__ import annotations

from ..catalog.store import ItemStore, get_store
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig
from .metadata import build_metadata


def run_precompute(
    store: ItemStore | None = None,
    llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
    embedding_config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG,
) -> int:
    store = store or get_store()
    items = store.list_items()

    print(f"Generating metadata for {len(items)} books ...")
    for item in items:
        store.upsert_embedding_meta(build_metadata(item, llm_config, embedding_config))

    print(f"Stored metadata for {len(items)} books")
    return len(items)


if __name__ == "__main__":
    run_precompute()
