from __future__ import annotations

import pytest

from bookrec.catalog.models import EmbeddingMeta
from bookrec.catalog.store import DataFrameItemStore
from bookrec.recommendations.models import Candidate
from bookrec.search.openlibrary import FetchResult

BOOKS = [
    {"id": "b1", "title": "Dune", "author": "Frank Herbert", "notes": "Desert planet politics"},
    {"id": "b2", "title": "Foundation", "author": "Isaac Asimov", "notes": "Fall of an empire"},
    {"id": "b3", "title": "Hyperion", "author": "Dan Simmons", "notes": ""},
    {"id": "b4", "title": "Neuromancer", "author": "William Gibson", "notes": None},
    {"id": "b5", "title": "", "author": "", "notes": ""},
]


class StubSearchClient:
    """Scripted stand-in for ``OpenLibraryClient``, keyed by query text."""

    def __init__(self, responses: dict[str, list[str] | None] | None = None, default: list[str] | None = None):
        self.responses = responses or {}
        self.default = default
        self.calls: list[tuple[str, int]] = []

    def search(self, query, limit, excluded=None, token=None):
        self.calls.append((query, limit))
        titles = self.responses.get(query, self.default)
        if titles is None:
            return FetchResult.failed()
        excluded = excluded or set()
        return FetchResult(
            candidates=[
                Candidate(title=t, author="Author", source="openlibrary")
                for t in titles
                if t.strip().lower() not in excluded
            ]
        )


@pytest.fixture
def store() -> DataFrameItemStore:
    metas = [
        EmbeddingMeta(item_id="b1", summary="Spice and sandworms", tags=["scifi", "desert"], embedding=[1.0, 0.0, 0.0]),
        EmbeddingMeta(item_id="b2", summary="Psychohistory", tags=["scifi"], embedding=[0.9, 0.1, 0.0]),
        EmbeddingMeta(item_id="b3", summary="Pilgrims", tags=["scifi", "horror"], embedding=[0.0, 1.0, 0.0]),
        EmbeddingMeta(item_id="b4", summary="Cyberspace", tags=["cyberpunk"], embedding=[-1.0, 0.0, 0.0]),
        EmbeddingMeta(item_id="ghost", summary="No catalog row", tags=[], embedding=[0.5, 0.5]),
        EmbeddingMeta(item_id="b5", summary="", tags=[], embedding=[]),
    ]
    return DataFrameItemStore(BOOKS, metas)
