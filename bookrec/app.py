from __future__ import annotations

import logging
from typing import Callable, TypeVar

from fastapi import Depends, FastAPI, HTTPException

from .catalog.store import ItemStore, get_store
from .embeddings.metadata import generate_metadata
from .recommendations.errors import RecommendationError
from .recommendations.models import (
    GenerateRequest,
    GenerateResponse,
    RankRequest,
    RankResponse,
    WebRecommendRequest,
    WebRecommendResponse,
)
from .recommendations.service import rank_similar, recommend_from_web
from .search.openlibrary import OpenLibraryClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

app = FastAPI(title="Book Recommendation API", version="1.0.0")


def get_search_client() -> OpenLibraryClient:
    return OpenLibraryClient()


def _run(operation: str, call: Callable[[], T]) -> T:
    """Translate domain errors to HTTP errors; hide everything else behind a 500."""
    try:
        return call()
    except RecommendationError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc))
    except Exception:
        logger.exception("%s failed", operation)
        raise HTTPException(status_code=500, detail="Internal server error")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/ai/recommend", response_model=RankResponse)
def recommend(
    body: RankRequest,
    store: ItemStore = Depends(get_store),
) -> RankResponse:
    return _run("Rank", lambda: rank_similar(store, body))


@app.post(
    "/ai/web-recommend",
    response_model=WebRecommendResponse,
    response_model_exclude_none=True,
)
def web_recommend(
    body: WebRecommendRequest,
    store: ItemStore = Depends(get_store),
    client: OpenLibraryClient = Depends(get_search_client),
) -> WebRecommendResponse:
    return _run("WebRecommend", lambda: recommend_from_web(store, client, body))


@app.post("/ai/generate", response_model=GenerateResponse)
def generate(
    body: GenerateRequest,
    store: ItemStore = Depends(get_store),
) -> GenerateResponse:
    record = _run("Generate", lambda: generate_metadata(store, body.target_id))
    return GenerateResponse(success=True, summary=record.summary, tags=record.tags)
