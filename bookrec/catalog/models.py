from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Item(BaseModel):
    id: str
    title: str
    author: str | None = None
    notes: str | None = None


class EmbeddingMeta(BaseModel):
    item_id: str
    summary: str = ""
    tags: list[str] = Field(default_factory=list)
    embedding: list[float] = Field(default_factory=list)
    updated_at: datetime | None = None
