from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..catalog.models import Item


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Candidate(_CamelModel):
    """A recommendation unit from any source, normalized once at the fetch boundary."""

    title: str
    author: str = "Unknown"
    external_key: str | None = None
    source: str
    score: float | None = None


class RankRequest(_CamelModel):
    target_id: str | None = Field(default=None, description="Catalog id of the book to match")
    top_k: float | None = Field(default=None, description="Clamped to [1, 50]; defaults to 5")


class WebRecommendRequest(RankRequest):
    seed: float | str | None = Field(
        default=None,
        description="Number or numeric string; makes the shuffle reproducible",
    )
    displayed: list[Candidate] = Field(
        default_factory=list,
        description="Recommendations currently shown to the user, sent on refresh",
    )


class RankRecommendation(_CamelModel):
    score: float
    tags: list[str] = Field(default_factory=list)
    summary: str = ""
    item: Item | None = None


class RankResponse(_CamelModel):
    recommendations: list[RankRecommendation]


class WebRecommendResponse(_CamelModel):
    recommendations: list[Candidate]


class GenerateRequest(_CamelModel):
    target_id: str | None = None


class GenerateResponse(_CamelModel):
    success: bool
    summary: str
    tags: list[str]
