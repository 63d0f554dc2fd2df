from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..recommendations.cancellation import CancellationToken
from ..recommendations.dedup import normalize_title
from ..recommendations.errors import RequestCancelledError
from ..recommendations.models import Candidate
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """
    Outcome of one provider query.

    ``degraded`` marks a failed query: the candidates list is then empty and
    the pipeline carries on with whatever other fetches produced.
    """

    candidates: list[Candidate] = field(default_factory=list)
    degraded: bool = False

    @classmethod
    def failed(cls) -> FetchResult:
        return cls(candidates=[], degraded=True)


def _author(value: Any) -> str:
    if isinstance(value, list):
        names = [str(v) for v in value if v]
        return ", ".join(names) if names else "Unknown"
    if isinstance(value, str) and value.strip():
        return value
    return "Unknown"


def normalize_doc(doc: Any, source: str = DEFAULT_SEARCH_CONFIG.source) -> Candidate | None:
    """Map one Open Library search document to a ``Candidate``; ``None`` if unusable."""
    if not isinstance(doc, dict):
        return None
    title = doc.get("title")
    if not isinstance(title, str) or not title.strip():
        return None
    key = doc.get("key")
    return Candidate(
        title=title,
        author=_author(doc.get("author_name")),
        external_key=str(key) if key else None,
        source=source,
    )


def normalize_docs(payload: Any, excluded: set[str], source: str) -> list[Candidate] | None:
    """Normalize a search payload; ``None`` when the payload is malformed."""
    if not isinstance(payload, dict):
        return None
    docs = payload.get("docs")
    if not isinstance(docs, list):
        return None
    out: list[Candidate] = []
    for doc in docs:
        candidate = normalize_doc(doc, source)
        if candidate is None:
            continue
        if normalize_title(candidate.title) in excluded:
            continue
        out.append(candidate)
    return out


class OpenLibraryClient:
    """
    Thin client for ``/search.json``.

    ``transport`` is handed to ``httpx.Client`` and lets tests swap the
    network for an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    def search(
        self,
        query: str,
        limit: int,
        excluded: set[str] | None = None,
        token: CancellationToken | None = None,
    ) -> FetchResult:
        """
        Run one search and return normalized, exclusion-filtered candidates.

        Network errors, bad statuses and malformed JSON all yield
        ``FetchResult.failed()``. A cancelled token raises
        ``RequestCancelledError`` instead.
        """
        if token is not None:
            token.raise_if_cancelled()
        timeout = token.remaining(self.config.timeout) if token is not None else self.config.timeout

        try:
            with httpx.Client(
                transport=self._transport,
                timeout=timeout,
                headers={"User-Agent": self.config.user_agent},
            ) as client:
                response = client.get(self.config.search_url, params={"q": query, "limit": limit})
                response.raise_for_status()
                payload = response.json()
        except Exception:
            if token is not None and token.cancelled:
                raise RequestCancelledError()
            logger.warning("Open Library search failed for %r, continuing without it", query, exc_info=True)
            return FetchResult.failed()

        candidates = normalize_docs(payload, excluded or set(), self.config.source)
        if candidates is None:
            logger.warning("Open Library returned a malformed payload for %r", query)
            return FetchResult.failed()

        logger.debug("Open Library returned %d usable candidates for %r", len(candidates), query)
        return FetchResult(candidates=candidates)
