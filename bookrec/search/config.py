from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    search_url: str = os.getenv("OPENLIBRARY_SEARCH_URL", "https://openlibrary.org/search.json")
    timeout: float = float(os.getenv("OPENLIBRARY_TIMEOUT", "8.0"))
    user_agent: str = "bookrec/1.0 (+https://openlibrary.org/developers/api)"
    source: str = "openlibrary"


DEFAULT_SEARCH_CONFIG = SearchConfig()
