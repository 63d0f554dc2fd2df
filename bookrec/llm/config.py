from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    timeout: float = 10.0
    max_tokens: int = 300
    max_tags: int = 6
    enabled: bool = os.getenv("LLM_ENABLED", "1").lower() not in ("0", "false", "no")


DEFAULT_LLM_CONFIG = LLMConfig()
