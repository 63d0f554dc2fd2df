from __future__ import annotations

import json
import logging

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a concise book summarizer and tagger. "
    "Given a book's title, author and reader notes, summarize the book "
    "in two sentences and pick four short topical tags.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"summary": "<two sentences>", "tags": ["<tag>", "<tag>", "<tag>", "<tag>"]}'
)


def summarize_and_tag(
    text: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> tuple[str, list[str]]:
    """
    Call Groq LLM to summarize a book and tag it.

    Returns ``(summary, tags)`` with at most ``config.max_tags`` tags.
    Returns ``("", [])`` on any failure (timeout, bad JSON, API error).
    """
    if not config.enabled or not config.api_key:
        return "", []

    if not text.strip():
        return "", []

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": text},
            ],
            max_tokens=config.max_tokens,
            temperature=0.3,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        parsed = json.loads(content)

        summary = str(parsed.get("summary") or "").strip()
        raw_tags = parsed.get("tags") or []
        if not isinstance(raw_tags, list):
            raw_tags = []
        tags = [str(t).strip() for t in raw_tags if str(t).strip()][: config.max_tags]

        return summary, tags

    except Exception:
        logger.warning("Groq LLM call failed, falling back to catalog-derived metadata", exc_info=True)
        return "", []
