from __future__ import annotations

import logging
from typing import Any

import requests

from briefing_mcp.app.config import (
    ANTHROPIC_MESSAGES_URL,
    ANTHROPIC_VERSION,
    BACKEND_TIMEOUT,
    SUMMARY_MAX_TOKENS,
    SUMMARY_MODEL,
    MCPSettings,
)
from briefing_mcp.tools.errors import ToolError

logger = logging.getLogger("briefing-mcp")

NO_SUMMARY = "No summary generated"


def build_summary_prompt(
    articles: list[dict[str, Any]], style: str = "neutral", length: str = "medium"
) -> str:
    lines = "\n".join(f"- {a.get('title')}: {a.get('description')}" for a in articles)
    return (
        "You are a news summarization assistant.\n\n"
        f"Summarize the following news articles into a {length} summary in a {style} tone.\n\n"
        f"Articles:\n{lines}\n\n"
        "Return the summary in plain text."
    )


def summarize_news(args: dict[str, Any], settings: MCPSettings) -> str:
    """Ask the model for a plain text digest of the given articles."""
    if not settings.anthropic_api_key:
        raise ToolError("ANTHROPIC_API_KEY is not configured")

    articles = args.get("articles") or []
    prompt = build_summary_prompt(
        articles, style=args.get("style") or "neutral", length=args.get("length") or "medium"
    )
    payload = {
        "model": SUMMARY_MODEL,
        "max_tokens": SUMMARY_MAX_TOKENS,
        "messages": [{"role": "user", "content": [{"type": "text", "text": prompt}]}],
    }
    headers = {
        "x-api-key": settings.anthropic_api_key,
        "anthropic-version": ANTHROPIC_VERSION,
        "content-type": "application/json",
    }

    try:
        resp = requests.post(
            ANTHROPIC_MESSAGES_URL, json=payload, headers=headers, timeout=BACKEND_TIMEOUT
        )
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Error summarizing news: {e}")
        raise ToolError("Failed to summarize news") from e

    content = data.get("content") if isinstance(data, dict) else None
    if content and isinstance(content[0], dict) and content[0].get("text"):
        return str(content[0]["text"])
    return NO_SUMMARY
