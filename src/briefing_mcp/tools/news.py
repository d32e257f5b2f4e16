from __future__ import annotations

import logging
from typing import Any

import requests

from briefing_mcp.app.config import BACKEND_TIMEOUT, NEWS_API_URL, MCPSettings
from briefing_mcp.tools.errors import ToolError

logger = logging.getLogger("briefing-mcp")


def _news_params(args: dict[str, Any], api_key: str) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if args.get("country"):
        params["country"] = args["country"]
    if args.get("category"):
        params["category"] = args["category"]
    if args.get("query"):
        params["q"] = args["query"]
    if args.get("sources"):
        params["sources"] = args["sources"]
    params["pageSize"] = args.get("pageSize") or 10
    params["page"] = args.get("page") or 1
    params["apiKey"] = api_key
    return params


def fetch_news(args: dict[str, Any], settings: MCPSettings) -> list[dict[str, Any]]:
    """Fetch top headlines from NewsAPI and keep only the fields the model needs."""
    if not settings.news_api_key:
        raise ToolError("NEWS_API_KEY is not configured")

    params = _news_params(args, settings.news_api_key)
    logger.info(f"Requesting headlines: q={params.get('q')} page={params['page']}")

    try:
        resp = requests.get(NEWS_API_URL, params=params, timeout=BACKEND_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Error fetching news: {e}")
        raise ToolError("Failed to fetch news") from e

    if not isinstance(data, dict):
        raise ToolError("Failed to fetch news")
    articles = data.get("articles") or []

    return [
        {
            "title": article.get("title"),
            "description": article.get("description"),
            "url": article.get("url"),
            "publishedAt": article.get("publishedAt"),
        }
        for article in articles
    ]
