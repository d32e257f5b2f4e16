from __future__ import annotations

import logging
from typing import Any

import requests

from briefing_mcp.app.config import BACKEND_TIMEOUT, USERS_TABLE, MCPSettings
from briefing_mcp.tools.errors import ToolError

logger = logging.getLogger("briefing-mcp")


def fetch_users_by_interest(args: dict[str, Any], settings: MCPSettings) -> list[dict[str, Any]]:
    """
    Fetch users whose interest matches the given category.

    Queries the Supabase REST endpoint for the users table with a case-insensitive
    substring match on the `interest` column.
    """
    if not settings.supabase_url or not settings.supabase_api_key:
        raise ToolError("SUPABASE_URL or SUPABASE_API_KEY is not configured")

    interest = args.get("interest", "")
    logger.info(f"Fetching users with interest: {interest}")

    url = f"{settings.supabase_url}/rest/v1/{USERS_TABLE}"
    headers = {
        "apikey": settings.supabase_api_key,
        "Authorization": f"Bearer {settings.supabase_api_key}",
        "Accept": "application/json",
    }
    params = {"select": "*", "interest": f"ilike.*{interest}*"}

    try:
        resp = requests.get(url, headers=headers, params=params, timeout=BACKEND_TIMEOUT)
        resp.raise_for_status()
        rows = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Error fetching users: {e}")
        raise ToolError("Failed to fetch users") from e

    if not isinstance(rows, list):
        raise ToolError("Failed to fetch users")

    logger.info(f"Users fetched: {len(rows)}")
    return rows
