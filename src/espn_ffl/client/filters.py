from __future__ import annotations

import json
from typing import Any

FANTASY_FILTER_HEADER = "x-fantasy-filter"

DRAFT_PLAYER_LIMIT = 3000
FREE_AGENT_LIMIT = 2000
FREE_AGENT_STATUSES = ("FREEAGENT", "WAIVERS")


def _players_filter(*, limit: int, statuses: tuple[str, ...] | None = None) -> dict[str, Any]:
    players: dict[str, Any] = {}
    if statuses:
        players["filterStatus"] = {"value": list(statuses)}
    players["limit"] = limit
    # Most-owned players first, so the limit cuts off the irrelevant tail.
    players["sortPercOwned"] = {"sortAsc": False, "sortPriority": 1}
    return {"players": players}


def player_filter_headers(
    *, limit: int, statuses: tuple[str, ...] | None = None
) -> dict[str, str]:
    return {FANTASY_FILTER_HEADER: json.dumps(_players_filter(limit=limit, statuses=statuses))}


def draft_player_headers() -> dict[str, str]:
    return player_filter_headers(limit=DRAFT_PLAYER_LIMIT)


def free_agent_headers() -> dict[str, str]:
    return player_filter_headers(limit=FREE_AGENT_LIMIT, statuses=FREE_AGENT_STATUSES)
