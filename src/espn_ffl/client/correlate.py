from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable

from espn_ffl.client.base.types import Json

logger = logging.getLogger(__name__)


def _is_numeric_key(key: Any) -> bool:
    if isinstance(key, (int, float)):
        return True
    try:
        float(str(key))
    except ValueError:
        return False
    return True


def flatten_sans_numeric_keys(obj: Mapping[str, Any] | None) -> Json:
    """
    Lift nested mapping attributes into one flat dict.

    Keys that look like numbers (ESPN's stat-id / rating-period maps) are dropped along
    with their values. Lists and scalars are kept as-is. Later keys overwrite earlier ones.
    """
    flat: Json = {}
    if not obj:
        return flat

    for key, value in obj.items():
        if _is_numeric_key(key):
            continue
        if isinstance(value, Mapping):
            flat.update(flatten_sans_numeric_keys(value))
        else:
            flat[key] = value
    return flat


def _first_match(items: Iterable[Any] | None, predicate: Callable[[Json], bool]) -> Json | None:
    if not items:
        return None
    for item in items:
        if isinstance(item, dict) and predicate(item):
            return item
    return None


def _player_id(player_info: Json) -> Any:
    player = player_info.get("player")
    if not isinstance(player, dict):
        return None
    return player.get("id")


def join_draft_players(picks: Iterable[Json] | None, players: Iterable[Json] | None) -> list[Json]:
    """
    Merge player info onto each draft pick, in draft order.

    The player fragment is flattened first; pick fields win on conflict. A pick whose
    player is missing keeps only its own fields.
    """
    player_list = list(players or [])
    merged: list[Json] = []

    for pick in picks or []:
        pid = pick.get("playerId")
        player_info = None
        if pid is not None:
            player_info = _first_match(player_list, lambda p, pid=pid: _player_id(p) == pid)
        if player_info is None:
            logger.debug("No player info for draft pick playerId=%s", pid)
        merged.append({**flatten_sans_numeric_keys(player_info), **pick})

    return merged


def join_team_owners(teams: Iterable[Json] | None, members: Iterable[Json] | None) -> list[Json]:
    """
    Attach the primary owner's member record to each team under `owner`.

    The owner is nested rather than spread so its `id` and other attributes never
    collide with the team's own. Unmatched teams get `owner=None`.
    """
    member_list = list(members or [])
    merged: list[Json] = []

    for team in teams or []:
        oid = team.get("primaryOwner")
        owner = None
        if oid is not None:
            owner = _first_match(member_list, lambda m, oid=oid: m.get("id") == oid)
        if owner is None:
            logger.debug("No member record for team id=%s", team.get("id"))
        merged.append({**team, "owner": owner})

    return merged


def merge_league_status(settings: Json | None, status: Json | None) -> Json:
    status = status or {}
    return {
        "currentMatchupPeriodId": status.get("currentMatchupPeriod"),
        "currentScoringPeriodId": status.get("latestScoringPeriod"),
        **(settings or {}),
    }
