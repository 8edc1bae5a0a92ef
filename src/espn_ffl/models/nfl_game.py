from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from espn_ffl.models.base import BuildContext, Json, as_float, as_int, nested


def _parse_iso_z(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(v)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


@dataclass(frozen=True)
class NFLGameTeam:
    pro_team_id: int | None
    abbreviation: str | None
    score: float | None


def _competitor(event: Json, home_away: str) -> NFLGameTeam | None:
    for c in event.get("competitors") or []:
        if isinstance(c, dict) and c.get("homeAway") == home_away:
            return NFLGameTeam(
                pro_team_id=as_int(c.get("id")),
                abbreviation=c.get("abbreviation"),
                score=as_float(c.get("score")),
            )
    return None


@dataclass(frozen=True)
class NFLGame:
    """A real-world NFL game from the league-agnostic scoreboard host."""

    id: str | None
    start_time: datetime | None
    home: NFLGameTeam | None
    away: NFLGameTeam | None
    status: str | None
    clock: str | None
    period: int | None
    raw: Json = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build_from_server(cls, raw: Json, context: BuildContext | None = None) -> NFLGame:
        game_id = raw.get("id")
        return cls(
            id=str(game_id) if game_id is not None else None,
            start_time=_parse_iso_z(raw.get("date")),
            home=_competitor(raw, "home"),
            away=_competitor(raw, "away"),
            status=(
                nested(raw, "fullStatus", "type", "state") or nested(raw, "status", "type", "state")
            ),
            clock=nested(raw, "fullStatus", "displayClock"),
            period=as_int(nested(raw, "fullStatus", "period")),
            raw=raw,
        )
