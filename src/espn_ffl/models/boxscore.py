from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from espn_ffl.models.base import BuildContext, Json, as_float, as_int, nested


@dataclass(frozen=True)
class BoxscoreSide:
    team_id: int | None
    total_points: float | None
    roster_player_ids: list[int] = field(default_factory=list)


def _side(raw: Any) -> BoxscoreSide | None:
    if not isinstance(raw, dict):
        return None

    entries = nested(raw, "rosterForCurrentScoringPeriod", "entries") or []
    player_ids = [
        pid for pid in (as_int(e.get("playerId")) for e in entries if isinstance(e, dict))
        if pid is not None
    ]
    return BoxscoreSide(
        team_id=as_int(raw.get("teamId")),
        total_points=as_float(raw.get("totalPoints")),
        roster_player_ids=player_ids,
    )


@dataclass(frozen=True)
class Boxscore:
    """One head-to-head matchup of a week (bye weeks have no away side)."""

    id: int | None
    matchup_period_id: int | None
    home: BoxscoreSide | None
    away: BoxscoreSide | None
    winner: str | None
    league_id: int | None = None
    season_id: int | None = None
    scoring_period_id: int | None = None
    raw: Json = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build_from_server(cls, raw: Json, context: BuildContext | None = None) -> Boxscore:
        ctx = context or BuildContext()
        return cls(
            id=as_int(raw.get("id")),
            matchup_period_id=as_int(raw.get("matchupPeriodId")),
            home=_side(raw.get("home")),
            away=_side(raw.get("away")),
            winner=raw.get("winner"),
            league_id=ctx.league_id,
            season_id=ctx.season_id,
            scoring_period_id=ctx.scoring_period_id,
            raw=raw,
        )
