from __future__ import annotations

from dataclasses import dataclass, field

from espn_ffl.models.base import BuildContext, Json, as_float, as_int, nested


@dataclass(frozen=True)
class FreeAgentPlayer:
    id: int | None
    full_name: str | None
    status: str | None
    default_position_id: int | None
    pro_team_id: int | None
    injury_status: str | None
    percent_owned: float | None
    percent_started: float | None
    league_id: int | None = None
    season_id: int | None = None
    scoring_period_id: int | None = None
    raw: Json = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build_from_server(cls, raw: Json, context: BuildContext | None = None) -> FreeAgentPlayer:
        ctx = context or BuildContext()
        player = raw.get("player") or {}
        return cls(
            id=as_int(player.get("id", raw.get("id"))),
            full_name=player.get("fullName"),
            status=raw.get("status"),
            default_position_id=as_int(player.get("defaultPositionId")),
            pro_team_id=as_int(player.get("proTeamId")),
            injury_status=player.get("injuryStatus"),
            percent_owned=as_float(nested(player, "ownership", "percentOwned")),
            percent_started=as_float(nested(player, "ownership", "percentStarted")),
            league_id=ctx.league_id,
            season_id=ctx.season_id,
            scoring_period_id=ctx.scoring_period_id,
            raw=raw,
        )
