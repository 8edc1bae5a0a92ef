from __future__ import annotations

from dataclasses import dataclass, field

from espn_ffl.models.base import BuildContext, Json, as_float, as_int


@dataclass(frozen=True)
class DraftPlayer:
    """A draft pick joined with the drafted player's info (flattened)."""

    id: int | None
    full_name: str | None
    team_id: int | None
    round_id: int | None
    round_pick_number: int | None
    overall_pick_number: int | None
    bid_amount: float | None
    keeper: bool
    auto_drafted: bool
    default_position_id: int | None
    pro_team_id: int | None
    season_id: int | None = None
    scoring_period_id: int | None = None
    raw: Json = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build_from_server(cls, raw: Json, context: BuildContext | None = None) -> DraftPlayer:
        ctx = context or BuildContext()
        return cls(
            id=as_int(raw.get("playerId")),
            full_name=raw.get("fullName"),
            team_id=as_int(raw.get("teamId")),
            round_id=as_int(raw.get("roundId")),
            round_pick_number=as_int(raw.get("roundPickNumber")),
            overall_pick_number=as_int(raw.get("overallPickNumber")),
            bid_amount=as_float(raw.get("bidAmount")),
            keeper=bool(raw.get("keeper", False)),
            auto_drafted=bool(raw.get("autoDraftTypeId", 0)),
            default_position_id=as_int(raw.get("defaultPositionId")),
            pro_team_id=as_int(raw.get("proTeamId")),
            season_id=ctx.season_id,
            scoring_period_id=ctx.scoring_period_id,
            raw=raw,
        )
