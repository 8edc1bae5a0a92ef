from __future__ import annotations

from dataclasses import dataclass, field

from espn_ffl.models.base import BuildContext, Json, as_float, as_int, nested


@dataclass(frozen=True)
class TeamOwner:
    id: str | None
    display_name: str | None
    first_name: str | None
    last_name: str | None


@dataclass(frozen=True)
class Team:
    id: int | None
    abbreviation: str | None
    name: str | None
    wins: int | None
    losses: int | None
    ties: int | None
    points_for: float | None
    points_against: float | None
    playoff_seed: int | None
    owner: TeamOwner | None
    roster_player_ids: list[int] = field(default_factory=list)
    league_id: int | None = None
    season_id: int | None = None
    scoring_period_id: int | None = None
    raw: Json = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build_from_server(cls, raw: Json, context: BuildContext | None = None) -> Team:
        ctx = context or BuildContext()
        overall = nested(raw, "record", "overall") or {}

        name = raw.get("name")
        if name is None and (raw.get("location") or raw.get("nickname")):
            name = " ".join(p for p in (raw.get("location"), raw.get("nickname")) if p)

        owner = None
        owner_raw = raw.get("owner")
        if isinstance(owner_raw, dict):
            owner = TeamOwner(
                id=owner_raw.get("id"),
                display_name=owner_raw.get("displayName"),
                first_name=owner_raw.get("firstName"),
                last_name=owner_raw.get("lastName"),
            )

        entries = nested(raw, "roster", "entries") or []
        roster_player_ids = [
            pid
            for pid in (as_int(e.get("playerId")) for e in entries if isinstance(e, dict))
            if pid is not None
        ]

        return cls(
            id=as_int(raw.get("id")),
            abbreviation=raw.get("abbrev"),
            name=name,
            wins=as_int(overall.get("wins")),
            losses=as_int(overall.get("losses")),
            ties=as_int(overall.get("ties")),
            points_for=as_float(overall.get("pointsFor")),
            points_against=as_float(overall.get("pointsAgainst")),
            playoff_seed=as_int(raw.get("playoffSeed")),
            owner=owner,
            roster_player_ids=roster_player_ids,
            league_id=ctx.league_id,
            season_id=ctx.season_id,
            scoring_period_id=ctx.scoring_period_id,
            raw=raw,
        )
