from __future__ import annotations

from dataclasses import dataclass, field

from espn_ffl.models.base import BuildContext, Json, as_int, nested


@dataclass(frozen=True)
class League:
    """League settings merged with the league's current status."""

    name: str | None
    size: int | None
    is_public: bool | None
    current_matchup_period_id: int | None
    current_scoring_period_id: int | None
    draft_type: str | None
    matchup_period_count: int | None
    playoff_team_count: int | None
    scoring_type: str | None
    league_id: int | None = None
    season_id: int | None = None
    raw: Json = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build_from_server(cls, raw: Json, context: BuildContext | None = None) -> League:
        ctx = context or BuildContext()
        return cls(
            name=raw.get("name"),
            size=as_int(raw.get("size")),
            is_public=raw.get("isPublic"),
            current_matchup_period_id=as_int(raw.get("currentMatchupPeriodId")),
            current_scoring_period_id=as_int(raw.get("currentScoringPeriodId")),
            draft_type=nested(raw, "draftSettings", "type"),
            matchup_period_count=as_int(nested(raw, "scheduleSettings", "matchupPeriodCount")),
            playoff_team_count=as_int(nested(raw, "scheduleSettings", "playoffTeamCount")),
            scoring_type=nested(raw, "scoringSettings", "scoringType"),
            league_id=ctx.league_id,
            season_id=ctx.season_id,
            raw=raw,
        )
