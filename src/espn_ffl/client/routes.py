from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from espn_ffl.client.base.types import Json
from espn_ffl.client.era import Era

NFL_GAMES_BASE = "apis/fantasy/v2/games/ffl/games"


def build_route(base: str, params: str) -> str:
    """Concatenate a base path and an already formatted query string. No escaping."""
    return f"{base}{params}"


def views(*names: str) -> str:
    return "&".join(f"view={n}" for n in names)


@dataclass(frozen=True)
class EraEndpoint:
    """
    Where and how one API generation serves league data.

    Modern (2018+): `{base}/{seasonId}/segments/0/leagues/{leagueId}?...`, object envelope.
    Historical (<2018): `{base}/{leagueId}?seasonId=...&...`, response wrapped in a
    single-element array.
    """

    era: Era
    base_url: str

    def league_base(self, league_id: int, season_id: int) -> str:
        if self.era is Era.MODERN:
            return f"{season_id}/segments/0/leagues/{league_id}"
        return f"{league_id}"

    def league_params(self, season_id: int, scoring_period_id: int, view_params: str) -> str:
        if self.era is Era.MODERN:
            return f"?scoringPeriodId={scoring_period_id}&{view_params}"
        return f"?scoringPeriodId={scoring_period_id}&seasonId={season_id}&{view_params}"

    def league_route(
        self, league_id: int, season_id: int, scoring_period_id: int, view_params: str
    ) -> str:
        return build_route(
            self.league_base(league_id, season_id),
            self.league_params(season_id, scoring_period_id, view_params),
        )

    def unwrap(self, payload: Any) -> Json:
        return unwrap_envelope(self.era, payload)


def unwrap_envelope(era: Era, payload: Any) -> Json:
    """
    Return the object holding the named collections for `era`.

    League history responses come back as an array with the league object as its only
    element; anything unexpected unwraps to an empty object.
    """
    if era is Era.HISTORICAL:
        if isinstance(payload, list) and payload and isinstance(payload[0], dict):
            return payload[0]
        return {}

    return payload if isinstance(payload, dict) else {}


def nfl_games_route(start_date: str, end_date: str) -> str:
    return build_route(NFL_GAMES_BASE, f"?dates={start_date}-{end_date}&pbpOnly=true")
