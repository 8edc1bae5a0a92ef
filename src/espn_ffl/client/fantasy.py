from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from espn_ffl.client.base.client import AsyncHttpClient
from espn_ffl.client.base.request import Credentials, RequestConfig, build_request_config
from espn_ffl.client.base.types import Json
from espn_ffl.client.correlate import join_draft_players, join_team_owners, merge_league_status
from espn_ffl.client.era import Era, assert_historical, assert_modern
from espn_ffl.client.filters import draft_player_headers, free_agent_headers
from espn_ffl.client.routes import EraEndpoint, build_route, nfl_games_route, views
from espn_ffl.core.config import Settings, settings
from espn_ffl.models import (
    Boxscore,
    BuildContext,
    DraftPlayer,
    EntityBuilder,
    FreeAgentPlayer,
    League,
    NFLGame,
    Team,
)

logger = logging.getLogger(__name__)

HISTORICAL_SCOREBOARD_VIEWS = (
    "mMatchupScore",
    "mScoreboard",
    "mSettings",
    "mTopPerformers",
    "mTeam",
)


@dataclass(frozen=True)
class EntityBuilders:
    """Builders the client hands joined raw records to. Swap any of them to change entities."""

    boxscore: EntityBuilder[Any] = Boxscore
    draft_player: EntityBuilder[Any] = DraftPlayer
    free_agent: EntityBuilder[Any] = FreeAgentPlayer
    team: EntityBuilder[Any] = Team
    league: EntityBuilder[Any] = League
    nfl_game: EntityBuilder[Any] = NFLGame


def _records(value: Any) -> list[Json]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def _section(data: Mapping[str, Any], key: str) -> Json:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


class FantasyClient:
    """
    Read-only client for one ESPN fantasy football league.

    Each operation validates the season's API generation before any request is made,
    joins the upstream fragments it needs, and returns built entities.

    Private leagues need the `espn_s2` and `SWID` cookies; both must be given.
    """

    def __init__(
        self,
        league_id: int,
        espn_s2: str | None = None,
        swid: str | None = None,
        *,
        http: AsyncHttpClient | None = None,
        builders: EntityBuilders | None = None,
        config: Settings | None = None,
    ) -> None:
        cfg = config or settings
        self._league_id = league_id
        self._credentials: Credentials | None = None
        self.set_cookies(espn_s2=espn_s2, swid=swid)

        self._owns_http = http is None
        self.http = http or AsyncHttpClient(
            base_url=cfg.modern_base_url,
            timeout_s=cfg.http_timeout_s,
            connect_timeout_s=cfg.http_connect_timeout_s,
        )
        self.builders = builders or EntityBuilders()

        self._endpoints = {
            Era.MODERN: EraEndpoint(Era.MODERN, cfg.modern_base_url),
            Era.HISTORICAL: EraEndpoint(Era.HISTORICAL, cfg.history_base_url),
        }
        self._games_base_url = cfg.games_base_url

    @classmethod
    def from_settings(cls, config: Settings | None = None, **kwargs: Any) -> FantasyClient:
        cfg = config or settings
        return cls(
            cfg.require_league_id(),
            espn_s2=cfg.espn_s2,
            swid=cfg.espn_swid,
            config=cfg,
            **kwargs,
        )

    @property
    def league_id(self) -> int:
        return self._league_id

    @property
    def has_credentials(self) -> bool:
        return self._credentials is not None

    def set_cookies(self, espn_s2: str | None, swid: str | None) -> None:
        """
        Set the cookies used to read private leagues.

        Both values must be non-empty; otherwise the current credentials are kept.
        """
        credentials = Credentials.from_pair(espn_s2, swid)
        if credentials is not None:
            self._credentials = credentials

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> FantasyClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # -----------------------------
    # Request helpers
    # -----------------------------

    def _request_config(self, overrides: RequestConfig | None = None) -> RequestConfig | None:
        return build_request_config(self._credentials, overrides)

    def _endpoint_config(
        self, endpoint: EraEndpoint, headers: Mapping[str, str] | None = None
    ) -> RequestConfig | None:
        return self._request_config(
            RequestConfig(base_url=endpoint.base_url, headers=dict(headers or {}))
        )

    async def _get_league_data(
        self,
        endpoint: EraEndpoint,
        route: str,
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        payload = await self.http.get_json_value(route, self._endpoint_config(endpoint, headers))
        return endpoint.unwrap(payload)

    def _context(
        self, season_id: int | None = None, scoring_period_id: int | None = None
    ) -> BuildContext:
        return BuildContext(
            league_id=self._league_id, season_id=season_id, scoring_period_id=scoring_period_id
        )

    def _build_all(
        self, builder: EntityBuilder[Any], records: Iterable[Json], context: BuildContext | None
    ) -> list[Any]:
        return [builder.build_from_server(r, context) for r in records]

    # -----------------------------
    # Boxscores
    # -----------------------------

    async def get_boxscore_for_week(
        self, *, season_id: int, matchup_period_id: int, scoring_period_id: int
    ) -> list[Any]:
        """
        All boxscores for a week (2018 onwards).

        `scoring_period_id` and `matchup_period_id` are both required and must
        correspond with each other.
        """
        assert_modern(season_id, "get_boxscore_for_week", "get_historical_scoreboard_for_week")
        return await self._scoreboard(
            self._endpoints[Era.MODERN],
            season_id=season_id,
            matchup_period_id=matchup_period_id,
            scoring_period_id=scoring_period_id,
            view_params=views("mMatchup", "mMatchupScore"),
        )

    async def get_historical_scoreboard_for_week(
        self, *, season_id: int, matchup_period_id: int, scoring_period_id: int
    ) -> list[Any]:
        """Boxscores WITHOUT rosters for seasons before 2018."""
        assert_historical(
            season_id, "get_historical_scoreboard_for_week", "get_boxscore_for_week"
        )
        return await self._scoreboard(
            self._endpoints[Era.HISTORICAL],
            season_id=season_id,
            matchup_period_id=matchup_period_id,
            scoring_period_id=scoring_period_id,
            view_params=views(*HISTORICAL_SCOREBOARD_VIEWS),
        )

    async def _scoreboard(
        self,
        endpoint: EraEndpoint,
        *,
        season_id: int,
        matchup_period_id: int,
        scoring_period_id: int,
        view_params: str,
    ) -> list[Any]:
        route = endpoint.league_route(self._league_id, season_id, scoring_period_id, view_params)
        data = await self._get_league_data(endpoint, route)

        schedule = _records(data.get("schedule"))
        matchups = [m for m in schedule if m.get("matchupPeriodId") == matchup_period_id]
        logger.debug(
            "%s scoreboard season=%s matchup_period=%s: %d matchups",
            endpoint.era.value,
            season_id,
            matchup_period_id,
            len(matchups),
        )
        return self._build_all(
            self.builders.boxscore, matchups, self._context(season_id, scoring_period_id)
        )

    # -----------------------------
    # Draft
    # -----------------------------

    async def get_draft_info(self, *, season_id: int, scoring_period_id: int = 0) -> list[Any]:
        """
        All draft picks for a season, in draft order, joined with player info.

        `scoring_period_id` selects which period player info is pulled from (0 = preseason).
        """
        assert_modern(season_id, "get_draft_info")
        endpoint = self._endpoints[Era.MODERN]

        draft_route = endpoint.league_route(
            self._league_id,
            season_id,
            scoring_period_id,
            views("mDraftDetail", "mMatchup", "mMatchupScore"),
        )
        player_route = endpoint.league_route(
            self._league_id, season_id, scoring_period_id, views("kona_player_info")
        )

        # Either request failing fails the whole call.
        draft_data, player_data = await asyncio.gather(
            self._get_league_data(endpoint, draft_route),
            self._get_league_data(endpoint, player_route, draft_player_headers()),
        )

        picks = _records(_section(draft_data, "draftDetail").get("picks"))
        players = _records(player_data.get("players"))
        merged = join_draft_players(picks, players)

        logger.debug(
            "draft season=%s: %d picks, %d player records", season_id, len(picks), len(players)
        )
        return self._build_all(
            self.builders.draft_player, merged, self._context(season_id, scoring_period_id)
        )

    # -----------------------------
    # Free agents
    # -----------------------------

    async def get_free_agents(self, *, season_id: int, scoring_period_id: int) -> list[Any]:
        """
        Free agents and waiver-wire players for a scoring period, most owned first.

        `scoring_period_id` 0 is the preseason; 18 is after the season ends.
        """
        assert_modern(season_id, "get_free_agents")
        endpoint = self._endpoints[Era.MODERN]

        route = endpoint.league_route(
            self._league_id, season_id, scoring_period_id, views("kona_player_info")
        )
        data = await self._get_league_data(endpoint, route, free_agent_headers())

        return self._build_all(
            self.builders.free_agent,
            _records(data.get("players")),
            self._context(season_id, scoring_period_id),
        )

    # -----------------------------
    # Teams
    # -----------------------------

    async def get_teams_at_week(self, *, season_id: int, scoring_period_id: int) -> list[Any]:
        assert_modern(season_id, "get_teams_at_week", "get_historical_teams_at_week")
        return await self._teams(
            self._endpoints[Era.MODERN],
            season_id=season_id,
            scoring_period_id=scoring_period_id,
            view_params=views("mRoster", "mTeam"),
        )

    async def get_historical_teams_at_week(
        self, *, season_id: int, scoring_period_id: int
    ) -> list[Any]:
        """Teams of a league for a season before 2018."""
        assert_historical(season_id, "get_historical_teams_at_week", "get_teams_at_week")
        return await self._teams(
            self._endpoints[Era.HISTORICAL],
            season_id=season_id,
            scoring_period_id=scoring_period_id,
            view_params=views(*HISTORICAL_SCOREBOARD_VIEWS, "mRoster"),
        )

    async def _teams(
        self,
        endpoint: EraEndpoint,
        *,
        season_id: int,
        scoring_period_id: int,
        view_params: str,
    ) -> list[Any]:
        route = endpoint.league_route(self._league_id, season_id, scoring_period_id, view_params)
        data = await self._get_league_data(endpoint, route)

        merged = join_team_owners(_records(data.get("teams")), _records(data.get("members")))
        return self._build_all(
            self.builders.team, merged, self._context(season_id, scoring_period_id)
        )

    # -----------------------------
    # NFL games
    # -----------------------------

    async def get_nfl_games_for_period(self, *, start_date: str, end_date: str) -> list[Any]:
        """
        All NFL games between two dates. Dates must be "YYYYMMDD" and are not checked.

        Served by a league-agnostic host; league cookies are never sent there.
        """
        route = nfl_games_route(start_date, end_date)
        payload = await self.http.get_json_value(
            route, RequestConfig(base_url=self._games_base_url)
        )
        events = _records(payload.get("events")) if isinstance(payload, dict) else []
        return self._build_all(self.builders.nfl_game, events, None)

    # -----------------------------
    # League
    # -----------------------------

    async def get_league_info(self, *, season_id: int) -> Any:
        assert_modern(season_id, "get_league_info")
        endpoint = self._endpoints[Era.MODERN]

        route = build_route(
            endpoint.league_base(self._league_id, season_id), f"?{views('mSettings')}"
        )
        data = await self._get_league_data(endpoint, route)

        merged = merge_league_status(_section(data, "settings"), _section(data, "status"))
        return self.builders.league.build_from_server(merged, self._context(season_id))
