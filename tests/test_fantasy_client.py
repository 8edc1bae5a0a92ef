from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest

from espn_ffl.client.base.client import AsyncHttpClient
from espn_ffl.client.base.errors import TransportError, UnsupportedEraError
from espn_ffl.client.fantasy import EntityBuilders, FantasyClient
from espn_ffl.core.config import Settings
from espn_ffl.models import BuildContext, DraftPlayer, League, Team

LEAGUE_ID = 336358


class RecordingBuilder:
    def __init__(self) -> None:
        self.calls: list[tuple[dict[str, Any], BuildContext | None]] = []

    def build_from_server(self, raw: dict[str, Any], context: BuildContext | None = None) -> Any:
        self.calls.append((raw, context))
        return raw


def _make_client(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    builders: EntityBuilders | None = None,
    espn_s2: str | None = None,
    swid: str | None = None,
) -> FantasyClient:
    cfg = Settings(_env_file=None)
    http = AsyncHttpClient(base_url=cfg.modern_base_url, transport=httpx.MockTransport(handler))
    return FantasyClient(
        LEAGUE_ID, espn_s2=espn_s2, swid=swid, http=http, builders=builders, config=cfg
    )


def _recording_handler(
    payload: Any, seen: list[httpx.Request]
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=payload)

    return handler


# -----------------------------
# Era validation
# -----------------------------

MODERN_ONLY_CALLS = [
    lambda c: c.get_boxscore_for_week(season_id=2017, matchup_period_id=1, scoring_period_id=1),
    lambda c: c.get_draft_info(season_id=2017),
    lambda c: c.get_free_agents(season_id=2017, scoring_period_id=1),
    lambda c: c.get_teams_at_week(season_id=2017, scoring_period_id=1),
    lambda c: c.get_league_info(season_id=2017),
]


@pytest.mark.parametrize("call", MODERN_ONLY_CALLS)
def test_modern_operations_reject_historical_seasons_before_any_request(call) -> None:
    seen: list[httpx.Request] = []
    client = _make_client(_recording_handler({}, seen))

    with pytest.raises(UnsupportedEraError):
        asyncio.run(call(client))

    assert seen == []


@pytest.mark.parametrize(
    ("call", "modern_name"),
    [
        (
            lambda c: c.get_historical_scoreboard_for_week(
                season_id=2018, matchup_period_id=1, scoring_period_id=1
            ),
            "get_boxscore_for_week",
        ),
        (
            lambda c: c.get_historical_teams_at_week(season_id=2021, scoring_period_id=1),
            "get_teams_at_week",
        ),
    ],
)
def test_historical_operations_reject_modern_seasons(call, modern_name: str) -> None:
    seen: list[httpx.Request] = []
    client = _make_client(_recording_handler([], seen))

    with pytest.raises(UnsupportedEraError) as exc:
        asyncio.run(call(client))

    assert modern_name in str(exc.value)
    assert seen == []


# -----------------------------
# Boxscores
# -----------------------------

SCHEDULE = [
    {"id": 1, "matchupPeriodId": 2, "home": {"teamId": 1}, "away": {"teamId": 2}},
    {"id": 2, "matchupPeriodId": 3, "home": {"teamId": 1}, "away": {"teamId": 3}},
    {"id": 3, "matchupPeriodId": 3, "home": {"teamId": 2}, "away": {"teamId": 4}},
    {"id": 4, "matchupPeriodId": 4, "home": {"teamId": 3}, "away": {"teamId": 1}},
    {"id": 5, "matchupPeriodId": 5, "home": {"teamId": 4}, "away": {"teamId": 2}},
]


def test_boxscores_filter_schedule_by_matchup_period() -> None:
    seen: list[httpx.Request] = []
    builder = RecordingBuilder()
    client = _make_client(
        _recording_handler({"schedule": SCHEDULE}, seen),
        builders=EntityBuilders(boxscore=builder),
    )

    result = asyncio.run(
        client.get_boxscore_for_week(season_id=2021, matchup_period_id=3, scoring_period_id=3)
    )

    assert [r["id"] for r in result] == [2, 3]
    expected_context = BuildContext(league_id=LEAGUE_ID, season_id=2021, scoring_period_id=3)
    assert [ctx for _, ctx in builder.calls] == [expected_context, expected_context]

    request = seen[0]
    assert request.url.path.endswith(f"/ffl/seasons/2021/segments/0/leagues/{LEAGUE_ID}")
    assert request.url.params.get_list("view") == ["mMatchup", "mMatchupScore"]
    assert request.url.params["scoringPeriodId"] == "3"


def test_historical_scoreboard_reads_array_envelope() -> None:
    seen: list[httpx.Request] = []
    builder = RecordingBuilder()
    client = _make_client(
        _recording_handler([{"schedule": SCHEDULE}], seen),
        builders=EntityBuilders(boxscore=builder),
    )

    result = asyncio.run(
        client.get_historical_scoreboard_for_week(
            season_id=2016, matchup_period_id=3, scoring_period_id=3
        )
    )

    assert [r["id"] for r in result] == [2, 3]
    request = seen[0]
    assert request.url.path.endswith(f"/ffl/leagueHistory/{LEAGUE_ID}")
    assert request.url.params["seasonId"] == "2016"
    assert "mScoreboard" in request.url.params.get_list("view")


def test_boxscores_missing_schedule_is_empty() -> None:
    client = _make_client(_recording_handler({}, []))

    result = asyncio.run(
        client.get_boxscore_for_week(season_id=2021, matchup_period_id=3, scoring_period_id=3)
    )

    assert result == []


def test_boxscores_build_default_entities() -> None:
    client = _make_client(_recording_handler({"schedule": SCHEDULE}, []))

    result = asyncio.run(
        client.get_boxscore_for_week(season_id=2021, matchup_period_id=3, scoring_period_id=3)
    )

    assert [b.id for b in result] == [2, 3]
    assert result[0].home.team_id == 1
    assert result[0].away.team_id == 3
    assert result[0].league_id == LEAGUE_ID


# -----------------------------
# Draft
# -----------------------------

PICKS = [
    {"id": 1, "overallPickNumber": 1, "playerId": 3139477, "teamId": 4, "roundId": 1},
    {"id": 2, "overallPickNumber": 2, "playerId": 4241389, "teamId": 7, "roundId": 1},
]


def _draft_handler(players: Any, seen: list[httpx.Request], *, player_status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if "kona_player_info" in request.url.params.get_list("view"):
            return httpx.Response(player_status, json={"players": players})
        return httpx.Response(200, json={"draftDetail": {"picks": PICKS}})

    return handler


def test_draft_info_joins_player_info() -> None:
    seen: list[httpx.Request] = []
    players = [
        {"player": {"id": 4241389, "fullName": "CeeDee Lamb", "proTeamId": 6}},
        {"player": {"id": 3139477, "fullName": "Patrick Mahomes", "proTeamId": 12}},
    ]
    client = _make_client(_draft_handler(players, seen))

    result = asyncio.run(client.get_draft_info(season_id=2023))

    assert all(isinstance(p, DraftPlayer) for p in result)
    assert [p.full_name for p in result] == ["Patrick Mahomes", "CeeDee Lamb"]
    assert [p.team_id for p in result] == [4, 7]
    assert result[0].pro_team_id == 12
    assert result[0].scoring_period_id == 0

    player_request = next(
        r for r in seen if "kona_player_info" in r.url.params.get_list("view")
    )
    draft_request = next(r for r in seen if "mDraftDetail" in r.url.params.get_list("view"))
    assert json.loads(player_request.headers["x-fantasy-filter"])["players"]["limit"] == 3000
    assert "x-fantasy-filter" not in draft_request.headers


def test_draft_info_without_player_info_keeps_pick_fields() -> None:
    builder = RecordingBuilder()
    client = _make_client(
        _draft_handler([], []), builders=EntityBuilders(draft_player=builder)
    )

    result = asyncio.run(client.get_draft_info(season_id=2023, scoring_period_id=1))

    assert result == PICKS
    assert builder.calls[0][1] == BuildContext(
        league_id=LEAGUE_ID, season_id=2023, scoring_period_id=1
    )


def test_draft_info_fails_when_either_request_fails() -> None:
    client = _make_client(_draft_handler([], [], player_status=500))

    with pytest.raises(TransportError) as exc:
        asyncio.run(client.get_draft_info(season_id=2023))

    assert exc.value.status_code == 500


# -----------------------------
# Free agents
# -----------------------------


def test_free_agents_send_status_filter_header() -> None:
    seen: list[httpx.Request] = []
    players = [
        {
            "id": 15847,
            "status": "FREEAGENT",
            "player": {
                "id": 15847,
                "fullName": "Travis Kelce",
                "ownership": {"percentOwned": 99.1},
            },
        },
        {"id": 2, "status": "WAIVERS", "player": {"id": 2, "fullName": "Somebody"}},
    ]
    client = _make_client(_recording_handler({"players": players}, seen))

    result = asyncio.run(client.get_free_agents(season_id=2022, scoring_period_id=5))

    assert [p.full_name for p in result] == ["Travis Kelce", "Somebody"]
    assert result[0].percent_owned == 99.1
    assert result[1].status == "WAIVERS"

    fantasy_filter = json.loads(seen[0].headers["x-fantasy-filter"])
    assert fantasy_filter["players"]["filterStatus"]["value"] == ["FREEAGENT", "WAIVERS"]
    assert fantasy_filter["players"]["limit"] == 2000
    assert fantasy_filter["players"]["sortPercOwned"] == {"sortAsc": False, "sortPriority": 1}


# -----------------------------
# Teams
# -----------------------------

TEAMS_PAYLOAD = {
    "teams": [
        {"id": 1, "abbrev": "ONE", "primaryOwner": "{A}", "record": {"overall": {"wins": 3}}},
        {"id": 2, "abbrev": "TWO", "primaryOwner": "{MISSING}"},
    ],
    "members": [{"id": "{A}", "displayName": "alice", "firstName": "Alice"}],
}


def test_teams_at_week_join_owners() -> None:
    seen: list[httpx.Request] = []
    client = _make_client(_recording_handler(TEAMS_PAYLOAD, seen))

    result = asyncio.run(client.get_teams_at_week(season_id=2020, scoring_period_id=1))

    assert all(isinstance(t, Team) for t in result)
    assert result[0].id == 1
    assert result[0].owner is not None
    assert result[0].owner.display_name == "alice"
    assert result[0].wins == 3
    assert result[1].owner is None
    assert seen[0].url.params.get_list("view") == ["mRoster", "mTeam"]


def test_modern_and_historical_envelopes_yield_identical_records() -> None:
    modern_builder = RecordingBuilder()
    historical_builder = RecordingBuilder()

    modern = _make_client(
        _recording_handler(TEAMS_PAYLOAD, []), builders=EntityBuilders(team=modern_builder)
    )
    historical = _make_client(
        _recording_handler([TEAMS_PAYLOAD], []),
        builders=EntityBuilders(team=historical_builder),
    )

    modern_records = asyncio.run(modern.get_teams_at_week(season_id=2018, scoring_period_id=2))
    historical_records = asyncio.run(
        historical.get_historical_teams_at_week(season_id=2017, scoring_period_id=2)
    )

    assert modern_records == historical_records
    assert modern_records[0]["owner"]["displayName"] == "alice"


# -----------------------------
# NFL games / league
# -----------------------------


def test_nfl_games_use_games_host_without_cookies() -> None:
    seen: list[httpx.Request] = []
    events = [
        {
            "id": "401547353",
            "date": "2023-09-08T00:20Z",
            "competitors": [
                {"homeAway": "home", "id": "12", "abbreviation": "KC", "score": "20"},
                {"homeAway": "away", "id": "8", "abbreviation": "DET", "score": "21"},
            ],
        }
    ]
    client = _make_client(
        _recording_handler({"events": events}, seen), espn_s2="s2", swid="{SWID}"
    )

    result = asyncio.run(
        client.get_nfl_games_for_period(start_date="20230907", end_date="20230912")
    )

    assert [g.id for g in result] == ["401547353"]
    assert result[0].home.abbreviation == "KC"
    assert result[0].away.score == 21.0
    assert seen[0].url.host == "site.api.espn.com"
    assert seen[0].url.params["dates"] == "20230907-20230912"
    assert "Cookie" not in seen[0].headers


def test_league_info_merges_settings_and_status() -> None:
    payload = {
        "settings": {"name": "Dynasty", "size": 12, "draftSettings": {"type": "SNAKE"}},
        "status": {"currentMatchupPeriod": 4, "latestScoringPeriod": 5},
    }
    client = _make_client(_recording_handler(payload, []))

    league = asyncio.run(client.get_league_info(season_id=2024))

    assert isinstance(league, League)
    assert league.name == "Dynasty"
    assert league.size == 12
    assert league.current_matchup_period_id == 4
    assert league.current_scoring_period_id == 5
    assert league.draft_type == "SNAKE"
    assert league.league_id == LEAGUE_ID
    assert league.season_id == 2024


# -----------------------------
# Credentials / transport errors
# -----------------------------


def test_credentials_are_sent_as_cookie() -> None:
    seen: list[httpx.Request] = []
    client = _make_client(
        _recording_handler({"schedule": []}, seen), espn_s2="s2value", swid="{SWID}"
    )

    asyncio.run(
        client.get_boxscore_for_week(season_id=2021, matchup_period_id=1, scoring_period_id=1)
    )

    assert seen[0].headers["Cookie"] == "espn_s2=s2value; SWID={SWID};"


def test_set_cookies_requires_both_values() -> None:
    client = _make_client(_recording_handler({}, []))
    assert client.has_credentials is False

    client.set_cookies(espn_s2="s2value", swid=None)
    assert client.has_credentials is False

    client.set_cookies(espn_s2="s2value", swid="{SWID}")
    assert client.has_credentials is True

    # A partial update keeps the existing pair.
    client.set_cookies(espn_s2="", swid="{OTHER}")
    assert client.has_credentials is True


def test_transport_errors_propagate_unmodified() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="league not found")

    client = _make_client(handler)

    with pytest.raises(TransportError) as exc:
        asyncio.run(client.get_teams_at_week(season_id=2022, scoring_period_id=1))

    assert exc.value.status_code == 404
    assert exc.value.body == "league not found"
