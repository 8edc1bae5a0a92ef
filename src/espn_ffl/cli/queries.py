from __future__ import annotations

import typer

from espn_ffl.cli.common import EspnS2Option, LeagueIdOption, SwidOption, echo_json, run_query
from espn_ffl.core.config import settings

app = typer.Typer(help="Query a fantasy football league.")


@app.command("boxscores")
def boxscores_cmd(
    season_id: int = typer.Option(..., "--season-id", help="Season year (2018 or later)."),
    matchup_period_id: int = typer.Option(..., "--matchup-period-id"),
    scoring_period_id: int = typer.Option(..., "--scoring-period-id"),
    league_id: int | None = LeagueIdOption,
    espn_s2: str | None = EspnS2Option,
    swid: str | None = SwidOption,
) -> None:
    """Boxscores for one week."""

    result = run_query(
        league_id,
        espn_s2,
        swid,
        lambda c: c.get_boxscore_for_week(
            season_id=season_id,
            matchup_period_id=matchup_period_id,
            scoring_period_id=scoring_period_id,
        ),
    )
    echo_json(result)


@app.command("historical-scoreboard")
def historical_scoreboard_cmd(
    season_id: int = typer.Option(..., "--season-id", help="Season year (before 2018)."),
    matchup_period_id: int = typer.Option(..., "--matchup-period-id"),
    scoring_period_id: int = typer.Option(..., "--scoring-period-id"),
    league_id: int | None = LeagueIdOption,
    espn_s2: str | None = EspnS2Option,
    swid: str | None = SwidOption,
) -> None:
    """Scoreboard (no rosters) for one week of a pre-2018 season."""

    result = run_query(
        league_id,
        espn_s2,
        swid,
        lambda c: c.get_historical_scoreboard_for_week(
            season_id=season_id,
            matchup_period_id=matchup_period_id,
            scoring_period_id=scoring_period_id,
        ),
    )
    echo_json(result)


@app.command("draft")
def draft_cmd(
    season_id: int = typer.Option(..., "--season-id"),
    scoring_period_id: int = typer.Option(
        0, "--scoring-period-id", help="Period to pull player info from (0 = preseason)."
    ),
    league_id: int | None = LeagueIdOption,
    espn_s2: str | None = EspnS2Option,
    swid: str | None = SwidOption,
) -> None:
    """Draft picks in draft order."""

    result = run_query(
        league_id,
        espn_s2,
        swid,
        lambda c: c.get_draft_info(season_id=season_id, scoring_period_id=scoring_period_id),
    )
    echo_json(result)


@app.command("free-agents")
def free_agents_cmd(
    season_id: int = typer.Option(..., "--season-id"),
    scoring_period_id: int = typer.Option(..., "--scoring-period-id"),
    league_id: int | None = LeagueIdOption,
    espn_s2: str | None = EspnS2Option,
    swid: str | None = SwidOption,
) -> None:
    """Free agents and waiver players, most owned first."""

    result = run_query(
        league_id,
        espn_s2,
        swid,
        lambda c: c.get_free_agents(season_id=season_id, scoring_period_id=scoring_period_id),
    )
    echo_json(result)


@app.command("teams")
def teams_cmd(
    season_id: int = typer.Option(..., "--season-id"),
    scoring_period_id: int = typer.Option(..., "--scoring-period-id"),
    league_id: int | None = LeagueIdOption,
    espn_s2: str | None = EspnS2Option,
    swid: str | None = SwidOption,
) -> None:
    """Teams (with owners and rosters) at a scoring period."""

    result = run_query(
        league_id,
        espn_s2,
        swid,
        lambda c: c.get_teams_at_week(season_id=season_id, scoring_period_id=scoring_period_id),
    )
    echo_json(result)


@app.command("historical-teams")
def historical_teams_cmd(
    season_id: int = typer.Option(..., "--season-id", help="Season year (before 2018)."),
    scoring_period_id: int = typer.Option(..., "--scoring-period-id"),
    league_id: int | None = LeagueIdOption,
    espn_s2: str | None = EspnS2Option,
    swid: str | None = SwidOption,
) -> None:
    """Teams of a pre-2018 season."""

    result = run_query(
        league_id,
        espn_s2,
        swid,
        lambda c: c.get_historical_teams_at_week(
            season_id=season_id, scoring_period_id=scoring_period_id
        ),
    )
    echo_json(result)


@app.command("nfl-games")
def nfl_games_cmd(
    start_date: str = typer.Option(..., "--start-date", help="YYYYMMDD"),
    end_date: str = typer.Option(..., "--end-date", help="YYYYMMDD"),
    league_id: int | None = LeagueIdOption,
) -> None:
    """NFL games between two dates."""

    # League-agnostic host; any league id works.
    if league_id is None:
        league_id = settings.espn_league_id or 0

    result = run_query(
        league_id,
        None,
        None,
        lambda c: c.get_nfl_games_for_period(start_date=start_date, end_date=end_date),
    )
    echo_json(result)


@app.command("league")
def league_cmd(
    season_id: int = typer.Option(..., "--season-id"),
    league_id: int | None = LeagueIdOption,
    espn_s2: str | None = EspnS2Option,
    swid: str | None = SwidOption,
) -> None:
    """League settings and current status."""

    result = run_query(
        league_id, espn_s2, swid, lambda c: c.get_league_info(season_id=season_id)
    )
    echo_json(result)
