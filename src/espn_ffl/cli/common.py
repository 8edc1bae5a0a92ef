from __future__ import annotations

import asyncio
import dataclasses
import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer

from espn_ffl.client.base.errors import (
    ConfigurationError,
    TransportError,
    UnsupportedEraError,
)
from espn_ffl.client.fantasy import FantasyClient
from espn_ffl.core.config import settings

T = TypeVar("T")

LeagueIdOption = typer.Option(
    None, "--league-id", help="ESPN league id (defaults to ESPN_LEAGUE_ID)."
)
EspnS2Option = typer.Option(
    None, "--espn-s2", help="espn_s2 cookie for private leagues (defaults to ESPN_S2)."
)
SwidOption = typer.Option(
    None, "--swid", help="SWID cookie for private leagues (defaults to ESPN_SWID)."
)


def make_client(
    league_id: int | None, espn_s2: str | None, swid: str | None
) -> FantasyClient:
    """
    Build a client from CLI options, falling back to settings for anything not given.
    """
    resolved_league_id = league_id if league_id is not None else settings.require_league_id()
    return FantasyClient(
        resolved_league_id,
        espn_s2=espn_s2 or settings.espn_s2,
        swid=swid or settings.espn_swid,
    )


def run_query(
    league_id: int | None,
    espn_s2: str | None,
    swid: str | None,
    query: Callable[[FantasyClient], Awaitable[T]],
) -> T:
    """
    Run one async query against a fresh client and close it afterwards.
    Known failures exit non-zero with the error message.
    """

    async def _run() -> T:
        async with make_client(league_id, espn_s2, swid) as client:
            return await query(client)

    try:
        return asyncio.run(_run())
    except UnsupportedEraError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2) from e
    except ConfigurationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2) from e
    except TransportError as e:
        typer.echo(f"Request failed: {e}", err=True)
        raise typer.Exit(code=1) from e


def _to_json(entity: Any) -> Any:
    if dataclasses.is_dataclass(entity) and not isinstance(entity, type):
        return {
            f.name: _to_json(getattr(entity, f.name))
            for f in dataclasses.fields(entity)
            if f.name != "raw"
        }
    if isinstance(entity, list):
        return [_to_json(e) for e in entity]
    return entity


def echo_json(value: Any) -> None:
    typer.echo(json.dumps(_to_json(value), indent=2, default=str))
