from __future__ import annotations

import typer

from espn_ffl.cli.queries import app as queries_app
from espn_ffl.core.config import settings
from espn_ffl.core.logging import configure_logging

app = typer.Typer(no_args_is_help=True)
app.add_typer(queries_app, name="query")


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (defaults to LOG_LEVEL or WARNING)."
    ),
) -> None:
    configure_logging(log_level or settings.log_level)
