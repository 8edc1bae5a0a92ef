from __future__ import annotations

import logging
from enum import Enum

from espn_ffl.client.base.errors import UnsupportedEraError

logger = logging.getLogger(__name__)

# First season served by the per-season API; earlier seasons only live in league history.
MODERN_CUTOFF_SEASON = 2018

_MODERN_HINT = "(ESPN only serves earlier seasons through the league history API)."
_HISTORICAL_HINT = "(ESPN serves these seasons through the per-season API)."


class Era(str, Enum):
    MODERN = "modern"
    HISTORICAL = "historical"


def era_for_season(season_id: int) -> Era:
    return Era.MODERN if season_id >= MODERN_CUTOFF_SEASON else Era.HISTORICAL


def assert_modern(season_id: int, operation: str, alternate: str | None = None) -> None:
    if era_for_season(season_id) is Era.MODERN:
        return

    message = (
        f"Cannot call {operation} with a season ID prior to {MODERN_CUTOFF_SEASON} {_MODERN_HINT}"
    )
    if alternate:
        message += f" Call FantasyClient.{alternate} for historical data instead."
    logger.debug("Rejected %s for season_id=%s (historical era)", operation, season_id)
    raise UnsupportedEraError(
        message, season_id=season_id, operation=operation, alternate=alternate
    )


def assert_historical(season_id: int, operation: str, alternate: str) -> None:
    # Every historical operation has a modern counterpart, so `alternate` is required.
    if era_for_season(season_id) is Era.HISTORICAL:
        return

    message = (
        f"Cannot call {operation} with a season ID after {MODERN_CUTOFF_SEASON - 1} "
        f"{_HISTORICAL_HINT}"
        f" Call FantasyClient.{alternate} for new data instead."
    )
    logger.debug("Rejected %s for season_id=%s (modern era)", operation, season_id)
    raise UnsupportedEraError(
        message, season_id=season_id, operation=operation, alternate=alternate
    )
