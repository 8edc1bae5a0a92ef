from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, TypeVar

Json = dict[str, Any]

T_co = TypeVar("T_co", covariant=True)


@dataclass(frozen=True)
class BuildContext:
    """
    Identifiers a raw record does not carry itself.
    """

    league_id: int | None = None
    season_id: int | None = None
    scoring_period_id: int | None = None
    matchup_period_id: int | None = None


class EntityBuilder(Protocol[T_co]):
    """
    The client depends on this, not on concrete entity classes.

    Builders must accept any record shape the client can produce (fields may be absent).
    """

    def build_from_server(self, raw: Json, context: BuildContext | None = None) -> T_co: ...


def as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def nested(raw: Mapping[str, Any] | None, *path: str) -> Any:
    cur: Any = raw
    for key in path:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(key)
    return cur
