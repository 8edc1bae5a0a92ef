from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping

COOKIE_HEADER = "Cookie"


@dataclass(frozen=True)
class Credentials:
    """The `espn_s2` / `SWID` cookie pair used to read private leagues."""

    espn_s2: str = field(repr=False)
    swid: str = field(repr=False)

    @classmethod
    def from_pair(cls, espn_s2: str | None, swid: str | None) -> Credentials | None:
        # Partial pairs are treated as no credentials at all.
        if espn_s2 and swid:
            return cls(espn_s2=espn_s2, swid=swid)
        return None

    def cookie_header(self) -> str:
        return f"espn_s2={self.espn_s2}; SWID={self.swid};"


@dataclass(frozen=True)
class RequestConfig:
    """
    Per-request settings handed to the transport.

    - base_url: overrides the transport's default host (history / games hosts).
    - headers: extra request headers (e.g. `x-fantasy-filter`).
    - with_credentials: the transport only sends the `Cookie` header when set.
    """

    base_url: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    with_credentials: bool = False


def build_request_config(
    credentials: Credentials | None,
    overrides: RequestConfig | None = None,
) -> RequestConfig | None:
    """
    Merge session credentials into `overrides`.

    Without credentials `overrides` is returned as-is (including `None`).
    With credentials a new config is returned; the input is never mutated.
    Override headers are kept next to the auth cookie.
    """
    if credentials is None:
        return overrides

    base = overrides if overrides is not None else RequestConfig()
    headers = {**base.headers, COOKIE_HEADER: credentials.cookie_header()}
    return replace(base, headers=headers, with_credentials=True)
