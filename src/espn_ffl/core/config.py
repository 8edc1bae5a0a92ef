from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from espn_ffl.client.base.errors import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # league / auth
    espn_league_id: int | None = Field(default=None, validation_alias="ESPN_LEAGUE_ID")
    espn_s2: str | None = Field(default=None, repr=False, validation_alias="ESPN_S2")
    espn_swid: str | None = Field(default=None, repr=False, validation_alias="ESPN_SWID")

    # hosts
    modern_base_url: str = "https://lm-api-reads.fantasy.espn.com/apis/v3/games/ffl/seasons/"
    history_base_url: str = (
        "https://lm-api-reads.fantasy.espn.com/apis/v3/games/ffl/leagueHistory/"
    )
    games_base_url: str = "https://site.api.espn.com/"

    # http
    http_timeout_s: float = 30.0
    http_connect_timeout_s: float = 10.0

    log_level: str = "WARNING"

    # -----------------------------
    # Required-key helpers
    # -----------------------------

    def require_league_id(self) -> int:
        if self.espn_league_id is None:
            raise ConfigurationError(
                "ESPN_LEAGUE_ID is not set. Set it in the environment or .env file."
            )
        return self.espn_league_id


settings = Settings()
