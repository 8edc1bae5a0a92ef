from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "WARNING") -> None:
    """Configure root logging for CLI runs. Library code only creates module loggers."""

    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    # httpx logs every request at INFO; keep it quiet unless debugging.
    httpx_level = logging.DEBUG if level in ("DEBUG", logging.DEBUG) else logging.WARNING
    logging.getLogger("httpx").setLevel(httpx_level)
