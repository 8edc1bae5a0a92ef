from __future__ import annotations

from typing import Any

Json = dict[str, Any]
JsonValue = dict[str, Any] | list[Any]
