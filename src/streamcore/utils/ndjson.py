from __future__ import annotations

from typing import Any

from streamcore.utils.serialization import dumps_compact


def format_ndjson_line(value: Any) -> str:
    return dumps_compact(value) + "\n"


def format_ndjson_error(message: str) -> str:
    return format_ndjson_line({"error": message})
