from __future__ import annotations

import json
from typing import Any

# Line breaks to httpx and other Unicode-aware splitters, but legal raw in JSON
_LINE_SEPARATORS = {
    "\u0085": "\\u0085",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def dumps_compact(value: Any) -> str:
    """Serialize a value to single-line JSON without insignificant whitespace.

    Non-ASCII text is kept as-is except for the Unicode line separators,
    which are escaped so the result is one line to any line splitter.
    NaN and infinities raise ``ValueError`` as they have no JSON form.
    """
    text = json.dumps(value, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    for char, escaped in _LINE_SEPARATORS.items():
        if char in text:
            text = text.replace(char, escaped)
    return text


def error_message(exc: BaseException, fallback: str) -> str:
    """Render an exception as the text sent to the client."""
    message = str(exc)
    return message if message else fallback
