"""
Contactbook API — JSON Response Encoding
==========================================

What:  The JSON response class used by every JSON endpoint and error handler.
How:   Subclasses Starlette's JSONResponse and overrides `render()`:
       - compact separators, UTF-8 output
       - `<`, `>`, `&`, U+2028 and U+2029 escaped as \\uXXXX
       - the document is terminated by a single newline
       NaN/Infinity are refused (they are not JSON).

Rendering happens when the response object is constructed, so an encoding
failure surfaces before any status line or body byte has been sent.
"""

import json
from typing import Any, Union

from pydantic import BaseModel
from starlette.responses import JSONResponse

from contactbook.exceptions import ResponseEncodingError

# Characters that are safe in JSON but not when a body is embedded in HTML.
# They only ever occur inside string literals, so a textual replace is exact.
_HTML_SAFE_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


class JSONLineResponse(JSONResponse):
    """Newline-terminated, HTML-safe JSON response."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        text = json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        )
        for char, escaped in _HTML_SAFE_ESCAPES:
            text = text.replace(char, escaped)
        return (text + "\n").encode("utf-8")


def encode_json(
    payload: Union[BaseModel, dict],
    status_code: int = 200,
) -> JSONLineResponse:
    """
    Serialize a response model (or plain dict) into a JSONLineResponse.

    Raises:
        ResponseEncodingError: the payload could not be serialized. The
            caller has not written anything yet, so the error handler is free
            to answer 500.
    """
    try:
        content = payload.model_dump(mode="json") if isinstance(payload, BaseModel) else payload
        return JSONLineResponse(content, status_code=status_code)
    except (TypeError, ValueError) as exc:
        raise ResponseEncodingError(
            str(exc),
            context={"payload_type": type(payload).__name__},
        ) from exc
