from __future__ import annotations

import io
import json
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict


class RequestStatus(BaseModel):
    code: int = 0
    description: str | None = None


class StreamResult(BaseModel):
    """Successful exchange; ``stream`` holds the full response body."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: Literal[True] = True
    status: RequestStatus
    stream: io.BytesIO


class ApiError(BaseModel):
    """Non-2xx exchange. ``error``/``message`` come from a JSON body when present."""

    ok: Literal[False] = False
    status: RequestStatus
    body: str | None = None
    error: str | None = None
    message: str | None = None

    @classmethod
    def from_body(cls, status: RequestStatus, body: str | None) -> "ApiError":
        error = message = None
        if body:
            try:
                data = json.loads(body)
            except ValueError:
                data = None
            if isinstance(data, dict):
                error = _as_text(data.get("error"))
                message = _as_text(data.get("message"))
        return cls(status=status, body=body, error=error, message=message)


RequestOutcome = Union[StreamResult, ApiError]


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
