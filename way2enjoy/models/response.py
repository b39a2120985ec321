from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class ResponseInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    size: int = 0
    type: str | None = None


class ResponseOutput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    size: int = 0
    type: str | None = None
    width: int = 0
    height: int = 0
    ratio: Decimal = Decimal(0)
    url: str | None = None  # time-limited download link


class CompressionResult(BaseModel):
    """Metadata returned by the service for an uploaded file."""

    model_config = ConfigDict(extra="ignore")

    input: ResponseInput | None = None
    output: ResponseOutput | None = None
    error: str | None = None
    message: str | None = None

    @property
    def result_url(self) -> str | None:
        if self.output is None or not self.output.url:
            return None
        return self.output.url

    @property
    def is_error(self) -> bool:
        return self.error is not None or self.result_url is None
