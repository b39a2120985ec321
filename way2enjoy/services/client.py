"""Way2enjoy compression API wrapper.

Uploads a file for lossless shrinking, then optionally resizes the result
server-side (cover / fit / scale) or asks the service to store it on S3.
All processing happens remotely; this module only speaks HTTP.

API-level failures are not raised. Every request returns either a
:class:`StreamResult` or an :class:`ApiError`, and the status of the most
recent exchange is also kept on the client for quick inspection.
"""
from __future__ import annotations

import base64
import io
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import httpx
from pydantic import ValidationError

from way2enjoy.config import DEFAULT_API_URL, get_settings
from way2enjoy.exceptions import ConfigurationError, MissingResultUrlError, TransportFailureError
from way2enjoy.models import (
    ApiError,
    CompressionResult,
    RequestOutcome,
    RequestStatus,
    ResizeMethod,
    StoreTarget,
    StreamResult,
    TransformOptions,
)

from .streams import DEFAULT_CHUNK_SIZE, drain_to_bytes, drain_to_file, drain_to_string

logger = logging.getLogger(__name__)


def encode_api_key(api_key: str) -> str:
    """Return the Basic-Auth token for *api_key* (the key alone, no ``user:`` part)."""

    return base64.b64encode(api_key.encode("utf-8")).decode("ascii")


class Way2enjoyClient:
    """Synchronous client for the Way2enjoy compression API.

    Not safe for concurrent use: ``last_status`` is overwritten by every call.
    The returned outcome objects carry the same information per call.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._base64_api_key = encode_api_key(api_key)
        self._api_url = api_url
        self._chunk_size = chunk_size
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._last_status: RequestStatus | None = None

    # ------------------------------------------------------------------
    # Status of the last exchange
    # ------------------------------------------------------------------

    @property
    def last_status(self) -> RequestStatus | None:
        return self._last_status

    @property
    def last_http_status_code(self) -> int:
        return self._last_status.code if self._last_status else 0

    @property
    def last_http_status_description(self) -> str | None:
        return self._last_status.description if self._last_status else None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def shrink(
        self,
        input_path: str | Path,
        output_path: str | Path | None = None,
        store: StoreTarget | None = None,
    ) -> CompressionResult:
        """Upload *input_path* and let the service shrink it, lossless.

        Parameters
        ----------
        input_path : str | Path
            File to upload. Its bytes are sent as the raw request body.
        output_path : str | Path, optional
            Where to save the shrunk file.
        store : StoreTarget, optional
            S3 destination the service should also write the result to. The
            outcome of that request is not merged into the returned result;
            check ``last_status`` or call :meth:`store` directly instead.

        Returns
        -------
        CompressionResult
            Parsed response. Server-reported errors are returned, not raised.
        """

        data = Path(input_path).read_bytes()
        outcome = self._perform_request("POST", self._api_url, payload=data)
        result = self._parse_result(outcome)

        url = result.result_url
        if url is None:
            logger.warning(
                "Shrink of %s returned no result URL (error=%s, message=%s)",
                input_path,
                result.error,
                result.message,
            )
            return result

        if store is not None:
            self._execute_option(result, store=store)

        if output_path is not None:
            download = self._perform_request("GET", url)
            if isinstance(download, StreamResult):
                drain_to_file(download.stream, output_path, self._chunk_size)
            else:
                logger.warning(
                    "Download of %s failed: %s %s",
                    url,
                    download.status.code,
                    download.status.description,
                )

        logger.info(
            "Shrunk %s: %s -> %s bytes",
            input_path,
            result.input.size if result.input else "?",
            result.output.size if result.output else "?",
        )
        return result

    def cover(
        self,
        result: CompressionResult,
        width: int | None = None,
        height: int | None = None,
        output_path: str | Path | None = None,
        store: StoreTarget | None = None,
    ) -> RequestOutcome:
        """Scale proportionally and crop so the result has exactly the given size.

        Both *width* and *height* are required by the service.
        """

        return self._execute_option(result, "cover", width, height, output_path, store)

    def fit(
        self,
        result: CompressionResult,
        width: int | None = None,
        height: int | None = None,
        output_path: str | Path | None = None,
        store: StoreTarget | None = None,
    ) -> RequestOutcome:
        """Scale down proportionally to fit within the given size.

        Both *width* and *height* are required by the service.
        """

        return self._execute_option(result, "fit", width, height, output_path, store)

    def scale(
        self,
        result: CompressionResult,
        width: int | None = None,
        height: int | None = None,
        output_path: str | Path | None = None,
        store: StoreTarget | None = None,
    ) -> RequestOutcome:
        """Scale down proportionally. Give either *width* or *height*, not both."""

        return self._execute_option(result, "scale", width, height, output_path, store)

    def store(self, result: CompressionResult, store: StoreTarget) -> RequestOutcome:
        """Ask the service to persist an already shrunk file to S3."""

        return self._execute_option(result, store=store)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "Way2enjoyClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _execute_option(
        self,
        result: CompressionResult,
        method: ResizeMethod | None = None,
        width: int | None = None,
        height: int | None = None,
        output_path: str | Path | None = None,
        store: StoreTarget | None = None,
    ) -> RequestOutcome:
        url = result.result_url
        if url is None:
            raise MissingResultUrlError("Result has no output URL; shrink must succeed first")

        options = TransformOptions.build(method, width, height, store)
        outcome = self._perform_request("POST", url, options=options)

        if isinstance(outcome, ApiError):
            logger.warning(
                "Transform %s failed: %s %s",
                method or "store",
                outcome.status.code,
                outcome.status.description,
            )
            return outcome

        if output_path is not None:
            drain_to_file(outcome.stream, output_path, self._chunk_size)
        logger.info("Transform %s completed for %s", method or "store", url)
        return outcome

    def _parse_result(self, outcome: RequestOutcome) -> CompressionResult:
        if isinstance(outcome, ApiError):
            return CompressionResult(
                error=outcome.error or str(outcome.status.code),
                message=outcome.message or outcome.status.description,
            )

        text = drain_to_string(outcome.stream, self._chunk_size)
        try:
            return CompressionResult.model_validate_json(text or "")
        except ValidationError as exc:
            logger.warning("Unparseable response body: %s", exc.errors()[0].get("msg"))
            return CompressionResult(error="invalid_response", message=text or None)

    def _perform_request(
        self,
        method: str = "POST",
        url: Optional[str] = None,
        *,
        payload: bytes | None = None,
        options: TransformOptions | None = None,
    ) -> RequestOutcome:
        """Send one request and read its whole body.

        *payload* is sent as the raw body; *options* as a JSON document.
        Only one of the two may be given.
        """

        if payload is not None and options is not None:
            raise ValueError("payload and options are mutually exclusive")

        url = url or self._api_url
        headers = {"Authorization": f"Basic {self._base64_api_key}"}
        content: bytes | None = payload
        if options is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(options.to_payload()).encode("utf-8")

        self._last_status = RequestStatus()
        logger.debug("%s %s", method, url)

        try:
            request = self._client.build_request(method, url, content=content, headers=headers)
            response = self._client.send(request, stream=True)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportFailureError(method, url, str(exc) or type(exc).__name__) from exc

        try:
            status = RequestStatus(
                code=response.status_code,
                description=response.reason_phrase or None,
            )
            body = drain_to_bytes(response.iter_bytes(self._chunk_size))
        except httpx.RequestError as exc:
            raise TransportFailureError(method, url, str(exc) or type(exc).__name__) from exc
        finally:
            response.close()
        self._last_status = status

        if response.is_success:
            return StreamResult(status=status, stream=io.BytesIO(body))

        logger.warning("%s %s returned %s %s", method, url, status.code, status.description)
        text = body.decode("utf-8", errors="replace") if body else None
        return ApiError.from_body(status, text)


# ------------------------------------------------------------------
# Shared instance
# ------------------------------------------------------------------


@lru_cache()
def get_client() -> Way2enjoyClient:
    """Return a client built from settings, created on first use."""

    settings = get_settings()
    if not settings.api_key:
        raise ConfigurationError("WAY2ENJOY_API_KEY is not set")
    return Way2enjoyClient(
        settings.api_key,
        api_url=settings.api_url,
        timeout=settings.timeout,
        chunk_size=settings.chunk_size,
    )
