"""Shared fixtures: a fake Way2enjoy server behind httpx.MockTransport."""
from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from way2enjoy.services import Way2enjoyClient

API_URL = "https://api.test/compress"
RESULT_URL = "https://api.test/output/abc123.png"
SHRUNK_BYTES = b"\x89PNG\r\n\x1a\nshrunk-image-bytes"
RESIZED_BYTES = b"\x89PNG\r\n\x1a\nresized-image-bytes" * 200


def shrink_body(url: str | None = RESULT_URL) -> dict:
    output = {"size": 600, "type": "image/png", "width": 320, "height": 200, "ratio": 0.5}
    if url is not None:
        output["url"] = url
    return {"input": {"size": 1200, "type": "image/png"}, "output": output}


class FakeServer:
    """Records every request and answers with configurable responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.upload_response: Callable[[], httpx.Response] = lambda: httpx.Response(
            201, json=shrink_body()
        )
        self.transform_response: Callable[[], httpx.Response] = lambda: httpx.Response(
            200, content=RESIZED_BYTES
        )
        self.download_response: Callable[[], httpx.Response] = lambda: httpx.Response(
            200, content=SHRUNK_BYTES
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if str(request.url) == API_URL:
            return self.upload_response()
        if request.method == "GET":
            return self.download_response()
        return self.transform_response()

    def json_bodies(self) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.headers.get("Content-Type") == "application/json"
        ]


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def make_client(server):
    """Factory building clients wired to the fake server."""

    clients = []

    def factory(api_key: str = "secret-key", chunk_size: int = 1024) -> Way2enjoyClient:
        http_client = httpx.Client(transport=httpx.MockTransport(server))
        client = Way2enjoyClient(
            api_key, api_url=API_URL, chunk_size=chunk_size, http_client=http_client
        )
        clients.append(http_client)
        return client

    yield factory
    for http_client in clients:
        http_client.close()


@pytest.fixture
def client(make_client) -> Way2enjoyClient:
    return make_client()


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "photo.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 4)
    return path
