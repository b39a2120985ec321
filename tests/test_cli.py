"""Tests for the command-line entry point."""
from __future__ import annotations

import json

import httpx
import pytest

from way2enjoy import cli
from way2enjoy.exceptions import ConfigurationError

from .conftest import RESIZED_BYTES


@pytest.fixture
def wired_cli(monkeypatch, client):
    monkeypatch.setattr(cli, "get_client", lambda: client)
    return client


def test_shrink_and_resize(wired_cli, server, input_file, tmp_path, capsys):
    resized = tmp_path / "thumb.png"

    code = cli.main(
        [str(input_file), "--resize", "cover", "--width", "100", "--height", "50",
         "--resized-output", str(resized)]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert '"ratio"' in out
    assert "cover: 200 OK" in out
    assert resized.read_bytes() == RESIZED_BYTES
    assert server.json_bodies() == [{"resize": {"method": "cover", "width": 100, "height": 50}}]


def test_shrink_error_exit_code(wired_cli, server, input_file, capsys):
    server.upload_response = lambda: httpx.Response(401, json={"error": "Unauthorized"})

    code = cli.main([str(input_file), "--resize", "fit", "--width", "1", "--height", "1"])

    printed = json.loads(capsys.readouterr().out)
    assert code == 1
    assert printed["error"] == "Unauthorized"
    assert len(server.requests) == 1


def test_transform_error_exit_code(wired_cli, server, input_file, capsys):
    server.transform_response = lambda: httpx.Response(429)

    code = cli.main([str(input_file), "--resize", "scale", "--width", "10"])

    assert code == 1
    assert "scale: 429 Too Many Requests" in capsys.readouterr().out


def test_api_key_argument_builds_client(monkeypatch, make_client, input_file):
    seen = {}

    def fake_client(api_key, **kwargs):
        seen["api_key"] = api_key
        return make_client(api_key)

    monkeypatch.setattr(cli, "Way2enjoyClient", fake_client)

    assert cli.main([str(input_file), "--api-key", "from-cli"]) == 0
    assert seen["api_key"] == "from-cli"


STORE_ARGS = [
    "--store-access-key-id", "AKIA123",
    "--store-secret-access-key", "s3cr3t",
    "--store-region", "eu-west-1",
    "--store-path", "bucket/thumb.png",
]


def test_store_goes_with_resize(wired_cli, server, input_file):
    """Test the store target is attached to the transform, not the upload."""
    code = cli.main([str(input_file), "--resize", "fit", "--width", "10", "--height", "20", *STORE_ARGS])

    assert code == 0
    assert server.json_bodies() == [
        {
            "resize": {"method": "fit", "width": 10, "height": 20},
            "store": {
                "service": "s3",
                "aws_access_key_id": "AKIA123",
                "aws_secret_access_key": "s3cr3t",
                "region": "eu-west-1",
                "path": "bucket/thumb.png",
            },
        }
    ]


def test_store_without_resize_goes_with_shrink(wired_cli, server, input_file):
    assert cli.main([str(input_file), *STORE_ARGS]) == 0
    assert list(server.json_bodies()[0]) == ["store"]


def test_partial_store_arguments_rejected(wired_cli, server, input_file):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(input_file), "--store-region", "eu-west-1"])

    assert exc_info.value.code == 2
    assert server.requests == []


def test_dimensions_without_resize_rejected(wired_cli, server, input_file):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(input_file), "--width", "100"])

    assert exc_info.value.code == 2
    assert server.requests == []


def test_missing_api_key_reports_error(monkeypatch, input_file, capsys):
    """Test a configuration error ends with a message and exit code 1."""

    def no_client():
        raise ConfigurationError("WAY2ENJOY_API_KEY is not set")

    monkeypatch.setattr(cli, "get_client", no_client)

    assert cli.main([str(input_file)]) == 1
    assert "WAY2ENJOY_API_KEY is not set" in capsys.readouterr().err


def test_transport_failure_reports_error(wired_cli, server, input_file, capsys):
    def refuse():
        raise httpx.ConnectError("connection refused")

    server.upload_response = refuse

    assert cli.main([str(input_file)]) == 1
    assert "connection refused" in capsys.readouterr().err
