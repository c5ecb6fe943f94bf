from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
import respx
from click.testing import CliRunner

from conftest import ENDPOINT
from mozscape.cli import cli
from mozscape.core.config import Settings

_CREDENTIALS = ["--access-id", "member-1", "--secret-key", "secret"]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_log_handlers():
    """Keep the CLI from attaching a handler to the runner's captured stderr."""
    with patch("mozscape.cli.configure_logging"):
        yield


def _batch_route(**kwargs) -> respx.Route:
    return respx.post(url__startswith=f"{ENDPOINT}/?").mock(**kwargs)


@respx.mock
def test_prints_one_line_per_url(runner):
    route = _batch_route(
        return_value=httpx.Response(
            200,
            json=[
                {"uu": "a.com/", "upa": 40, "pda": 50.5, "umrp": 4.5, "fmrp": 5.25},
                {"uu": "b.com/"},
            ],
        )
    )

    result = runner.invoke(cli, ["-u", "http://a.com", "-u", "http://b.com", *_CREDENTIALS])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "URL: a.com/, PA: 40, DA: 50.5, MRU: 4.5, MRS: 5.25",
        "URL: b.com/, PA: 0, DA: 0, MRU: 0, MRS: 0",
    ]
    assert route.call_count == 1
    assert route.calls.last.request.url.params["AccessID"] == "member-1"


@respx.mock
def test_custom_column_mask(runner):
    route = _batch_route(return_value=httpx.Response(200, json=[]))
    result = runner.invoke(cli, ["-u", "http://a.com", "--cols", "4", *_CREDENTIALS])
    assert result.exit_code == 0, result.output
    assert route.calls.last.request.url.params["Cols"] == "4"


@respx.mock
def test_lookup_error_exits_1(runner):
    _batch_route(
        return_value=httpx.Response(200, json={"status": "500", "message": "boom"})
    )
    result = runner.invoke(cli, ["-u", "http://a.com", *_CREDENTIALS])
    assert result.exit_code == 1
    assert "Error: Status: 500, Message: boom" in result.output


@respx.mock
def test_quota_error_exits_1(runner):
    _batch_route(
        return_value=httpx.Response(200, json={"status": "429", "message": "slow down"})
    )
    result = runner.invoke(cli, ["-u", "http://a.com", *_CREDENTIALS])
    assert result.exit_code == 1
    assert "Error: Too many requests" in result.output


def test_missing_url_is_usage_error(runner):
    result = runner.invoke(cli, _CREDENTIALS)
    assert result.exit_code == 2


def test_positional_argument_is_usage_error(runner):
    result = runner.invoke(cli, ["-u", "http://a.com", "extra", *_CREDENTIALS])
    assert result.exit_code == 2


def test_missing_credentials_is_usage_error(runner):
    with patch("mozscape.cli.settings", Settings(access_id="", secret_key="")):
        result = runner.invoke(cli, ["-u", "http://a.com"])
    assert result.exit_code == 2
    assert "access ID" in result.output
