import json

import httpx
import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from adapters.opensea_api import OpenSeaAPIClient
from core.domain.network import Network

runner = CliRunner()

ORDER = {"order_hash": "0xabc", "side": 1, "maker": "0xmaker", "current_price": "5"}


@pytest.fixture
def install_api(monkeypatch):
    captured: dict = {"requests": []}

    def install(handler):
        def recording_handler(request: httpx.Request) -> httpx.Response:
            captured["requests"].append(request)
            return handler(request)

        def fake_build_api(settings, *, verbose=False):
            captured["settings"] = settings
            return OpenSeaAPIClient(settings, transport=httpx.MockTransport(recording_handler))

        monkeypatch.setattr(cli_main, "build_api", fake_build_api)
        return captured

    return install


def test_orders_exports_json(install_api, tmp_path):
    install_api(lambda request: httpx.Response(200, json={"orders": [ORDER], "count": 12}))
    out = tmp_path / "orders.json"

    result = runner.invoke(cli_main.app, ["orders", "--side", "sell", "--json-out", str(out)])

    assert result.exit_code == 0, result.output
    exported = json.loads(out.read_text(encoding="utf-8"))
    assert exported[0]["order_hash"] == "0xabc"
    assert exported[0]["current_price"] == "5"


def test_orders_fetches_consecutive_pages(install_api):
    captured = install_api(lambda request: httpx.Response(200, json={"orders": [ORDER], "count": 12}))

    result = runner.invoke(cli_main.app, ["--page-size", "5", "orders", "--page", "2", "--pages", "2"])

    assert result.exit_code == 0, result.output
    offsets = [r.url.params["offset"] for r in captured["requests"]]
    assert offsets == ["5", "10"]


def test_global_options_reach_settings(install_api):
    captured = install_api(lambda request: httpx.Response(200, json=[]))

    result = runner.invoke(cli_main.app, ["--network", "rinkeby", "--api-key", "cli-key", "tokens"])

    assert result.exit_code == 0, result.output
    assert captured["settings"].network is Network.RINKEBY
    request = captured["requests"][0]
    assert request.url.host == "rinkeby-api.opensea.io"
    assert request.headers["x-api-key"] == "cli-key"


def test_missing_asset_exits_with_error(install_api):
    install_api(lambda request: httpx.Response(404, json={"detail": "Not found."}))

    result = runner.invoke(cli_main.app, ["asset", "0xcontract", "1"])

    assert result.exit_code == 1
    assert "Asset not found" in result.output


def test_post_order_reports_validation_error(install_api, tmp_path):
    captured = install_api(lambda request: httpx.Response(400, json={"success": False, "message": "bad order"}))
    order_file = tmp_path / "order.json"
    order_file.write_text(json.dumps({"maker": "0xmaker"}), encoding="utf-8")

    result = runner.invoke(cli_main.app, ["post-order", str(order_file), "--retries", "3"])

    assert result.exit_code == 1
    assert "bad order" in result.output
    assert len(captured["requests"]) == 1


def test_invalid_side_is_a_usage_error(install_api):
    install_api(lambda request: httpx.Response(200, json={"orders": [], "count": 0}))

    result = runner.invoke(cli_main.app, ["orders", "--side", "sideways"])

    assert result.exit_code != 0
