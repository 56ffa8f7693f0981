# tests/test_cli.py
import httpx
import pytest
from rich.console import Console

from catalog_sdk import cli
from catalog_sdk.client import CatalogClient


@pytest.fixture
def out(monkeypatch):
    console = Console(record=True, width=200)
    monkeypatch.setattr(cli, "console", console)
    return console


@pytest.fixture
def catalog(client):
    return CatalogClient(base_url="http://testserver", http_client=client)


def run(catalog, *argv):
    args = cli.build_parser().parse_args(list(argv))
    return cli.run_command(args, catalog)


def test_create_then_list_renders_table(catalog, out):
    assert run(catalog, "create", "--name", "Widget", "--description", "A widget",
               "--price", "9.99", "--quantity", "10", "--category", "Tools") == 0
    assert run(catalog, "list") == 0
    text = out.export_text()
    assert "Widget" in text
    assert "9.99" in text
    assert "Tools" in text


def test_update_and_delete_commands(catalog, out):
    pid = catalog.create_product("Widget", "A widget", 9.99, 10, "Tools")["id"]
    assert run(catalog, "update", pid, "--price", "7.5") == 0
    assert catalog.get_product(pid)["price"] == 7.5
    assert run(catalog, "delete", pid) == 0
    assert "Deleted product: Widget" in out.export_text()


def test_missing_product_reports_failure(catalog, out):
    assert run(catalog, "get", "nope") == 1
    assert run(catalog, "delete", "nope") == 1
    text = out.export_text()
    assert "No product with id nope" in text
    assert "HTTP 404" in text


def test_search_with_no_matches(catalog, out):
    assert run(catalog, "search", "zzz") == 0
    assert "No products found" in out.export_text()


def test_connection_failure_is_not_reported_as_missing_product(out):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    offline = CatalogClient(base_url="http://catalog.invalid", http_client=httpx.Client(transport=httpx.MockTransport(refuse)))
    assert run(offline, "get", "abc") == 1
    text = out.export_text()
    assert "connection refused" in text
    assert "No product with id" not in text


def test_main_handles_ctrl_c(monkeypatch, out):
    def interrupted(args, c):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "run_command", interrupted)
    assert cli.main(["menu"]) == 1
    assert "Interrupted by user" in out.export_text()
