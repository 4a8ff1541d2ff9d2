import httpx
import pytest

from exabrowser import api
from exabrowser.errors import InputError, ProxyError
from exabrowser.proxy import fetch_proxied_page, inject_base_tag, validate_url


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200, content_type: str = "text/html", reason: str = "OK"):
        self.text = text
        self.status_code = status_code
        self.headers = {"content-type": content_type}
        self.reason_phrase = reason


def _stub_client(calls: dict, response=None, error: Exception | None = None):
    class StubClient:
        def __init__(self, **kwargs):
            calls["client_kwargs"] = kwargs

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def get(self, url, headers=None, timeout=None):
            calls["url"] = url
            calls["headers"] = headers
            if error:
                raise error
            return response

    return StubClient


def test_inject_base_tag_after_head() -> None:
    html = "<html><HEAD><title>x</title></HEAD><head></head></html>"
    assert inject_base_tag(html, "https://example.com/a/b?c=1") == (
        '<html><head><base href="https://example.com"><title>x</title></HEAD><head></head></html>'
    )


@pytest.mark.parametrize("url", ["", "   ", "ftp://example.com", "example.com/page", "https://"])
def test_validate_url_rejects_bad_input(url: str) -> None:
    with pytest.raises(InputError):
        validate_url(url)


@pytest.mark.asyncio
async def test_fetch_proxied_page_rewrites_html(monkeypatch) -> None:
    calls: dict = {}
    response = FakeResponse("<html><head></head><body>hi</body></html>", content_type="text/html; charset=utf-8")
    monkeypatch.setattr("exabrowser.proxy.httpx.AsyncClient", _stub_client(calls, response))

    page = await fetch_proxied_page("https://example.com/page")

    assert page.html == '<html><head><base href="https://example.com"></head><body>hi</body></html>'
    assert page.headers["X-Frame-Options"] == "ALLOWALL"
    assert calls["url"] == "https://example.com/page"
    assert "Mozilla/5.0" in calls["headers"]["User-Agent"]


@pytest.mark.asyncio
async def test_fetch_proxied_page_rejects_non_html(monkeypatch) -> None:
    response = FakeResponse("{}", content_type="application/json")
    monkeypatch.setattr("exabrowser.proxy.httpx.AsyncClient", _stub_client({}, response))

    with pytest.raises(InputError, match="Only HTML content can be proxied"):
        await fetch_proxied_page("https://example.com/api")


@pytest.mark.asyncio
async def test_fetch_proxied_page_passes_upstream_status(monkeypatch) -> None:
    response = FakeResponse("", status_code=404, reason="Not Found")
    monkeypatch.setattr("exabrowser.proxy.httpx.AsyncClient", _stub_client({}, response))

    with pytest.raises(ProxyError) as excinfo:
        await fetch_proxied_page("https://example.com/missing")
    assert excinfo.value.status == 404
    assert str(excinfo.value) == "Failed to fetch URL: 404 Not Found"


@pytest.mark.asyncio
async def test_proxy_handler_maps_transport_errors(monkeypatch) -> None:
    monkeypatch.setattr(
        "exabrowser.proxy.httpx.AsyncClient",
        _stub_client({}, error=httpx.ConnectError("refused")),
    )

    status, body, headers = await api.handle_proxy("https://example.com")

    assert status == 500
    assert body == {"error": "Failed to proxy URL: refused"}
    assert headers == {}
