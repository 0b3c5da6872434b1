"""Scenario 3: Pass-Through

Requests whose version cannot be resolved reach the fallback origin as if
the service did not exist:
- Registry non-success status
- Registry unreachable
- Registry response without a version
- Method, path, query string and body forwarded unchanged
- The origin response returned verbatim, never a 5xx from the service
"""

import httpx
import pytest
from starlette.testclient import TestClient

from version_redirect.app import create_app


@pytest.fixture
def client(store, network, config):
    app = create_app(config=config, store=store, client=network.client())
    return TestClient(app, follow_redirects=False)


def test_registry_error_passes_through(client, network, store):
    network.respond("bar", 503)

    response = client.get("/bar")

    assert response.status_code == 200
    assert response.text == "origin:GET /bar"
    assert response.headers["x-served-by"] == "origin"
    assert len(network.origin_requests) == 1
    assert store.puts == []


def test_unpublished_package_passes_through(client, network):
    response = client.get("/not-a-package/latest/guide.html")

    assert response.status_code == 200
    assert response.text == "origin:GET /not-a-package/latest/guide.html"


def test_registry_unreachable_passes_through(client, network):
    network.registry_error = httpx.ConnectError("connection refused")

    response = client.get("/bar/latest")

    assert response.status_code == 200
    assert response.text == "origin:GET /bar/latest"


def test_missing_version_passes_through(client, network, store):
    network.respond("bar", 200, json={"name": "@electron/bar"})

    response = client.get("/bar")

    assert response.text == "origin:GET /bar"
    assert store.puts == []


def test_query_string_forwarded(client, network):
    response = client.get("/bar/?x=1&y=two")

    assert response.text == "origin:GET /bar/?x=1&y=two"
    assert network.origin_requests[0].url.query == b"x=1&y=two"


def test_method_and_body_forwarded(client, network):
    response = client.post(
        "/bar",
        content=b'{"feedback": "great docs"}',
        headers={"content-type": "application/json"},
    )

    assert response.text == "origin:POST /bar"
    forwarded = network.origin_requests[0]
    assert forwarded.method == "POST"
    assert forwarded.content == b'{"feedback": "great docs"}'
    assert forwarded.headers["content-type"] == "application/json"
    assert forwarded.url.host == "origin.test"


def test_repeated_failure_same_outcome(client, network):
    network.respond("bar", 500)

    first = client.get("/bar")
    second = client.get("/bar")

    assert first.status_code == second.status_code == 200
    assert first.text == second.text
    assert len(network.origin_requests) == 2
    assert len(network.registry_requests) == 2


def test_origin_cookies_returned_separately(store, config):
    cookies = [
        "a=1; Expires=Wed, 21 Oct 2026 07:28:00 GMT; Path=/",
        "b=2; Path=/",
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "registry.npmjs.org":
            return httpx.Response(404)
        return httpx.Response(
            200,
            headers=[("set-cookie", cookies[0]), ("set-cookie", cookies[1])],
            text="origin",
        )

    app = create_app(
        config=config,
        store=store,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    response = TestClient(app, follow_redirects=False).get("/bar")

    assert response.text == "origin"
    assert response.headers.get_list("set-cookie") == cookies
