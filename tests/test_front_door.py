"""Tests for routing, CORS policy and the public config endpoint."""

import pytest

ENDPOINTS = ["/api/deezer-auth", "/api/lastfm-auth", "/api/deezer-proxy"]


def test_public_config_exposes_only_public_values(bridge):
    with bridge() as (client, upstream):
        response = client.get("/api/config")

    assert response.status_code == 200
    assert response.json() == {
        "spotifyClientId": "spotify-client-id",
        "lastfmApiKey": "lastfm-api-key",
    }
    assert response.headers["cache-control"] == "public, max-age=3600"
    assert response.headers["access-control-allow-origin"] == "*"
    assert "secret" not in response.text
    assert upstream.requests == []


def test_public_config_is_empty_when_unset(bridge):
    with bridge(configured=False) as (client, _upstream):
        response = client.get("/api/config")

    assert response.status_code == 200
    assert response.json() == {"spotifyClientId": "", "lastfmApiKey": ""}


@pytest.mark.parametrize("path", ENDPOINTS)
def test_preflight_is_uniform(bridge, path):
    with bridge() as (client, _upstream):
        response = client.options(path)

    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"
    assert response.headers["access-control-allow-headers"] == (
        "Content-Type, X-Deezer-ARL, Content-Transfer-Encoding"
    )


@pytest.mark.parametrize("path", ENDPOINTS)
@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_other_methods_are_rejected_with_cors(bridge, logger, path, method):
    with bridge() as (client, upstream):
        response = client.request(method, path)

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
    assert response.headers["content-type"] == "application/json"
    assert response.headers["access-control-allow-origin"] == "*"
    assert upstream.requests == []
    assert logger.errors == [(path, 405, "Method not allowed")]


def test_oversized_body_is_rejected(bridge, monkeypatch):
    import api.handlers

    monkeypatch.setattr(api.handlers, "MAX_BODY_SIZE", 8)
    with bridge() as (client, upstream):
        response = client.post("/api/deezer-proxy", content=b"0123456789")

    assert response.status_code == 413
    assert upstream.requests == []


def test_public_config_preflight(bridge):
    with bridge() as (client, upstream):
        response = client.options("/api/config")

    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"
    assert upstream.requests == []


def test_public_config_advertises_get(bridge):
    with bridge() as (client, _upstream):
        response = client.get("/api/config")

    assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"


@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
def test_public_config_rejects_other_methods_with_cors(bridge, logger, method):
    with bridge() as (client, _upstream):
        response = client.request(method, "/api/config")

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
    assert response.headers["access-control-allow-origin"] == "*"
    assert logger.errors == [("/api/config", 405, "Method not allowed")]
