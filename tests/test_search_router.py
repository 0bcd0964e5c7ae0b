"""Test module for the search view and health endpoints."""


def _header(payload):
    return [area for area in payload["areas"] if area["region"] == "header"][0]


def test_search_without_results_suggests_correction(client):
    """Test case for the full pipeline over HTTP."""
    response = client.get("/search/content", params={"keys": "speling test"})
    assert response.status_code == 200
    payload = response.json()

    assert payload["total"] == 0
    assert payload["keys"] == "speling test"
    header = _header(payload)
    assert header["handler"] == "search_api_spellcheck"
    assert header["elements"][1] == {
        "type": "link",
        "title": "spelling test",
        "url": "/search/content?keys=spelling+test",
    }
    assert header["html"].startswith("<span>Did you mean: </span>")
    assert payload["corrections"] == {"keys": "spelling test"}


def test_search_with_results_hides_suggestion(client):
    """Test case for hide-on-result on the default display."""
    payload = client.get("/search/content", params={"keys": "search engine"}).json()
    assert payload["total"] == 1
    assert _header(payload)["elements"] == []
    assert _header(payload)["html"] == ""
    assert payload["corrections"] == {}


def test_always_display_shows_suggestion_with_results(client):
    """Test case for the display configured to always show the suggestion."""
    payload = client.get("/search/content_always", params={"keys": "search engine"}).json()
    assert payload["display_id"] == "page_2"
    assert payload["total"] == 1
    assert _header(payload)["elements"][1]["title"] == "search engines"
    assert payload["corrections"] == {"keys": "search engines"}


def test_preview_does_not_use_shared_cache(client):
    """Test case for live preview rendering."""
    preview = client.get("/search/content", params={"keys": "speling", "preview": "1"}).json()
    assert _header(preview)["elements"] == []

    live = client.get("/search/content", params={"keys": "speling"}).json()
    assert _header(live)["elements"][1]["title"] == "spelling"


def test_link_carries_other_filters(client):
    """Test case for extra exposed input kept on the suggestion link."""
    payload = client.get(
        "/search/content", params={"keys": "speling", "type": "article"}
    ).json()
    assert _header(payload)["elements"][1]["url"] == "/search/content?keys=spelling&type=article"


def test_unknown_view_returns_error_envelope(client):
    """Test case for the view-not-found error format."""
    response = client.get("/search/missing")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "view_not_found"
    assert body["path"] == "/search/missing"


def test_invalid_offset_is_validation_error(client):
    """Test case for request validation errors."""
    response = client.get("/search/content", params={"offset": "-1"})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "validation_error"


def test_health_reports_backends(client):
    """Test case for the health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "environment": "test",
        "cache_backend": "memory",
        "search_backend": "LocalSearchBackend",
    }
    assert "X-Request-ID" in response.headers
