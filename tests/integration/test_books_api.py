from collections.abc import Callable

import httpx
from fastapi.testclient import TestClient

DUNE_DOC = {
    "key": "/works/OL893415W",
    "title": "Dune",
    "author_name": ["Frank Herbert"],
    "first_publish_year": 1965,
    "cover_i": 11481354,
}

HYPERION_WORK = {
    "key": "/works/OL1963268W",
    "title": "Hyperion",
    "description": "Seven pilgrims travel to the Time Tombs.",
    "authors": [{"author": {"key": "/authors/OL30958A"}}],
    "covers": [6470839],
}


def catalog_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/search.json":
        return httpx.Response(200, json={"numFound": 1, "docs": [DUNE_DOC]})
    if path == "/works/OL1963268W.json":
        return httpx.Response(200, json=HYPERION_WORK)
    if path == "/authors/OL30958A.json":
        return httpx.Response(200, json={"name": "Dan Simmons"})
    return httpx.Response(404, json={"error": "notfound"})


def test_search_returns_camel_case_book_records(
    client: TestClient, mock_http: Callable
) -> None:
    mock_http(catalog_handler)

    response = client.get("/search", params={"q": "dune", "limit": 5})

    assert response.status_code == 200
    assert response.json() == [
        {
            "key": "/works/OL893415W",
            "title": "Dune",
            "authors": ["Frank Herbert"],
            "publishYear": 1965,
            "coverUrl": "https://covers.openlibrary.org/b/id/11481354-M.jpg",
            "description": None,
            "isbn": None,
            "publishers": None,
            "subjects": None,
        }
    ]


def test_short_search_returns_empty_list_without_catalog_call(
    client: TestClient, mock_http: Callable
) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return catalog_handler(request)

    mock_http(handler)

    response = client.get("/search", params={"q": "du"})

    assert response.status_code == 200
    assert response.json() == []
    assert calls == []


def test_search_catalog_failure_returns_503(client: TestClient, mock_http: Callable) -> None:
    mock_http(lambda request: httpx.Response(502))

    response = client.get("/search", params={"q": "dune"})

    assert response.status_code == 503
    assert response.json() == {"detail": "Failed to search books"}


def test_search_without_query_returns_400(client: TestClient) -> None:
    response = client.get("/search")

    assert response.status_code == 400
    assert response.json()["detail"] == "Bad request"


def test_search_rejects_out_of_range_limit(client: TestClient) -> None:
    response = client.get("/search", params={"q": "dune", "limit": 0})

    assert response.status_code == 400


def test_detail_resolves_work_and_authors(client: TestClient, mock_http: Callable) -> None:
    mock_http(catalog_handler)

    response = client.get("/detail/works/OL1963268W")

    assert response.status_code == 200
    data = response.json()
    assert data["key"] == "/works/OL1963268W"
    assert data["authors"] == ["Dan Simmons"]
    assert data["description"] == "Seven pilgrims travel to the Time Tombs."
    assert data["coverUrl"] == "https://covers.openlibrary.org/b/id/6470839-M.jpg"


def test_detail_unknown_key_returns_404(client: TestClient, mock_http: Callable) -> None:
    mock_http(catalog_handler)

    response = client.get("/detail/works/OL0W")

    assert response.status_code == 404
    assert response.json()["detail"] == "Book with key works/OL0W not found"


def test_selection_skips_unknown_keys(client: TestClient, mock_http: Callable) -> None:
    mock_http(catalog_handler)

    response = client.get(
        "/selection", params=[("keys", "/works/OL0W"), ("keys", "/works/OL1963268W")]
    )

    assert response.status_code == 200
    assert [b["key"] for b in response.json()] == ["/works/OL1963268W"]


def test_selection_requires_keys(client: TestClient) -> None:
    response = client.get("/selection")

    assert response.status_code == 400


def test_live_search_sends_only_the_settled_query(
    client: TestClient, mock_http: Callable
) -> None:
    queries: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        queries.append(request.url.params["q"])
        return catalog_handler(request)

    mock_http(handler)

    with client.websocket_connect("/search/live") as websocket:
        websocket.send_text("dun")
        websocket.send_text("dune")
        update = websocket.receive_json()

    assert update["query"] == "dune"
    assert update["error"] is None
    assert [b["key"] for b in update["results"]] == ["/works/OL893415W"]
    assert update["results"][0]["coverUrl"].endswith("/b/id/11481354-M.jpg")
    assert queries == ["dune"]


def test_live_search_reports_catalog_failure(client: TestClient, mock_http: Callable) -> None:
    mock_http(lambda request: httpx.Response(500))

    with client.websocket_connect("/search/live") as websocket:
        websocket.send_text("dune")
        update = websocket.receive_json()

    assert update == {
        "query": "dune",
        "results": [],
        "error": "Failed to search books. Please try again.",
    }


def test_live_search_short_query_clears_results(client: TestClient, mock_http: Callable) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return catalog_handler(request)

    mock_http(handler)

    with client.websocket_connect("/search/live") as websocket:
        websocket.send_text("du")
        update = websocket.receive_json()

    assert update == {"query": "du", "results": [], "error": None}
    assert calls == []
