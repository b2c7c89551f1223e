import pytest

from routerkit.errors import SerializationError
from routerkit.web_search import WebSearchRequest, WebSearchResponse, WebSearchResult


def test_request_without_count():
    assert WebSearchRequest(query="rust async").to_dict() == {"query": "rust async"}


def test_request_with_count():
    out = WebSearchRequest(query="q", num_results=5).to_dict()
    assert out["num_results"] == 5
    assert out["query"] == "q"


def test_response_parses_results():
    data = {
        "query": "python",
        "results": [
            {"title": "T1", "url": "https://example.com/1", "snippet": "s1"},
            {"title": "T2", "url": "https://example.com/2"},
        ],
        "total_results": 2,
    }
    response = WebSearchResponse.from_dict(data)
    assert response.query == "python"
    assert response.total_results == 2
    assert response.results[0] == WebSearchResult("T1", "https://example.com/1", "s1")
    assert response.results[1].snippet is None


def test_result_missing_url_raises():
    with pytest.raises(SerializationError, match="url"):
        WebSearchResult.from_dict({"title": "T"})


def test_response_bad_total_raises():
    with pytest.raises(SerializationError):
        WebSearchResponse.from_dict({"query": "q", "results": [], "total_results": "many"})