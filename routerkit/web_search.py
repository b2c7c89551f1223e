"""Web search request and response types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import _optional, _require


@dataclass
class WebSearchRequest:
    """A web search query."""

    query: str
    num_results: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"query": self.query}
        if self.num_results is not None:
            out["num_results"] = self.num_results
        return out


@dataclass
class WebSearchResult:
    """One search hit."""

    title: str
    url: str
    snippet: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WebSearchResult:
        return cls(
            title=_require(data, "title", str),
            url=_require(data, "url", str),
            snippet=_optional(data, "snippet", str),
        )


@dataclass
class WebSearchResponse:
    """The results of a web search."""

    query: str
    results: list[WebSearchResult]
    total_results: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WebSearchResponse:
        return cls(
            query=_require(data, "query", str),
            results=[WebSearchResult.from_dict(r) for r in _require(data, "results", list)],
            total_results=_require(data, "total_results", int),
        )