"""Shared fixtures: fake HTTP sessions and small dictionary payloads."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from hanzi_sheet.fallback import load_fallback_table

MMH_TSV = "\n".join(
    [
        "水\tshuǐ\twater, liquid",
        "学\txué\tlearning, knowledge; to learn",
        "吗\tma\tinterrogative particle",
        "broken line without tabs",
        "缺\t\tmissing pinyin",
        "",
    ]
)


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = "", json_error: bool = False):
        self.status_code = status_code
        self._body = body
        self._json_error = json_error

    @property
    def content(self) -> bytes:
        if isinstance(self._body, bytes):
            return self._body
        if isinstance(self._body, str):
            return self._body.encode("utf-8")
        return json.dumps(self._body, ensure_ascii=False).encode("utf-8")

    def json(self) -> Any:
        if self._json_error or isinstance(self._body, (str, bytes)):
            raise ValueError("not JSON")
        return self._body

    def raise_for_status(self) -> None:
        if not 200 <= self.status_code < 300:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, routes: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.routes = routes or {}
        self.error = error
        self.calls: List[str] = []

    def get(self, url: str, timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        if url not in self.routes:
            return FakeResponse(404, {})
        route = self.routes[url]
        if isinstance(route, FakeResponse):
            return route
        return FakeResponse(200, route)


@pytest.fixture
def fallback_table():
    return load_fallback_table()


@pytest.fixture
def offline_session():
    return FakeSession(error=requests.ConnectionError("network is down"))
