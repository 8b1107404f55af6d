from __future__ import annotations

import os
import tempfile
import threading
from urllib.parse import parse_qs, urlparse

import pytest
import requests

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="recipe_importer_logs_"))


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200, url: str = "") -> None:
        self.text = text
        self.status_code = status_code
        self.url = url

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(
                f"{self.status_code} Client Error for url: {self.url}", response=self
            )


class FakeSession:
    """Stands in for ``requests.Session``; answers from a url -> response mapping."""

    def __init__(self, routes=None, default=None) -> None:
        self.routes = dict(routes or {})
        self.default = default
        self.requested: list[str] = []
        self.closed = False

    def get(self, url, timeout=None):
        self.requested.append(url)
        outcome = self.routes.get(url, self.default)
        if callable(outcome):
            outcome = outcome(url)
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome is None:
            raise requests.ConnectionError(f"No route to {url}")
        if isinstance(outcome, str):
            return FakeResponse(outcome, url=url)
        return outcome

    def close(self) -> None:
        self.closed = True


def callback_token(url: str) -> str:
    return parse_qs(urlparse(url).query)["callback"][0]


@pytest.fixture
def blocking_event():
    event = threading.Event()
    yield event
    event.set()


SOUP_JSONLD_PAGE = """<!DOCTYPE html>
<html><head>
<script type="application/ld+json">{"@type":"Recipe","name":"Soup","recipeIngredient":["1 cup water"]}</script>
</head><body><h1>Soup</h1></body></html>
"""

MICRODATA_PAGE = """<!DOCTYPE html>
<html><body>
<div itemscope itemtype="https://schema.org/Recipe">
  <h1 itemprop="name">Banana Muffins</h1>
  <div itemprop="author" itemscope itemtype="https://schema.org/Person">
    <span itemprop="name">Jane Baker</span>
  </div>
  <p itemprop="description">Moist muffins for a quick breakfast.</p>
  <ul>
    <li itemprop="recipeIngredient">2 cups flour</li>
    <li itemprop="recipeIngredient">3 ripe bananas</li>
  </ul>
</div>
</body></html>
"""

PLAIN_PAGE = "<html><head><title>About us</title></head><body><p>No recipes here.</p></body></html>"


@pytest.fixture
def soup_page() -> str:
    return SOUP_JSONLD_PAGE


@pytest.fixture
def microdata_page() -> str:
    return MICRODATA_PAGE


@pytest.fixture
def plain_page() -> str:
    return PLAIN_PAGE
