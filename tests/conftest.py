"""Shared test fixtures for catfacts."""

import sys
from pathlib import Path

import httpx
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from facts.client import FactClient  # noqa: E402
from observability import metrics  # noqa: E402

BASE_URL = "https://facts.test/"


def make_client(handler) -> FactClient:
    """FactClient whose transport is answered by ``handler(request)``."""
    transport = httpx.MockTransport(handler)
    return FactClient(
        base_url=BASE_URL,
        client=httpx.AsyncClient(transport=transport, base_url=BASE_URL),
    )


def json_handler(body, status_code: int = 200):
    """Handler returning the same JSON body for every request."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)

    return handler


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def sample_fact_text():
    return "Cats sleep 70% of their lives."
