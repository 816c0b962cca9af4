"""Async HTTP client for the cat fact service."""

from typing import Optional

import httpx
import structlog

from facts.models import DecodeError, Fact, NetworkError
from observability import FETCH_OUTCOMES, FETCH_TIMER, metrics

logger = structlog.get_logger(source="fact_client")

DEFAULT_BASE_URL = "https://catfact.ninja/"
DEFAULT_USER_AGENT = "catfacts/0.1.0"
FACT_PATH = "fact"


class FactClient:
    """Fetches single facts from ``<base_url>/fact``."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url
        if client is not None:
            self.client = client
        else:
            kwargs = {
                "base_url": base_url,
                "headers": {"User-Agent": user_agent, "Accept": "application/json"},
            }
            # None keeps httpx's transport default
            if timeout is not None:
                kwargs["timeout"] = timeout
            self.client = httpx.AsyncClient(**kwargs)

    async def fetch_fact(self) -> Fact:
        """Fetch one fact.

        Raises:
            NetworkError: connection failure, timeout or non-2xx status.
            DecodeError: malformed body.
        """
        logger.debug("fetching_fact", base_url=str(self.client.base_url))
        with metrics.timer(FETCH_TIMER):
            try:
                response = await self.client.get(FACT_PATH)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                metrics.counter(FETCH_OUTCOMES["network_error"])
                raise NetworkError(
                    f"HTTP {e.response.status_code} from {e.request.url}",
                    status_code=e.response.status_code,
                ) from e
            except httpx.RequestError as e:
                metrics.counter(FETCH_OUTCOMES["network_error"])
                raise NetworkError(f"Request failed: {e!r}") from e

            try:
                fact = Fact.from_payload(response.json())
            except ValueError as e:
                metrics.counter(FETCH_OUTCOMES["decode_error"])
                raise DecodeError(f"Response is not valid JSON: {e}") from e
            except DecodeError:
                metrics.counter(FETCH_OUTCOMES["decode_error"])
                raise

        metrics.counter(FETCH_OUTCOMES["success"])
        logger.debug("fact_fetched", length=len(fact.text))
        return fact

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
