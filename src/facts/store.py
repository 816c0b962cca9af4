"""Fact store: holds the latest fact and loads new ones on request."""

import asyncio
from typing import Optional

import structlog

from facts.client import FactClient
from facts.models import Fact, FactError
from lifecycle.live import LiveValue, MutableLiveValue
from lifecycle.scope import LifecycleScope

logger = structlog.get_logger(source="fact_store")


class FactStore:
    """Observable holder for the most recently fetched fact.

    ``load_fact`` is fire-and-forget: each call starts an independent task in
    ``scope``. Concurrent loads are not de-duplicated; whichever completes
    last owns the slot. Failures never touch the fact slot, they are logged
    and published on ``error`` instead.
    """

    def __init__(self, client: FactClient, scope: LifecycleScope):
        self.client = client
        self.scope = scope
        self._fact: MutableLiveValue[Fact] = MutableLiveValue()
        self._error: MutableLiveValue[FactError] = MutableLiveValue()
        self._pending = 0

    @property
    def fact(self) -> LiveValue[Fact]:
        return self._fact.read_only()

    @property
    def error(self) -> LiveValue[FactError]:
        return self._error.read_only()

    @property
    def pending(self) -> int:
        """Loads started but not yet finished."""
        return self._pending

    def load_fact(self) -> Optional[asyncio.Task]:
        """Start loading a new fact. Returns the task, or None if the scope is closed."""
        return self.scope.launch(self._load())

    async def _load(self) -> None:
        self._pending += 1
        try:
            fact = await self.client.fetch_fact()
        except FactError as e:
            logger.warning("fact_load_failed", error=str(e), error_type=type(e).__name__)
            self._error.set(e)
            return
        except asyncio.CancelledError:
            logger.debug("fact_load_cancelled")
            raise
        except Exception:
            logger.exception("fact_load_crashed")
            raise
        finally:
            self._pending -= 1

        self._fact.set(fact)
        logger.info("fact_loaded", length=len(fact.text))
