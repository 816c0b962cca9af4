"""Composition root: wires client, store and screen from config."""

from typing import Optional

from rich.console import Console

from cli.config_models import CatFactsConfig
from cli.screen import FactScreen
from facts.client import FactClient
from facts.store import FactStore
from lifecycle.scope import LifecycleScope

console = Console()


def build_client(config: CatFactsConfig) -> FactClient:
    api = config.api
    return FactClient(base_url=api.base_url, timeout=api.timeout, user_agent=api.user_agent)


def build_screen(
    config: CatFactsConfig,
    client: Optional[FactClient] = None,
    out: Optional[Console] = None,
) -> FactScreen:
    """Build client -> store -> screen. The screen owns the scope the store launches into."""
    scope = LifecycleScope(name="fact_screen")
    store = FactStore(client or build_client(config), scope)
    return FactScreen(store, scope, console=out or console)
