"""Terminal display surface bound to a FactStore."""

from typing import Optional

import structlog
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from facts.models import Fact, FactError, NetworkError
from facts.store import FactStore
from lifecycle.scope import LifecycleScope

logger = structlog.get_logger(source="fact_screen")

PLACEHOLDER = "Loading a cat fact..."
HINT = "enter: new fact · q: quit"


class FactScreen:
    """One text region plus a "new fact" action.

    ``start`` subscribes to the store and triggers the initial load;
    ``close`` tears the scope down, which drops the subscriptions and cancels
    loads still in flight.
    """

    def __init__(self, store: FactStore, scope: LifecycleScope, console: Optional[Console] = None):
        self.store = store
        self.scope = scope
        self.console = console
        self.text: Optional[str] = None
        self.status: Optional[str] = None
        self.render_count = 0
        self._started = False

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        logger.debug("screen_started", scope=self.scope.name)
        self.store.fact.observe(self.scope, self._on_fact)
        self.store.error.observe(self.scope, self._on_error)
        self.store.load_fact()

    def press(self) -> None:
        """The "load new fact" button."""
        logger.debug("new_fact_requested", pending=self.store.pending)
        self.status = None
        self.store.load_fact()

    def close(self) -> None:
        self.scope.cancel()

    def _on_fact(self, fact: Fact) -> None:
        self.text = fact.text
        self.status = None
        self._render()

    def _on_error(self, error: FactError) -> None:
        if isinstance(error, NetworkError):
            self.status = f"Could not reach the fact service: {error}"
        else:
            self.status = f"Received an unreadable fact: {error}"
        self._render()

    def renderable(self) -> Panel:
        body = Text(self.text if self.text is not None else PLACEHOLDER)
        if self.text is None:
            body.stylize("dim italic")
        parts = [body]
        if self.status:
            parts.append(Text(""))
            parts.append(Text(self.status, style="red"))
        return Panel(Group(*parts), title="Cat fact", subtitle=HINT, expand=False, padding=(1, 2))

    def _render(self) -> None:
        self.render_count += 1
        if self.console is not None:
            self.console.print(self.renderable())
