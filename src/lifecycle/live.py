"""Observable single-value holder with replay to new subscribers."""

from typing import Callable, Generic, Optional, TypeVar

import structlog

from lifecycle.scope import LifecycleScope

logger = structlog.get_logger(source="live_value")

T = TypeVar("T")

Observer = Callable[[T], None]


class Subscription:
    """Handle returned by ``LiveValue.subscribe``."""

    def __init__(self, owner: "LiveValue", observer: Observer):
        self._owner = owner
        self._observer = observer
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._owner._remove(self)


class LiveValue(Generic[T]):
    """Read-only view of an observable value.

    Holds zero or one value. New subscribers receive the current value
    immediately when one is present.
    """

    def __init__(self):
        self._value: Optional[T] = None
        self._has_value = False
        self._subscriptions: list[Subscription] = []

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def observer_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, observer: Observer, replay: bool = True) -> Subscription:
        """Register an observer and replay the current value to it."""
        sub = Subscription(self, observer)
        self._subscriptions.append(sub)
        if replay and self._has_value:
            self._dispatch(sub, self._value)
        return sub

    def observe(self, scope: LifecycleScope, observer: Observer) -> Subscription:
        """Subscribe for as long as ``scope`` is alive."""
        sub = self.subscribe(observer)
        scope.on_close(sub.unsubscribe)
        return sub

    def read_only(self) -> "LiveValue[T]":
        return self

    def _remove(self, sub: Subscription) -> None:
        try:
            self._subscriptions.remove(sub)
        except ValueError:
            pass

    def _dispatch(self, sub: Subscription, value: T) -> None:
        try:
            sub._observer(value)
        except Exception:
            # remaining observers still get notified
            logger.exception("observer_failed")


class MutableLiveValue(LiveValue[T]):
    """Owner-side LiveValue with a setter."""

    def set(self, value: T) -> None:
        """Store ``value`` and notify subscribers synchronously, in order."""
        self._value = value
        self._has_value = True
        for sub in list(self._subscriptions):
            if sub.active:
                self._dispatch(sub, value)

    def read_only(self) -> LiveValue[T]:
        return _ReadOnlyLiveValue(self)


class _ReadOnlyLiveValue(LiveValue[T]):
    """Proxy exposing a MutableLiveValue without its setter."""

    def __init__(self, source: MutableLiveValue[T]):
        self._source = source

    @property
    def value(self) -> Optional[T]:
        return self._source.value

    @property
    def has_value(self) -> bool:
        return self._source.has_value

    @property
    def observer_count(self) -> int:
        return self._source.observer_count

    def subscribe(self, observer: Observer, replay: bool = True) -> Subscription:
        return self._source.subscribe(observer, replay=replay)

    def observe(self, scope: LifecycleScope, observer: Observer) -> Subscription:
        return self._source.observe(scope, observer)
