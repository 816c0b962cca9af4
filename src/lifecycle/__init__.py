from .live import LiveValue, MutableLiveValue, Subscription
from .scope import LifecycleScope

__all__ = ["LifecycleScope", "LiveValue", "MutableLiveValue", "Subscription"]
