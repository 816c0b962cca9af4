"""CLI command modules."""

from .facts import fact, show
from .init import config, init

__all__ = [
    "show",
    "fact",
    "config",
    "init",
]
