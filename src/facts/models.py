"""Cat fact value type and error taxonomy."""

from dataclasses import dataclass
from typing import Optional


class FactError(Exception):
    """Base fact loading error."""


class NetworkError(FactError):
    """Transport failure, timeout or non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(FactError):
    """Response body is not a fact object."""


@dataclass(frozen=True)
class Fact:
    """Single cat fact."""

    text: str

    @classmethod
    def from_payload(cls, data) -> "Fact":
        """Build a Fact from a decoded JSON body.

        Raises:
            DecodeError: body is not an object or has no string ``fact`` field.
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Expected JSON object, got {type(data).__name__}")
        if "fact" not in data:
            raise DecodeError("Missing 'fact' field in response")
        text = data["fact"]
        if not isinstance(text, str):
            raise DecodeError(f"'fact' must be a string, got {type(text).__name__}")
        return cls(text=text)
