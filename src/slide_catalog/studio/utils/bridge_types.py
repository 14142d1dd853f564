"""Shared response type for service methods."""

from dataclasses import asdict, dataclass
from typing import Any

from pydantic import BaseModel

__all__ = [
    "BridgeResponse",
    "bridge_ok",
    "bridge_error",
    "to_payload",
]


@dataclass
class BridgeResponse:
    """Standard response format for service methods."""

    success: bool
    data: Any = None
    error: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def to_payload(value: Any) -> Any:
    """Convert models (and lists/dicts of them) to JSON-ready data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [to_payload(v) for v in value]
    if isinstance(value, dict):
        return {k: to_payload(v) for k, v in value.items()}
    return value


def bridge_ok(data: Any = None) -> dict:
    """Return a success response."""
    return BridgeResponse(success=True, data=to_payload(data)).to_dict()


def bridge_error(error: str) -> dict:
    """Return an error response."""
    return BridgeResponse(success=False, error=error).to_dict()
