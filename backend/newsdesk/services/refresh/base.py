"""Protocols for the cooldown store and payload cache. In-memory and SQL implementations share these."""
from typing import Any, Protocol


class CooldownStore(Protocol):
    """Holds the last-refresh epoch per source."""

    def get_last_refresh(self, source: str) -> int | None:
        ...

    def record_refresh(self, source: str, epoch: int, *, outcome: str, error: str | None = None) -> int:
        """
        Store epoch as the last refresh unless an equal or later value is already stored.
        Returns the value stored after the call (never smaller than before).
        """
        ...

    def reset(self, source: str) -> None:
        ...


class PayloadCache(Protocol):
    """Last good payload per cache key: {"items": [...], "fetched_at": epoch}."""

    def get(self, key: str) -> dict[str, Any] | None:
        ...

    def put(self, key: str, payload: dict[str, Any]) -> None:
        ...
