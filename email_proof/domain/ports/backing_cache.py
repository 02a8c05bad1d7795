from __future__ import annotations

from typing import Optional, Protocol


class BackingCachePort(Protocol):
    async def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None when the key is missing/expired."""

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store/replace value; the key expires ttl_seconds from now."""

    async def delete(self, key: str) -> None:
        """Remove the key. Missing keys are not an error."""

    async def scan_keys(self, prefix: str) -> list[str]:
        """Return every live key starting with prefix."""

    async def compare_and_set(
        self,
        key: str,
        expected: Optional[str],
        value: Optional[str],
        ttl_seconds: int,
    ) -> bool:
        """
        Atomically replace the key only if its current value equals expected
        (expected=None means the key must be absent). value=None deletes the key.
        Return True when the write happened, False on a conflict.
        """
