from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Literal, Optional

import email_proof.domain.services as domain_services
from email_proof.domain.codec import decode_items, encode_items
from email_proof.domain.entities import ProofItem
from email_proof.domain.errors import ProofItemsDecodeError, ProofStoreConflict
from email_proof.domain.ports.backing_cache import BackingCachePort

logger = logging.getLogger(__name__)

KeyScope = Literal["shared", "per_email"]
WriteMode = Literal["last_writer_wins", "compare_and_swap"]

# Receives every stored item, returns the collection to write back
# or None to leave the stored value untouched.
Mutation = Callable[[list[ProofItem]], Optional[list[ProofItem]]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProofCodeStore:
    """
    Issues and checks short numeric codes proving control of an email address.

    All state lives in the backing cache as JSON collections of
    {email, code, createdAt} records:
      - key_scope="shared": one collection under `cache_key`
      - key_scope="per_email": one collection per folded email under
        `cache_key:<email>`

    Every write refreshes the entry TTL to the validity window. Expiry is a
    predicate evaluated at read time; expired items are dropped on the next
    write of their collection.

    write_mode="last_writer_wins" does a plain load -> modify -> set.
    write_mode="compare_and_swap" only writes if the stored value is unchanged
    since the load and retries the whole cycle up to `max_write_attempts` times.
    """

    def __init__(
        self,
        cache: BackingCachePort,
        *,
        cache_key: str = "EmailProof",
        validity_seconds: int = 300,
        key_scope: KeyScope = "shared",
        write_mode: WriteMode = "last_writer_wins",
        max_write_attempts: int = 5,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if validity_seconds <= 0:
            raise ValueError("validity_seconds must be positive")
        if max_write_attempts < 1:
            raise ValueError("max_write_attempts must be at least 1")
        if key_scope not in ("shared", "per_email"):
            raise ValueError(f"unknown key_scope: {key_scope!r}")
        if write_mode not in ("last_writer_wins", "compare_and_swap"):
            raise ValueError(f"unknown write_mode: {write_mode!r}")

        self._cache = cache
        self._cache_key = cache_key
        self._ttl = validity_seconds
        self._window = timedelta(seconds=validity_seconds)
        self._key_scope = key_scope
        self._write_mode = write_mode
        self._max_attempts = max_write_attempts
        self._rng = rng or random.SystemRandom()
        self._clock = clock or utc_now

    @property
    def validity_window(self) -> timedelta:
        return self._window

    async def generate_proof_code(self, email: str) -> int:
        logger.debug("generate proof code", extra={"email": email})
        code = domain_services.generate_proof_code(self._rng)
        now = self._clock()
        new_item = ProofItem(email=email, code=code, created_at=now)

        def supersede(items: list[ProofItem]) -> list[ProofItem]:
            kept = [
                item
                for item in items
                if item.is_valid_at(now, self._window) and not item.matches(email)
            ]
            kept.append(new_item)
            return kept

        await self._mutate(self._key(email), supersede)
        logger.info("stored proof code", extra={"email": email})
        return code

    async def contains(self, email: str) -> bool:
        items = await self._valid_items(self._key(email))
        exists = any(item.matches(email) for item in items)
        logger.debug("contains check", extra={"email": email, "exists": exists})
        return exists

    async def validate_proof_code(self, email: str, submitted_code: int) -> bool:
        items = await self._valid_items(self._key(email))
        item = next((i for i in items if i.matches(email)), None)

        if item is None:
            logger.warning("no proof code found", extra={"email": email})
            return False

        if not domain_services.secure_compare(str(item.code), str(submitted_code)):
            logger.warning("invalid proof code", extra={"email": email})
            return False

        logger.info("proof code validated", extra={"email": email})
        return True

    async def delete_proof_code(self, email: str) -> None:
        now = self._clock()

        def remove(items: list[ProofItem]) -> list[ProofItem] | None:
            remaining = [item for item in items if not item.matches(email)]
            if len(remaining) == len(items):
                return None
            return [item for item in remaining if item.is_valid_at(now, self._window)]

        if await self._mutate(self._key(email), remove):
            logger.info("deleted proof code", extra={"email": email})
        else:
            logger.warning("no proof code found to delete", extra={"email": email})

    async def list_valid_proof_items(self) -> list[ProofItem]:
        if self._key_scope == "per_email":
            keys = await self._cache.scan_keys(f"{self._cache_key}:")
        else:
            keys = [self._cache_key]

        now = self._clock()
        valid: list[ProofItem] = []
        total = 0
        for key in keys:
            _, items = await self._load(key)
            total += len(items)
            valid.extend(item for item in items if item.is_valid_at(now, self._window))

        logger.debug(
            "retrieved valid proof items",
            extra={"valid": len(valid), "total": total},
        )
        return valid

    def _key(self, email: str) -> str:
        if self._key_scope == "per_email":
            return f"{self._cache_key}:{domain_services.fold_email(email)}"
        return self._cache_key

    async def _valid_items(self, key: str) -> list[ProofItem]:
        _, items = await self._load(key)
        now = self._clock()
        return [item for item in items if item.is_valid_at(now, self._window)]

    async def _load(self, key: str) -> tuple[Optional[str], list[ProofItem]]:
        raw = await self._cache.get(key)
        if not raw:
            return raw, []
        try:
            return raw, decode_items(raw)
        except ProofItemsDecodeError as exc:
            logger.error(
                "error deserializing proof items",
                extra={"key": key, "error": str(exc)},
            )
            return raw, []

    async def _mutate(self, key: str, mutation: Mutation) -> bool:
        """Run load -> mutation -> write. Return False when nothing was written."""
        for attempt in range(1, self._max_attempts + 1):
            raw, items = await self._load(key)
            updated = mutation(items)
            if updated is None:
                return False

            # an empty collection is dropped instead of stored as "[]"
            payload = encode_items(updated) if updated else None

            if self._write_mode == "last_writer_wins":
                if payload is None:
                    await self._cache.delete(key)
                else:
                    await self._cache.set(key, payload, self._ttl)
                return True

            if await self._cache.compare_and_set(key, raw, payload, self._ttl):
                return True

            logger.warning(
                "proof collection changed concurrently, retrying",
                extra={"key": key, "attempt": attempt},
            )

        raise ProofStoreConflict(
            f"gave up writing {key!r} after {self._max_attempts} attempts"
        )
