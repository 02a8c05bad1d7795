import asyncio
from uuid import uuid4

import pytest

from email_proof.domain.proof_store import ProofCodeStore
from email_proof.infrastructure.redis_cache.backing_cache import RedisBackingCache


def make_store(redis_client, **kwargs) -> ProofCodeStore:
    return ProofCodeStore(
        RedisBackingCache(redis_client),
        cache_key=f"test:EmailProof:{uuid4()}",
        **kwargs,
    )


@pytest.mark.asyncio
async def test_generate_validate_delete_roundtrip(redis_client):
    store = make_store(redis_client)

    code = await store.generate_proof_code("User@X.com")

    assert await store.contains("user@x.com") is True
    assert await store.validate_proof_code("user@x.com", code) is True
    assert await store.validate_proof_code("user@x.com", code) is True

    await store.delete_proof_code("user@x.com")
    assert await store.contains("user@x.com") is False


@pytest.mark.asyncio
async def test_collection_ttl_mirrors_window(redis_client):
    store = make_store(redis_client, validity_seconds=120)
    key = store._key("a@x.com")

    await store.generate_proof_code("a@x.com")

    assert await redis_client.ttl(key) in (119, 120)
    await redis_client.delete(key)


@pytest.mark.asyncio
async def test_code_expires_with_window(redis_client):
    store = make_store(redis_client, validity_seconds=1)

    code = await store.generate_proof_code("a@x.com")
    await asyncio.sleep(1.2)

    assert await store.validate_proof_code("a@x.com", code) is False
    assert await store.list_valid_proof_items() == []


@pytest.mark.asyncio
async def test_compare_and_swap_under_concurrent_writers(redis_client):
    store = make_store(redis_client, write_mode="compare_and_swap", max_write_attempts=20)
    emails = [f"user{i}@x.com" for i in range(8)]

    codes = await asyncio.gather(*(store.generate_proof_code(e) for e in emails))

    for email, code in zip(emails, codes):
        assert await store.validate_proof_code(email, code) is True
    assert len(await store.list_valid_proof_items()) == len(emails)
    await redis_client.delete(store._key(emails[0]))


@pytest.mark.asyncio
async def test_per_email_scope_lists_across_keys(redis_client):
    store = make_store(redis_client, key_scope="per_email")

    await store.generate_proof_code("a@x.com")
    await store.generate_proof_code("B@x.com")

    emails = sorted(i.email for i in await store.list_valid_proof_items())
    assert emails == ["B@x.com", "a@x.com"]

    await store.delete_proof_code("a@x.com")
    await store.delete_proof_code("b@x.com")
    assert await store.list_valid_proof_items() == []
