from email_proof.domain.ports.backing_cache import BackingCachePort
from email_proof.domain.proof_store import ProofCodeStore
from email_proof.infrastructure.redis_cache.backing_cache import RedisBackingCache
from email_proof.infrastructure.redis_cache.pool import get_redis
from email_proof.settings import get_settings


def get_backing_cache() -> BackingCachePort:
    return RedisBackingCache(get_redis())


def build_proof_store(cache: BackingCachePort) -> ProofCodeStore:
    settings = get_settings()
    return ProofCodeStore(
        cache,
        cache_key=settings.proof_cache_key,
        validity_seconds=settings.proof_validity_seconds,
        key_scope=settings.proof_key_scope,
        write_mode=settings.proof_write_mode,
        max_write_attempts=settings.proof_write_max_attempts,
    )


def get_proof_store() -> ProofCodeStore:
    return build_proof_store(get_backing_cache())
