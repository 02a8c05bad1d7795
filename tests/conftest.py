import pytest

from email_proof.domain.proof_store import ProofCodeStore
from tests.fakes import FakeBackingCache, FakeClock, FakeRandom


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def backing_cache(clock):
    return FakeBackingCache(clock)


@pytest.fixture()
def rng():
    return FakeRandom(1234, 5678, 4321, 8765)


@pytest.fixture()
def store(backing_cache, clock, rng):
    return ProofCodeStore(backing_cache, rng=rng, clock=clock)


@pytest.fixture()
def make_store(clock):
    """
    Build a store over any backing cache.
    Codes come from FakeRandom(1111, 2222, ...) unless given explicitly.
    """

    def _make(cache, *codes: int, **kwargs):
        rng = FakeRandom(*(codes or (1111, 2222, 3333, 4444, 5555)))
        return ProofCodeStore(cache, rng=rng, clock=clock, **kwargs)

    return _make
