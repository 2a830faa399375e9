import pytest

from firewatch.services.result_cache import ResultCache


def test_get_within_ttl_returns_same_object(clock):
    cache = ResultCache(ttl_seconds=300, clock=clock)
    payload = {"count": 1}
    entry = cache.set("k", payload)

    assert entry.key == "k"
    assert entry.stored_at == clock.now
    clock.advance(299.999)
    assert cache.get("k") is payload


def test_entry_expires_at_ttl(clock):
    cache = ResultCache(ttl_seconds=300, clock=clock)
    cache.set("k", "payload")
    clock.advance(300)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_key_mismatch_is_a_miss(clock):
    cache = ResultCache(clock=clock)
    cache.set("a", 1)
    assert cache.get("b") is None


def test_set_overwrites_and_restarts_ttl(clock):
    cache = ResultCache(ttl_seconds=10, clock=clock)
    cache.set("k", "old")
    clock.advance(8)
    cache.set("k", "new")
    clock.advance(8)
    assert cache.get("k") == "new"
    assert len(cache) == 1


def test_oldest_entry_evicted(clock):
    cache = ResultCache(max_entries=2, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert cache.get("c") == 3


def test_lock_for_is_per_key():
    cache = ResultCache()
    assert cache.lock_for("a") is cache.lock_for("a")
    assert cache.lock_for("a") is not cache.lock_for("b")


def test_clear(clock):
    cache = ResultCache(clock=clock)
    cache.set("a", 1)
    cache.clear()
    assert len(cache) == 0


@pytest.mark.parametrize("kwargs", [{"ttl_seconds": 0}, {"max_entries": 0}])
def test_rejects_bad_settings(kwargs):
    with pytest.raises(ValueError):
        ResultCache(**kwargs)
