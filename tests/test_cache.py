import pytest

from study_lexicon.cache import SignatureCache


def test_least_recently_used_entry_is_evicted() -> None:
    cache = SignatureCache(max_size=2)
    cache.put("a", ["alpha"])
    cache.put("b", ["beta"])
    assert cache.get("a") == ["alpha"]
    cache.put("c", ["gamma"])
    assert len(cache) == 2
    assert "b" not in cache
    assert "a" in cache and "c" in cache


def test_get_or_compute_calls_factory_once() -> None:
    cache = SignatureCache(max_size=4)
    calls = []

    def factory() -> list:
        calls.append(1)
        return ["cell", "nucleus"]

    assert cache.get_or_compute("key", factory) == ["cell", "nucleus"]
    assert cache.get_or_compute("key", factory) == ["cell", "nucleus"]
    assert len(calls) == 1
    assert cache.hits == 1
    assert cache.misses == 1


def test_cached_lists_are_copies() -> None:
    cache = SignatureCache()
    cache.put("key", ["cell"])
    cache.get("key").append("mutated")
    assert cache.get("key") == ["cell"]


def test_clear_and_invalid_size() -> None:
    cache = SignatureCache(max_size=1)
    cache.put("key", ["cell"])
    cache.clear()
    assert len(cache) == 0
    with pytest.raises(ValueError):
        SignatureCache(max_size=0)
