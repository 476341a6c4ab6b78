"""
Tests for the TTL response cache and cache keys.
"""
from whoiswho.core.cache import TTLCache, make_cache_key


def test_value_served_until_ttl_expires(clock):
    cache = TTLCache(300, clock=clock)
    cache.set("user:fid=3", {"fid": 3})

    clock.advance(299)
    assert cache.get("user:fid=3") == {"fid": 3}

    clock.advance(1)
    assert cache.get("user:fid=3") is None
    assert len(cache) == 0


def test_set_restarts_ttl(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("k", 1)
    clock.advance(50)
    cache.set("k", 2)
    clock.advance(50)
    assert cache.get("k") == 2


def test_missing_key():
    assert TTLCache(60).get("nope") is None


def test_cache_key_sorts_params_and_skips_none():
    assert make_cache_key("user", viewer_fid=None, fid=3) == "user:fid=3"
    assert make_cache_key("/search", q="dan", limit=10) == "search:limit=10:q=dan"
    assert make_cache_key("user", fid=3, viewer_fid=7) != make_cache_key("user", fid=3)
