from cavernforge.world.api_helpers import cache
from cavernforge.world.api_helpers.cache import active_config, clear_world_cache, get_cached_world


def test_same_key_returns_same_world(small_config):
    assert get_cached_world(5, small_config) is get_cached_world(5, small_config)


def test_cache_can_be_disabled(small_config, monkeypatch):
    monkeypatch.setenv("WORLD_DISABLE_CACHE", "1")
    a = get_cached_world(5, small_config)
    b = get_cached_world(5, small_config)
    assert a is not b
    assert a.content_hash() == b.content_hash()


def test_cache_is_bounded(small_config):
    for seed in range(cache._WORLD_CACHE_MAX + 3):
        get_cached_world(seed, small_config)
    assert len(cache._world_cache) == cache._WORLD_CACHE_MAX
    # oldest entries are evicted first
    assert (0, small_config) not in cache._world_cache
    clear_world_cache()
    assert cache._world_cache == {}


def test_active_config_prefers_app_setting(small_config):
    assert active_config() is small_config


def test_cache_hit_does_not_refresh_entry(small_config):
    for seed in range(cache._WORLD_CACHE_MAX):
        get_cached_world(seed, small_config)
    # a hit on the oldest entry keeps its insertion slot
    get_cached_world(0, small_config)
    get_cached_world(cache._WORLD_CACHE_MAX, small_config)
    assert (0, small_config) not in cache._world_cache
    assert (1, small_config) in cache._world_cache
