from application.services.cache import TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_entry_expires_after_ttl():
    clock = FakeClock()
    cache = TTLCache(ttl_s=60, clock=clock)
    cache.set("k", 1)
    clock.now = 59.9
    assert cache.get("k") == 1
    clock.now = 60.0
    assert cache.get("k") is None
    assert len(cache) == 0


def test_oldest_entry_is_evicted_when_full():
    cache = TTLCache(ttl_s=60, max_entries=2, clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert cache.get("c") == 3


def test_zero_ttl_disables_caching():
    cache = TTLCache(ttl_s=0, clock=FakeClock())
    cache.set("k", 1)
    assert cache.get("k") is None
    assert len(cache) == 0
