"""Tests for the response cache."""

from tasktrack.application.assistant.response_cache import ResponseCache


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


class TestResponseCache:
    """Test ResponseCache."""

    def test_key_normalizes_message(self):
        assert ResponseCache.key("individual", "  How Am I Doing? ") == (
            "individual",
            "how am i doing?",
        )

    def test_key_separates_roles(self):
        assert ResponseCache.key("individual", "hi") != ResponseCache.key("counselor", "hi")

    def test_key_is_shared_across_users_with_same_role(self):
        """Entries are keyed by role and message only, so replies are shared."""
        clock = FakeClock()
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        cache.put(ResponseCache.key("individual", "How am I doing?"), "You finished 3 tasks.")

        assert ResponseCache.key("individual", " how am i doing? ") == (
            "individual",
            "how am i doing?",
        )
        assert cache.get(ResponseCache.key("individual", "HOW AM I DOING?")) == "You finished 3 tasks."

    def test_hit_within_ttl(self):
        clock = FakeClock()
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        key = ResponseCache.key("individual", "hello")

        cache.put(key, "reply")
        clock.now = 59.0

        assert cache.get(key) == "reply"

    def test_expired_at_61_seconds(self):
        clock = FakeClock()
        cache = ResponseCache(ttl_seconds=60, clock=clock)
        key = ResponseCache.key("individual", "hello")

        cache.put(key, "reply")
        clock.now = 61.0

        assert cache.get(key) is None
        assert len(cache) == 0

    def test_miss(self):
        cache = ResponseCache()
        assert cache.get(("individual", "unknown")) is None

    def test_bounded_by_lru(self):
        cache = ResponseCache(max_entries=2, clock=FakeClock())
        cache.put(("individual", "a"), "A")
        cache.put(("individual", "b"), "B")
        cache.get(("individual", "a"))
        cache.put(("individual", "c"), "C")

        assert len(cache) == 2
        assert cache.get(("individual", "a")) == "A"
        assert cache.get(("individual", "b")) is None
