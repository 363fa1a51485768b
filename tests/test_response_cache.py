import unittest

from src.infrastructure.response_cache import ResponseCache


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestResponseCache(unittest.TestCase):
    def test_entry_expires_after_ttl(self) -> None:
        clock = _FakeClock()
        cache = ResponseCache(ttl_seconds=300, clock=clock)
        cache.set("https://api.github.com/repos/a/b", {"stars": 1})

        clock.now += 299
        self.assertEqual(cache.get("https://api.github.com/repos/a/b"), {"stars": 1})

        clock.now += 1
        self.assertIsNone(cache.get("https://api.github.com/repos/a/b"))
        self.assertEqual(len(cache), 0)

    def test_caches_are_independent(self) -> None:
        first = ResponseCache()
        second = ResponseCache()
        first.set("key", "value")

        self.assertIsNone(second.get("key"))

    def test_clear(self) -> None:
        cache = ResponseCache()
        cache.set("key", [1, 2])
        cache.clear()

        self.assertIsNone(cache.get("key"))
