"""CachedScalar 엔티티 단위 테스트."""

from spline_tracker.domain.entities.cached_scalar import CachedScalar


class TestCachedScalar:
    def test_starts_unset(self):
        cache = CachedScalar()
        assert not cache.is_set
        assert cache.get() is None

    def test_set_returns_value(self):
        cache = CachedScalar()
        assert cache.set(4.2) == 4.2
        assert cache.is_set
        assert cache.get() == 4.2

    def test_zero_is_a_valid_cached_value(self):
        cache = CachedScalar()
        cache.set(0.0)
        assert cache.get() == 0.0

    def test_invalidate(self):
        cache = CachedScalar()
        cache.set(1.0)
        cache.invalidate()
        assert not cache.is_set
        assert cache.get() is None
