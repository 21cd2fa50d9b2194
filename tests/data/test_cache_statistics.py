"""Tests for cache statistics."""

from app.data import CacheStatistics


def test_hit_rate() -> None:
    stats = CacheStatistics()
    assert stats.hit_rate == 0.0

    stats.record_miss()
    stats.record_hit(bytes_read=10)
    stats.record_hit(bytes_read=5)

    assert stats.total_requests == 3
    assert round(stats.hit_rate, 2) == 66.67
    assert stats.to_dict()["hit_rate"] == "66.67%"
    assert stats.total_bytes_read == 15


def test_reset() -> None:
    stats = CacheStatistics()
    stats.record_set(bytes_written=100)
    stats.record_error()

    stats.reset()

    assert stats.sets == 0
    assert stats.errors == 0
    assert stats.total_bytes_written == 0
