import pytest

from simpsons.analytics import Analytics


def test_cache_hit_rate_mixed():
    a = Analytics(total_tokens_in=800, total_cache_write=200, total_cache_read=100)
    rate = a.cache_hit_rate()
    assert 0.090 <= rate <= 0.092


def test_cache_hit_rate_heavy_cache_is_not_full():
    a = Analytics(total_tokens_in=50, total_cache_write=500, total_cache_read=450)
    assert a.cache_hit_rate() == pytest.approx(0.45, abs=0.001)


def test_cache_hit_rate_empty():
    assert Analytics().cache_hit_rate() == 0


def test_cache_hit_rate_all_cached():
    a = Analytics(total_cache_read=10)
    assert a.cache_hit_rate() == 1.0