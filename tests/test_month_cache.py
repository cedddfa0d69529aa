# tests/test_month_cache.py

from concurrent.futures import ThreadPoolExecutor

import pytest

from hijricalc.core.errors import ConvergenceError
from hijricalc.engines.month_cache import TrueMonthStartCache


def test_idempotent_and_memoized(linear_moon):
    cache = TrueMonthStartCache(linear_moon)
    first = cache.true_month_start(17336)
    calls = linear_moon.calls
    assert cache.true_month_start(17336) == first
    assert linear_moon.calls == calls
    assert cache.hits == 1 and cache.misses == 1
    assert 17336 in cache


def test_strictly_increasing_with_lunar_lengths(linear_moon):
    cache = TrueMonthStartCache(linear_moon)
    starts = [cache(n) for n in range(0, 400)]
    diffs = [b - a for a, b in zip(starts, starts[1:])]
    assert all(d in (29, 30) for d in diffs)


def test_walk_direction_conventions(moon_factory):
    # estimate already waxing: walk back, start on the first waxing midnight
    assert TrueMonthStartCache(moon_factory(-0.5))(0) == 0
    # estimate still waning: walk forward, start the day after the first waxing midnight
    assert TrueMonthStartCache(moon_factory(0.4))(0) == 2


def test_negative_month_indices(linear_moon):
    cache = TrueMonthStartCache(linear_moon)
    assert cache(-1) < cache(0)
    assert cache(0) - cache(-1) in (29, 30)


def test_lru_bound(linear_moon):
    cache = TrueMonthStartCache(linear_moon, max_entries=3)
    for n in range(5):
        cache(n)
    assert len(cache) == 3
    assert 0 not in cache and 1 not in cache
    assert set(cache.snapshot()) == {2, 3, 4}


def test_runaway_search_raises():
    cache = TrueMonthStartCache(lambda ms: 10.0, max_search_days=5)
    with pytest.raises(ConvergenceError):
        cache(100)

    cache = TrueMonthStartCache(lambda ms: -10.0, max_search_days=5)
    with pytest.raises(RuntimeError):
        cache(100)
    assert len(cache) == 0


def test_clear(linear_moon):
    cache = TrueMonthStartCache(linear_moon)
    cache(5)
    cache.clear()
    assert len(cache) == 0
    assert cache.hits == 0 and cache.misses == 0


def test_concurrent_first_computation(linear_moon):
    cache = TrueMonthStartCache(linear_moon)
    keys = [n % 40 for n in range(400)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(cache.true_month_start, keys))

    serial = TrueMonthStartCache(linear_moon)
    assert results == [serial(k) for k in keys]
    assert len(cache) == 40
