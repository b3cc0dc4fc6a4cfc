import pytest

from helpers import FakeClock
from zipmiles.cache import SECONDS_PER_DAY, DistanceCache, GeocodeCache, pair_key
from zipmiles.models import Coordinate, DistanceResult, GeocodeResult, SourceTier


def _geocode(code: str, resolved_at: float) -> GeocodeResult:
    return GeocodeResult(
        postal_code=code,
        coordinate=Coordinate(latitude=40.0, longitude=-75.0),
        city="Somewhere",
        region_code="PA",
        source_tier=SourceTier.PRIMARY,
        resolved_at=resolved_at,
    )


def test_geocode_cache_hit_within_retention() -> None:
    clock = FakeClock(start=1_000_000.0)
    cache = GeocodeCache(ttl_days=30, clock=clock)
    entry = _geocode("19103", resolved_at=clock.now)
    cache.put(entry)

    clock.now += 30 * SECONDS_PER_DAY
    assert cache.get("19103") == entry


def test_geocode_cache_stale_entry_is_a_miss_but_kept() -> None:
    clock = FakeClock(start=1_000_000.0)
    cache = GeocodeCache(ttl_days=30, clock=clock)
    cache.put(_geocode("19103", resolved_at=clock.now))

    clock.now += 30 * SECONDS_PER_DAY + 1
    assert cache.get("19103") is None
    # Lazily expired, not evicted.
    assert len(cache) == 1

    fresh = _geocode("19103", resolved_at=clock.now)
    cache.put(fresh)
    assert cache.get("19103") == fresh
    assert len(cache) == 1


def test_geocode_cache_clear() -> None:
    cache = GeocodeCache()
    cache.put(_geocode("19103", resolved_at=0))
    cache.clear()
    assert len(cache) == 0


def test_pair_key_is_order_independent() -> None:
    assert pair_key("90210", "10001") == pair_key("10001", "90210") == ("10001", "90210")


def test_distance_cache_shares_slot_for_both_directions() -> None:
    cache = DistanceCache()
    result = DistanceResult(postal_codes=("10001", "90210"), miles=2812.3)
    cache.put(result)

    assert cache.get("90210", "10001") == result
    assert cache.get("10001", "90210") == result
    assert len(cache) == 1


def test_distance_cache_clears_everything_when_full() -> None:
    cache = DistanceCache(max_entries=3)
    for i, dest in enumerate(("10002", "10003", "10004")):
        cache.put(DistanceResult(postal_codes=("10001", dest), miles=float(i)))
    assert len(cache) == 3

    cache.put(DistanceResult(postal_codes=("10001", "10005"), miles=9.0))

    assert len(cache) == 1
    assert cache.get("10001", "10002") is None
    assert cache.get("10001", "10005").miles == 9.0


def test_distance_cache_overwrite_at_capacity_keeps_entries() -> None:
    cache = DistanceCache(max_entries=2)
    cache.put(DistanceResult(postal_codes=("10001", "10002"), miles=1.0))
    cache.put(DistanceResult(postal_codes=("10001", "10003"), miles=2.0))
    cache.put(DistanceResult(postal_codes=("10002", "10001"), miles=1.5))

    assert len(cache) == 2
    assert cache.get("10001", "10002").miles == 1.5


def test_distance_statistics() -> None:
    cache = DistanceCache()
    empty = cache.statistics()
    assert (empty.count, empty.average, empty.minimum, empty.maximum) == (0, 0.0, 0.0, 0.0)

    for dest, miles in (("10002", 10.0), ("10003", 20.0), ("10004", 60.0)):
        cache.put(DistanceResult(postal_codes=("10001", dest), miles=miles))

    stats = cache.statistics()
    assert stats.count == 3
    assert stats.average == pytest.approx(30.0)
    assert stats.minimum == 10.0
    assert stats.maximum == 60.0


def test_distance_cache_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        DistanceCache(max_entries=0)
