from algoprep.services.review_cache import ReviewCache, cache_key, hash_code


class Clock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_hash_matches_java_string_hash():
    assert hash_code("") == 0
    assert hash_code("a") == 97
    assert hash_code("hello") == 99162322
    # wraps to a negative int32
    assert hash_code("polygenelubricants") == -2147483648


def test_hash_uses_utf16_code_units():
    # one astral char is two surrogate units: 0xD83D, 0xDE00
    assert hash_code("\U0001F600") == 0xD83D * 31 + 0xDE00


def test_key_ignores_language():
    code = "def solve(nums): return nums"
    assert cache_key("Two Sum", code) == f"Two Sum-{hash_code(code)}"


def test_hit_within_ttl_and_miss_after():
    clock = Clock()
    cache = ReviewCache(ttl_sec=1800, sweep_threshold=100, clock=clock)
    review = {"score": 90}
    cache.put("k", review)

    clock.now += 1799
    assert cache.get("k") is review

    clock.now += 1
    assert cache.get("k") is None


def test_put_sweeps_expired_entries_past_threshold():
    clock = Clock()
    cache = ReviewCache(ttl_sec=10, sweep_threshold=2, clock=clock)
    cache.put("old", {"n": 1})
    clock.now += 11
    cache.put("a", {"n": 2})
    assert len(cache) == 2  # at the threshold, nothing swept yet

    cache.put("b", {"n": 3})
    assert len(cache) == 2
    assert cache.get("old") is None
    assert cache.get("a") == {"n": 2}


def test_explicit_sweep_reports_removed_count():
    clock = Clock()
    cache = ReviewCache(ttl_sec=10, sweep_threshold=100, clock=clock)
    cache.put("a", {})
    cache.put("b", {})
    clock.now += 60
    cache.put("c", {})
    assert cache.sweep() == 2
    assert len(cache) == 1
