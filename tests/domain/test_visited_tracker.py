import threading

from sitecheck.domain.visited_tracker import VisitedTracker


def test_url_not_visited_initially():
    tracker = VisitedTracker()
    assert not tracker.is_visited("https://example.com")


def test_claiming_url_makes_it_visited():
    tracker = VisitedTracker()
    assert tracker.try_claim("https://example.com")
    assert tracker.is_visited("https://example.com")


def test_different_urls_tracked_independently():
    tracker = VisitedTracker()
    tracker.try_claim("https://example.com")
    assert tracker.is_visited("https://example.com")
    assert not tracker.is_visited("https://other.com")


def test_reclaiming_same_url_fails_and_does_not_mutate():
    tracker = VisitedTracker()
    assert tracker.try_claim("https://example.com")
    assert not tracker.try_claim("https://example.com")
    assert not tracker.try_claim("https://example.com")
    assert tracker.claimed_count == 1


def test_claim_limit_rejects_new_urls_once_reached():
    tracker = VisitedTracker(max_claims=2)
    assert tracker.try_claim("https://example.com/a")
    assert tracker.try_claim("https://example.com/b")
    assert not tracker.try_claim("https://example.com/c")
    assert not tracker.is_visited("https://example.com/c")
    assert len(tracker) == 2


def test_non_positive_limit_means_unbounded():
    for limit in (None, 0, -5):
        tracker = VisitedTracker(max_claims=limit)
        assert tracker.max_claims is None
        for i in range(50):
            assert tracker.try_claim(f"https://example.com/{i}")


def test_concurrent_duplicate_claims_succeed_exactly_once():
    tracker = VisitedTracker()
    urls = [f"https://example.com/{i}" for i in range(200)]
    wins = []
    wins_lock = threading.Lock()
    barrier = threading.Barrier(16)

    def worker():
        barrier.wait()
        mine = [u for u in urls if tracker.try_claim(u)]
        with wins_lock:
            wins.extend(mine)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(wins) == sorted(urls)
    assert tracker.claimed_count == len(urls)


def test_concurrent_claims_respect_limit():
    tracker = VisitedTracker(max_claims=10)
    results = []
    results_lock = threading.Lock()

    def worker(offset):
        ok = [tracker.try_claim(f"https://example.com/{offset}-{i}") for i in range(20)]
        with results_lock:
            results.extend(ok)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 10
    assert tracker.claimed_count == 10
