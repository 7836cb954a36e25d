from sitecheck.domain import CrawlSession, SeedUrl, VisitedTracker
from sitecheck.services.crawl_policy import CrawlPolicy


def _session(seed="https://a.com/x", max_claims=None):
    return CrawlSession(SeedUrl.parse(seed), visited_tracker=VisitedTracker(max_claims=max_claims))


def test_scheme_mismatch_is_skipped():
    assert CrawlPolicy().should_skip_due_to_scope("http://a.com/y", _session())


def test_case_insensitive_host_is_in_scope():
    assert not CrawlPolicy().should_skip_due_to_scope("https://A.COM/y", _session())


def test_external_host_is_skipped():
    assert CrawlPolicy().should_skip_due_to_scope("https://b.com/y", _session())


def test_claim_returns_normalized_key_once():
    policy = CrawlPolicy()
    session = _session()
    assert policy.claim("https://A.com/y#frag", session) == "https://a.com/y"
    assert policy.claim("https://a.com/y", session) is None
    assert policy.claim("https://a.com/y#other", session) is None


def test_claim_honours_limit():
    policy = CrawlPolicy()
    session = _session(max_claims=1)
    assert policy.claim("https://a.com/1", session) == "https://a.com/1"
    assert policy.claim("https://a.com/2", session) is None


def test_unparsable_url_is_not_claimed():
    policy = CrawlPolicy()
    session = _session()
    assert policy.claim("https://[::1/broken", session) is None
    assert session.visited_tracker.claimed_count == 0
