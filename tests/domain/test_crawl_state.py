from linkcheck.domain.crawl_state import CrawlState


def test_from_url_keeps_port_in_domain():
    state = CrawlState.from_url("http://127.0.0.1:8080/index.html")
    assert state.scheme == "http"
    assert state.domain == "127.0.0.1:8080"
    assert state.root_url == "http://127.0.0.1:8080"


def test_internal_links_match_domain():
    state = CrawlState(scheme="https", domain="example.com")
    assert state.is_internal("https://example.com/about")
    assert state.is_internal("http://EXAMPLE.com")
    assert not state.is_internal("https://blog.example.com/")
    assert not state.is_internal("https://other.org/example.com")


def test_unresolved_state_treats_everything_as_external():
    state = CrawlState()
    assert not state.is_resolved
    assert not state.is_internal("https://example.com")
