from conftest import StubSearchClient

from bookrec.catalog.models import Item
from bookrec.recommendations.candidates import build_query, fetch_candidates, fetch_limit

DUNE = Item(id="b1", title="Dune", author="Frank Herbert", notes="Desert planet politics")
QUERY = "Dune Frank Herbert Desert planet politics"


def test_build_query_joins_fields():
    assert build_query(DUNE) == QUERY
    assert build_query(Item(id="x", title="Solo", author=None, notes=None)) == "Solo"
    assert build_query(Item(id="x", title="")) == ""


def test_fetch_limit_is_clamped():
    assert fetch_limit(1) == 20
    assert fetch_limit(5) == 30
    assert fetch_limit(16) == 96
    assert fetch_limit(50) == 100


def test_no_widening_when_primary_is_enough():
    client = StubSearchClient({QUERY: ["A", "B", "C"]})
    result = fetch_candidates(client, DUNE, 5, set())
    assert [c.title for c in result.candidates] == ["A", "B", "C"]
    assert client.calls == [(QUERY, 30)]


def test_widening_merges_new_unique_titles():
    client = StubSearchClient({QUERY: ["Dune Messiah"], "Dune": ["dune messiah", "Children of Dune", "God Emperor", "Heretics"]})
    result = fetch_candidates(client, DUNE, 5, set())
    assert client.calls == [(QUERY, 30), ("Dune", 60)]
    assert [c.title for c in result.candidates] == ["Dune Messiah", "Children of Dune", "God Emperor", "Heretics"]
    assert len(result.candidates) == 4


def test_widening_threshold_follows_top_k():
    # topK=1 needs a single primary candidate, so no widening happens.
    client = StubSearchClient({QUERY: ["Only One"]})
    fetch_candidates(client, DUNE, 1, set())
    assert len(client.calls) == 1


def test_widening_limit_is_capped():
    client = StubSearchClient({QUERY: []}, default=[])
    fetch_candidates(client, DUNE, 50, set())
    assert client.calls[1] == ("Dune", 200)


def test_primary_failure_still_widens():
    client = StubSearchClient({QUERY: None, "Dune": ["Children of Dune"]})
    result = fetch_candidates(client, DUNE, 5, set())
    assert [c.title for c in result.candidates] == ["Children of Dune"]
    assert not result.degraded


def test_all_searches_failing_is_degraded():
    client = StubSearchClient({}, default=None)
    result = fetch_candidates(client, DUNE, 5, set())
    assert result.degraded
    assert result.candidates == []


def test_empty_query_skips_fetching():
    client = StubSearchClient(default=["A"])
    result = fetch_candidates(client, Item(id="x", title=""), 5, set())
    assert result.candidates == []
    assert client.calls == []
