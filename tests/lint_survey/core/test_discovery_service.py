"""Tests for DiscoveryService pagination."""
from lint_survey.core.services import DiscoveryService

from fakes import FakeLogger, FakeSearch, make_ref


QUERY = "filename:ui5.yaml path:/"


def _service(search, logger=None, sleeps=None, page_size=100):
    return DiscoveryService(
        search=search,
        logger=logger or FakeLogger(),
        query=QUERY,
        page_size=page_size,
        delay_seconds=1.0,
        sleep=(sleeps.append if sleeps is not None else lambda _: None),
    )


def test_discover_paginates_until_empty_page():
    search = FakeSearch({1: [make_ref(1), make_ref(2)], 2: [make_ref(3)]})
    sleeps = []

    refs = _service(search, sleeps=sleeps).discover(100)

    assert [r.id for r in refs] == [1, 2, 3]
    assert [call[2] for call in search.search_calls] == [1, 2, 3]
    assert all(call[0] == QUERY and call[1] == 100 for call in search.search_calls)
    # one pause after each non-empty page, none after the empty one
    assert sleeps == [1.0, 1.0]


def test_discover_deduplicates_by_id_across_pages():
    search = FakeSearch({
        1: [make_ref(1), make_ref(2), make_ref(1)],
        2: [make_ref(2), make_ref(3)],
    })

    refs = _service(search).discover(100)

    assert [r.id for r in refs] == [1, 2, 3]


def test_discover_caps_at_limit_and_stops_requesting():
    pages = {p: [make_ref(p * 100 + i) for i in range(100)] for p in range(1, 5)}
    search = FakeSearch(pages)
    sleeps = []

    refs = _service(search, sleeps=sleeps).discover(150)

    assert len(refs) == 150
    assert [call[2] for call in search.search_calls] == [1, 2]
    assert sleeps == [1.0]


def test_discover_failed_page_keeps_earlier_results():
    search = FakeSearch({1: [make_ref(1), make_ref(2)], 3: [make_ref(3)]}, fail_pages=[2])
    logger = FakeLogger()

    refs = _service(search, logger=logger).discover(100)

    assert [r.id for r in refs] == [1, 2]
    assert [call[2] for call in search.search_calls] == [1, 2]
    assert "search_page_failed" in logger.messages("exception")


def test_discover_first_page_failure_returns_empty():
    search = FakeSearch({}, fail_pages=[1])

    assert _service(search).discover(10) == []


def test_discover_passes_page_size():
    search = FakeSearch({1: [make_ref(1)]})

    _service(search, page_size=25).discover(10)

    assert search.search_calls[0][1] == 25
