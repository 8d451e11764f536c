"""Tests for the list page state holder."""

import threading

import pytest

from exceptions import MutationError
from pages.list_page import ListPage


def _rows(start, stop):
    return [{"id": i, "name": f"Site {i:02d}"} for i in range(start, stop)]


def test_stale_response_never_overwrites_newer_one(client_for, make_response):
    started = threading.Event()
    release = threading.Event()

    def handler(method, url, **kw):
        if "?page=1&" in url:
            started.set()
            release.wait(5)
            return make_response(body=_rows(1, 11), headers={"X-Total-Count": "25"})
        return make_response(body=_rows(11, 21), headers={"X-Total-Count": "25"})

    client, _ = client_for("location", handler)
    page = ListPage(client)
    outcome = []
    slow = threading.Thread(target=lambda: outcome.append(page.load(1)))
    slow.start()
    assert started.wait(5)

    assert page.load(2) is True
    release.set()
    slow.join(5)

    assert outcome == [False]
    assert page.current_page == 2
    assert page.records[0]["id"] == "11"
    assert page.loading is False


def test_pagination_label_and_summary(client_for, make_response):
    client, _ = client_for(
        "location", lambda method, url, **kw: make_response(body=_rows(11, 21), headers={"X-Total-Count": "25"})
    )
    page = ListPage(client)
    assert page.load(2)
    assert page.pagination.label() == "Page 2 of 3"
    assert page.summary() == "Showing 11 to 20 of 25 items."


def test_delete_refetches_current_page(client_for, make_response):
    rows = _rows(1, 4)

    def handler(method, url, **kw):
        if method == "DELETE":
            rows[:] = [r for r in rows if str(r["id"]) != url.rsplit("/", 1)[-1]]
            return make_response(status=204)
        return make_response(body=rows)

    client, transport = client_for("location", handler)
    page = ListPage(client)
    page.load(1)
    assert "2" in [r["id"] for r in page.records]
    gets_before = sum(1 for method, _, _ in transport.calls if method == "GET")

    assert page.delete("2") is True
    gets_after = sum(1 for method, _, _ in transport.calls if method == "GET")
    assert gets_after == gets_before + 1
    assert ("DELETE", "http://localhost:5092/api/location/2") == transport.calls[gets_before][:2]
    assert [r["id"] for r in page.records] == ["1", "3"]


def test_failed_delete_does_not_refetch(client_for, make_response):
    def handler(method, url, **kw):
        return make_response(status=500) if method == "DELETE" else make_response(body=_rows(1, 4))

    client, transport = client_for("location", handler)
    page = ListPage(client)
    page.load(1)
    calls = len(transport.calls)
    with pytest.raises(MutationError):
        page.delete("2")
    assert all(method == "DELETE" for method, _, _ in transport.calls[calls:])


def test_vanished_page_falls_back_to_first(client_for, make_response):
    client, transport = client_for(
        "location", lambda method, url, **kw: make_response(body=[], headers={"X-Total-Count": "20"})
    )
    page = ListPage(client)
    assert page.load(3) is True
    assert page.current_page == 1
    assert transport.urls[-1] == "http://localhost:5092/api/location?page=1&limit=10"


def test_error_when_nothing_loaded(client_for, make_response):
    client, _ = client_for("location", lambda method, url, **kw: make_response(status=502))
    page = ListPage(client)
    assert page.load(1) is False
    assert page.records == []
    assert page.error == "No locations found. Please check your connection and try again."
    assert page.loading is False


def test_failed_refresh_keeps_previous_rows(client_for, make_response):
    healthy = {"up": True}

    def handler(method, url, **kw):
        return make_response(body=_rows(1, 4)) if healthy["up"] else make_response(status=503)

    client, _ = client_for("location", handler)
    page = ListPage(client)
    page.load(1)
    healthy["up"] = False
    assert page.refresh() is False
    assert len(page.records) == 3
    assert page.error is None


class TestVisibleRows:
    @pytest.fixture
    def page(self, client_for, make_response):
        body = [
            {"id": 1, "name": "beta depot", "createdAt": "2024-01-02"},
            {"id": 2, "name": "Alpha yard", "createdAt": "2024-03-01"},
            {"id": 3, "name": "Gamma depot", "createdAt": "2023-12-31"},
        ]
        client, _ = client_for("asset", lambda method, url, **kw: make_response(body=body))
        page = ListPage(client)
        page.load(1)
        return page

    def test_newest_first_by_default(self, page):
        assert [r["id"] for r in page.visible_rows()] == ["2", "1", "3"]

    def test_name_sort_is_case_insensitive(self, page):
        page.set_sort("name-asc")
        assert [r["name"] for r in page.visible_rows()] == ["Alpha yard", "beta depot", "Gamma depot"]
        page.set_sort("name-desc")
        assert page.visible_rows()[0]["name"] == "Gamma depot"

    def test_query_filters_on_display_name(self, page):
        page.set_query("DEPOT")
        page.set_sort("oldest")
        assert [r["id"] for r in page.visible_rows()] == ["3", "1"]

    def test_unknown_sort(self, page):
        with pytest.raises(ValueError):
            page.set_sort("random")


def test_page_navigation(client_for, make_response):
    client, transport = client_for(
        "location", lambda method, url, **kw: make_response(body=_rows(1, 11), headers={"X-Total-Count": "25"})
    )
    page = ListPage(client)
    page.load(1)
    assert page.previous_page() is False
    assert page.next_page() is True
    assert page.current_page == 2
    assert page.set_page_size(25) is True
    assert page.current_page == 1
    assert transport.urls[-1].endswith("?page=1&limit=25")


def test_close_cancels_inflight_load(client_for, make_response):
    started = threading.Event()
    release = threading.Event()

    def handler(method, url, **kw):
        started.set()
        release.wait(5)
        return make_response(body=_rows(1, 3))

    client, _ = client_for("location", handler)
    page = ListPage(client)
    outcome = []
    worker = threading.Thread(target=lambda: outcome.append(page.load(1)))
    worker.start()
    assert started.wait(5)
    page.close()
    release.set()
    worker.join(5)
    assert outcome == [False]
    assert page.records == []
