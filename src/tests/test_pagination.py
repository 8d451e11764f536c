"""Tests for pagination reconciliation."""

import pytest
from pydantic import ValidationError
from requests.structures import CaseInsensitiveDict

from fetching.pagination import PaginationState, header_int, reconcile


class TestReconcile:
    def test_total_count_is_authoritative(self):
        state = reconcile({"X-Total-Count": "47", "X-Total-Pages": "9"}, 10, 1, 10)
        assert state.total_pages == 5
        assert state.total_count == 47

    def test_out_of_range_page_resets_to_first(self):
        state = reconcile({"X-Total-Count": "47"}, 0, 9, 10)
        assert state.page == 1
        assert state.total_pages == 5

    def test_out_of_range_page_can_clamp(self):
        state = reconcile({"X-Total-Count": "47"}, 0, 9, 10, out_of_range="clamp")
        assert state.page == 5

    def test_header_names_are_case_insensitive(self):
        assert reconcile({"x-total-count": "25"}, 10, 2, 10).total_pages == 3
        assert reconcile(CaseInsensitiveDict({"X-TOTAL-COUNT": "25"}), 10, 2, 10).total_pages == 3

    def test_total_pages_header_used_when_no_count(self):
        state = reconcile({"X-Total-Pages": "4"}, 10, 2, 10)
        assert state.total_pages == 4
        assert state.page == 2
        assert state.total_count == 40

    def test_total_pages_header_on_last_page_counts_observed_rows(self):
        state = reconcile({"X-Total-Pages": "3"}, 5, 3, 10)
        assert state.total_pages == 3
        assert state.total_count == 25
        assert state.summary() == "Showing 21 to 25 of 25 items."

    def test_total_pages_header_out_of_range_page(self):
        state = reconcile({"X-Total-Pages": "3"}, 0, 7, 10)
        assert state.page == 1
        assert state.total_count == 30

    def test_full_page_without_headers_assumes_another_page(self):
        state = reconcile({}, 10, 1, 10)
        assert state.total_pages == 2
        assert state.total_count == 10

    def test_partial_page_without_headers_keeps_requested_page(self):
        state = reconcile(None, 4, 3, 10)
        assert state.page == 3
        assert state.total_pages == 3
        assert state.total_count == 24

    def test_empty_result(self):
        state = reconcile({}, 0, 1, 10)
        assert (state.page, state.total_pages, state.total_count) == (1, 1, 0)
        assert state.summary() == "Showing 0 to 0 of 0 items."

    def test_server_page_size_and_current_page(self):
        state = reconcile({"X-Page-Size": "25", "X-Current-Page": "1", "X-Total-Count": "60"}, 25, 2, 10)
        assert state.page_size == 25
        assert state.page == 1
        assert state.total_pages == 3

    @pytest.mark.parametrize("page", [0, -4])
    def test_never_below_one(self, page):
        state = reconcile({}, 0, page, 0)
        assert state.page == 1
        assert state.page_size == 1
        assert state.total_pages == 1


def test_header_int_ignores_garbage():
    assert header_int({"X-Total-Count": "abc"}, "X-Total-Count") == 0
    assert header_int({"X-Total-Count": "-3"}, "X-Total-Count") == 0
    assert header_int({"X-Alt": " 12 "}, "X-Total-Count", "x-alt") == 12
    assert header_int(None, "X-Total-Count") == 0


class TestPaginationState:
    def test_summary_and_label(self):
        state = PaginationState(page=2, page_size=10, total_pages=3, total_count=25)
        assert state.summary() == "Showing 11 to 20 of 25 items."
        assert state.label() == "Page 2 of 3"
        assert state.has_next and state.has_previous

    def test_last_page_summary(self):
        state = PaginationState(page=3, page_size=10, total_pages=3, total_count=25)
        assert state.summary("locations") == "Showing 21 to 25 of 25 locations."
        assert not state.has_next

    def test_rejects_non_positive_values(self):
        with pytest.raises(ValidationError):
            PaginationState(page=0)
        with pytest.raises(ValidationError):
            PaginationState(total_count=-1)
