"""Tests for the generic filter/search/sort/paginate pipeline."""

import math
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.application.services.query_pipeline import (
    FieldFilter,
    QuerySpec,
    build_filters,
    paginate,
    run_query,
    sort_records,
)
from app.core.exceptions import ValidationException
from app.domain.schemas.common import ListParams

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)

ARTICLE_QUERY = QuerySpec(
    search_fields=("title", "body"),
    sort_fields={"createdAt": "created_at", "title": "title", "score": "score"},
    default_sort="createdAt",
    default_order="desc",
    date_fields=frozenset({"created_at"}),
)


def record(i, **overrides):
    data = {
        "id": i,
        "title": f"Title {i}",
        "body": "",
        "score": i % 3,
        "tags": [],
        "created_at": BASE + timedelta(hours=i),
    }
    data.update(overrides)
    return SimpleNamespace(**data)


@pytest.fixture
def records():
    return [record(i) for i in range(1, 24)]


class TestPagination:
    @pytest.mark.parametrize("total,limit", [(0, 10), (1, 10), (10, 10), (23, 10), (23, 1), (5, 7)])
    def test_total_pages_formula(self, total, limit):
        """totalPages is ceil(total / limit)."""
        page = paginate(list(range(total)), 1, limit)
        assert page.total_pages == math.ceil(total / limit)
        assert page.total_items == total
        assert page.items_per_page == limit

    def test_pages_partition_the_result(self, records):
        """Consecutive pages are disjoint and together cover every record."""
        seen = []
        for number in range(1, 4):
            page = run_query(records, ARTICLE_QUERY, ListParams(page=number, limit=10, sort_by="score", sort_order="asc"))
            seen.extend(r.id for r in page.items)
        assert len(seen) == len(records)
        assert set(seen) == {r.id for r in records}

    def test_out_of_range_page_is_empty(self, records):
        page = run_query(records, ARTICLE_QUERY, ListParams(page=99, limit=10))
        assert page.items == []
        assert page.current_page == 99
        assert page.total_items == len(records)

    @pytest.mark.parametrize("number", [0, -1])
    def test_page_below_one_is_empty(self, records, number):
        page = run_query(records, ARTICLE_QUERY, ListParams(page=number, limit=10))
        assert page.items == []

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit_rejected(self, records, limit):
        with pytest.raises(ValidationException) as exc_info:
            run_query(records, ARTICLE_QUERY, ListParams(limit=limit))
        assert "limit" in exc_info.value.details


class TestSorting:
    def test_default_sort_is_newest_first(self, records):
        page = run_query(records, ARTICLE_QUERY, ListParams(limit=3))
        assert [r.id for r in page.items] == [23, 22, 21]

    def test_sort_is_stable(self, records):
        """Equal keys keep insertion order in both directions."""
        asc = sort_records(records, "score", "asc")
        desc = sort_records(records, "score", "desc")
        for ordered in (asc, desc):
            for score in (0, 1, 2):
                ids = [r.id for r in ordered if r.score == score]
                assert ids == sorted(ids)

    def test_missing_values_sort_last(self):
        rows = [record(1, score=None), record(2, score=5), record(3, score=1)]
        assert [r.id for r in sort_records(rows, "score", "asc")] == [3, 2, 1]
        assert [r.id for r in sort_records(rows, "score", "desc")] == [2, 3, 1]

    def test_dates_compare_by_instant(self):
        naive = record(1, created_at=datetime(2024, 1, 1, 12, 0))
        aware = record(2, created_at=datetime(2024, 1, 1, 13, 0, tzinfo=timezone(timedelta(hours=2))))
        ordered = sort_records([naive, aware], "created_at", "asc", is_date=True)
        # 13:00+02:00 is 11:00 UTC, before the naive 12:00 (read as UTC)
        assert [r.id for r in ordered] == [2, 1]

    def test_unknown_sort_field_rejected(self, records):
        with pytest.raises(ValidationException) as exc_info:
            run_query(records, ARTICLE_QUERY, ListParams(sort_by="password"))
        assert "sortBy" in exc_info.value.details

    def test_bad_sort_order_rejected(self, records):
        with pytest.raises(ValidationException) as exc_info:
            run_query(records, ARTICLE_QUERY, ListParams(sort_order="sideways"))
        assert "sortOrder" in exc_info.value.details

    def test_sort_order_is_case_insensitive(self, records):
        page = run_query(records, ARTICLE_QUERY, ListParams(sort_by="title", sort_order="ASC", limit=2))
        assert [r.title for r in page.items] == ["Title 1", "Title 10"]


class TestFiltersAndSearch:
    def test_build_filters_skips_absent_values(self):
        filters = build_filters({"a": (None, "exact"), "b": ("", "exact"), "c": ([], "any"), "d": (0, "exact")})
        assert filters == [FieldFilter("d", 0, "exact")]

    def test_any_mode_matches_on_intersection(self):
        f = FieldFilter("tags", ["news", "events"], "any")
        assert f.matches(SimpleNamespace(tags=["events", "misc"]))
        assert not f.matches(SimpleNamespace(tags=["misc"]))
        assert not f.matches(SimpleNamespace(tags=None))

    def test_contains_is_case_insensitive(self):
        f = FieldFilter("location", "berlin", "contains")
        assert f.matches(SimpleNamespace(location="East Berlin"))
        assert not f.matches(SimpleNamespace(location=None))

    def test_min_max_bounds_are_inclusive(self):
        assert FieldFilter("price", 10, "min").matches(SimpleNamespace(price=10))
        assert FieldFilter("price", 10, "max").matches(SimpleNamespace(price=10))
        assert not FieldFilter("price", 10, "min").matches(SimpleNamespace(price=None))

    def test_filters_compose_with_and(self, records):
        filters = [FieldFilter("score", 1), FieldFilter("id", 4)]
        page = run_query(records, ARTICLE_QUERY, ListParams(limit=50), filters)
        assert [r.id for r in page.items] == [4]

    def test_search_any_field_case_insensitive(self):
        rows = [record(1, title="Garden party"), record(2, body="bring a GARDEN chair"), record(3)]
        page = run_query(rows, ARTICLE_QUERY, ListParams(search="garden", sort_order="asc"))
        assert [r.id for r in page.items] == [1, 2]

    def test_visibility_runs_before_counting(self, records):
        page = run_query(records, ARTICLE_QUERY, ListParams(limit=5), visible=lambda r: r.id % 2 == 0)
        assert page.total_items == 11
        assert all(r.id % 2 == 0 for r in page.items)
