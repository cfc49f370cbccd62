"""
Unit tests for page requests, pages and pagination headers.
"""

import pytest
from django.http import QueryDict
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from src.apps.core.pagination import (
    InvalidPageRequestError,
    Page,
    Pageable,
    pagination_headers,
)


class TestPageable:
    def test_defaults(self):
        pageable = Pageable.from_query_params(QueryDict(""))
        assert pageable == Pageable(page=0, size=20, sort=(("id", "asc"),))
        assert pageable.offset == 0

    def test_reads_page_size_and_sort(self):
        params = QueryDict("page=2&size=5&sort=name,desc&sort=id")
        pageable = Pageable.from_query_params(params, sortable_fields=("id", "name"))

        assert pageable.page == 2
        assert pageable.size == 5
        assert pageable.offset == 10
        assert pageable.sort == (("name", "desc"), ("id", "asc"))
        assert pageable.ordering == ["-name", "id"]

    def test_id_is_appended_as_tie_breaker(self):
        pageable = Pageable(sort=(("name", "asc"),))
        assert pageable.ordering == ["name", "id"]

    def test_size_is_clamped(self):
        pageable = Pageable.from_query_params(QueryDict("size=500"), max_size=100)
        assert pageable.size == 100

    def test_default_size(self):
        pageable = Pageable.from_query_params(QueryDict(""), default_size=7)
        assert pageable.size == 7

    def test_last_page_within_offset_range(self):
        pageable = Pageable.from_query_params(QueryDict("page=461168601842738789&size=20"))
        assert pageable.offset == 461168601842738789 * 20

    @pytest.mark.parametrize(
        "query",
        [
            "page=abc",
            "page=-1",
            "size=0",
            "size=x",
            "sort=unknown,asc",
            "sort=id,sideways",
            "page=99999999999999999999",
            "page=461168601842738790&size=20",
        ],
    )
    def test_invalid_requests_are_rejected(self, query):
        with pytest.raises(InvalidPageRequestError):
            Pageable.from_query_params(QueryDict(query), sortable_fields=("id",))

    def test_str(self):
        assert str(Pageable(page=1, size=10, sort=(("id", "desc"),))) == (
            "Page request [number: 1, size 10, sort: id: DESC]"
        )


class TestPage:
    def test_navigation_properties(self):
        page = Page(content=[1, 2], total_elements=5, number=1, size=2)
        assert page.total_pages == 3
        assert page.has_next
        assert page.has_previous
        assert not page.is_first
        assert not page.is_last
        assert list(page) == [1, 2]
        assert len(page) == 2

    def test_empty_page(self):
        page = Page(content=[], total_elements=0, number=0, size=20)
        assert page.total_pages == 0
        assert page.is_first
        assert page.is_last


class TestPaginationHeaders:
    def _request(self, path):
        return Request(APIRequestFactory().get(path))

    def test_headers_for_a_middle_page(self):
        request = self._request("/api/blogs/?name.contains=a&page=1&size=2")
        page = Page(content=[1, 2], total_elements=5, number=1, size=2)

        headers = pagination_headers(request, page)

        assert headers["X-Total-Count"] == "5"
        links = headers["Link"].split(",")
        assert len(links) == 4
        assert 'rel="next"' in links[0] and "page=2" in links[0]
        assert 'rel="prev"' in links[1] and "page=0" in links[1]
        assert 'rel="last"' in links[2] and "page=2" in links[2]
        assert 'rel="first"' in links[3] and "page=0" in links[3]
        assert "name.contains=a" in links[0]
        assert links[0].startswith("<http://testserver/api/blogs/?")

    def test_headers_for_a_single_page(self):
        request = self._request("/api/blogs/")
        page = Page(content=[1], total_elements=1, number=0, size=20)

        headers = pagination_headers(request, page)

        assert headers["X-Total-Count"] == "1"
        assert 'rel="next"' not in headers["Link"]
        assert 'rel="prev"' not in headers["Link"]
        assert 'rel="last"' in headers["Link"]
