"""
Unit tests for the blog repositories.
"""

import pytest
from django.db.models import Q

from src.apps.blog.models import Blog
from src.apps.blog.repositories import BlogRepository, PostRepository
from src.apps.core.pagination import Pageable
from src.apps.core.query import Specification

from .factories import create_blog, create_post, create_tag


@pytest.mark.django_db
class TestBlogRepository:
    """
    Tests for the storage access of blogs.
    """

    def setup_method(self):
        self.repository = BlogRepository()

    def test_save_assigns_an_id(self):
        blog = self.repository.save(Blog(name="Engineering", handle="eng"))

        assert blog.id is not None
        assert Blog.objects.count() == 1

    def test_save_replaces_by_identity(self):
        blog = create_blog()
        blog.name = "Renamed"

        self.repository.save(blog)

        assert Blog.objects.count() == 1
        assert Blog.objects.get(pk=blog.pk).name == "Renamed"

    def test_find_by_id(self):
        blog = create_blog()

        assert self.repository.find_by_id(blog.id) == blog
        assert self.repository.find_by_id(blog.id + 1) is None
        assert self.repository.find_by_id(None) is None

    def test_exists_by_id(self):
        blog = create_blog()

        assert self.repository.exists_by_id(blog.id)
        assert not self.repository.exists_by_id(blog.id + 1)

    def test_delete_by_id_is_idempotent(self):
        blog = create_blog()

        self.repository.delete_by_id(blog.id)
        self.repository.delete_by_id(blog.id)

        assert self.repository.count() == 0

    def test_find_all_page(self):
        blogs = [create_blog(name=f"blog-{i}") for i in range(5)]

        page = self.repository.find_all_page(Pageable(page=1, size=2))

        assert page.content == blogs[2:4]
        assert page.total_elements == 5
        assert page.total_pages == 3

    def test_find_all_page_sorted(self):
        b = create_blog(name="b")
        a = create_blog(name="a")
        c = create_blog(name="c")

        page = self.repository.find_all_page(Pageable(sort=(("name", "desc"),)))

        assert page.content == [c, b, a]

    def test_page_past_the_end_is_empty(self):
        create_blog()

        page = self.repository.find_all_page(Pageable(page=3, size=10))

        assert page.content == []
        assert page.total_elements == 1

    def test_matching_operations(self):
        match = create_blog(name="match")
        create_blog(name="other")
        specification = Specification.where().and_(Q(name="match"))

        assert self.repository.find_all_matching(specification) == [match]
        assert self.repository.count_matching(specification) == 1
        page = self.repository.find_page_matching(specification, Pageable())
        assert page.content == [match]
        assert page.total_elements == 1


@pytest.mark.django_db
class TestPostRepository:
    def test_distinct_suppresses_join_duplicates(self):
        repository = PostRepository()
        tags = [create_tag(), create_tag()]
        post = create_post(tags=tags)
        tag_ids = [t.id for t in tags]

        joined = Specification.where().and_(Q(tags__id__in=tag_ids))
        distinct = Specification.where(distinct=True).and_(Q(tags__id__in=tag_ids))

        assert repository.count_matching(joined) == 2
        assert repository.count_matching(distinct) == 1
        assert repository.find_all_matching(distinct) == [post]
