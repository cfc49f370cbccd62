"""
Unit tests for the blog entity services.
"""

import datetime
import logging

import pytest
from faker import Faker

from src.apps.blog.models import Blog, Post
from src.apps.blog.services import BlogService, PostService
from src.apps.core.pagination import Pageable

from .factories import (
    DEFAULT_CONTENT,
    DEFAULT_DATE,
    DEFAULT_HANDLE,
    UPDATED_NAME,
    create_blog,
    create_post,
    create_tag,
)

fake = Faker()


def test_save_delegates_to_the_repository(mocker):
    """
    Tests that BlogService.save hands the entity to its repository.
    """
    # Arrange
    blog = Blog(name=fake.word(), handle=fake.word())
    repository = mocker.MagicMock()
    repository.save.side_effect = lambda entity: entity

    # Act
    saved = BlogService(repository=repository).save(blog)

    # Assert
    repository.save.assert_called_once_with(blog)
    assert saved is blog


def test_save_logs_the_new_entity(caplog):
    caplog.set_level(logging.INFO, logger="src.apps.core.services")

    blog = BlogService().save(Blog(name=fake.word(), handle=fake.word()))

    record = caplog.records[-1]
    assert record.getMessage() == "Blog saved successfully."
    assert record.entity_id == blog.id
    assert record.is_new is True


def test_find_one_returns_none_for_missing_id():
    assert BlogService().find_one(12345) is None


def test_partial_update_overwrites_only_given_fields():
    blog = create_blog()

    updated = BlogService().partial_update(blog.id, {"name": UPDATED_NAME})

    assert updated is not None
    assert updated.name == UPDATED_NAME
    assert updated.handle == DEFAULT_HANDLE
    blog.refresh_from_db()
    assert blog.name == UPDATED_NAME
    assert blog.handle == DEFAULT_HANDLE


def test_partial_update_of_missing_entity_returns_none():
    assert BlogService().partial_update(12345, {"name": UPDATED_NAME}) is None
    assert Blog.objects.count() == 0


def test_delete():
    blog = create_blog()
    service = BlogService()

    service.delete(blog.id)

    assert not service.exists(blog.id)
    # deleting again is a no-op
    service.delete(blog.id)


def test_find_all_is_paged():
    for _ in range(3):
        create_blog()

    page = BlogService().find_all(Pageable(page=0, size=2))

    assert len(page) == 2
    assert page.total_elements == 3


class TestPostService:
    def test_save_sets_tags(self):
        tags = [create_tag(), create_tag()]
        post = Post(
            title=fake.sentence(),
            content=fake.paragraph(),
            date=fake.date_time(tzinfo=datetime.timezone.utc),
        )

        saved = PostService().save(post, tags=tags)

        assert set(saved.tags.all()) == set(tags)

    def test_save_without_tags_keeps_existing_tags(self):
        tag = create_tag()
        post = create_post(tags=[tag])
        post.title = "changed"

        PostService().save(post)

        assert list(post.tags.all()) == [tag]

    def test_partial_update_keeps_tags_and_blog(self):
        blog = create_blog()
        tag = create_tag()
        post = create_post(blog=blog, tags=[tag])

        updated = PostService().partial_update(post.id, {"title": "changed"})

        assert updated.title == "changed"
        assert updated.blog == blog
        assert list(updated.tags.all()) == [tag]

    def test_partial_update_keeps_content_and_date(self):
        post = create_post()

        PostService().partial_update(post.id, {"title": "changed", "content": None})

        post.refresh_from_db()
        assert post.title == "changed"
        assert post.content == DEFAULT_CONTENT
        assert post.date == DEFAULT_DATE


@pytest.mark.parametrize("service_class", [BlogService, PostService])
def test_entity_name(service_class):
    assert service_class().entity_name == service_class.repository_class.model.__name__
