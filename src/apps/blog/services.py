"""
Services for the blog app.

Entity services (``BlogService``, ``PostService``) own the create, update and
delete lifecycle; query services (``BlogQueryService``,
``PostQueryService``) translate criteria into a specification and run it
through the repository. All the filters of a criteria object must apply.
"""

from typing import Iterable, Optional

from django.db import transaction

from src.apps.core.query import QueryService, Specification
from src.apps.core.services import EntityService

from .criteria import BlogCriteria, PostCriteria
from .models import Blog, Post, Tag
from .repositories import BlogRepository, PostRepository


class BlogService(EntityService[Blog]):
    """Service for managing :class:`Blog` entities."""

    repository_class = BlogRepository
    partial_update_fields = ("name", "handle", "user")


class PostService(EntityService[Post]):
    """Service for managing :class:`Post` entities."""

    repository_class = PostRepository
    partial_update_fields = ("title", "content", "date", "blog")

    @transaction.atomic
    def save(self, entity: Post, tags: Optional[Iterable[Tag]] = None) -> Post:
        """
        Saves a post and, when ``tags`` is given, replaces its tag set.

        Args:
            entity: The post to save.
            tags: The complete set of tags the post should carry.

        Returns:
            The persisted post.
        """
        post = super().save(entity)
        if tags is not None:
            post.tags.set(tags)
        return post


class BlogQueryService(QueryService[Blog, BlogCriteria]):
    """
    Executes criteria queries for :class:`Blog` entities.

    The owning user is matched through a left join, so blogs without a user
    are still returned by ``userId.specified=false``.
    """

    repository_class = BlogRepository

    def create_specification(self, criteria: Optional[BlogCriteria]) -> Specification:
        if criteria is None:
            return Specification.where()

        # distinct has to be fixed before any fragment is added
        specification = Specification.where(distinct=criteria.distinct)
        if criteria.id is not None:
            specification = specification.and_(
                self.build_range_specification(criteria.id, "id")
            )
        if criteria.name is not None:
            specification = specification.and_(
                self.build_string_specification(criteria.name, "name")
            )
        if criteria.handle is not None:
            specification = specification.and_(
                self.build_string_specification(criteria.handle, "handle")
            )
        if criteria.user_id is not None:
            specification = specification.and_(
                self.build_specification(criteria.user_id, "user__id")
            )
        return specification


class PostQueryService(QueryService[Post, PostCriteria]):
    """
    Executes criteria queries for :class:`Post` entities.

    Filtering on ``tagId`` joins the tag table; combine it with
    ``distinct=true`` to get each post once.
    """

    repository_class = PostRepository

    def create_specification(self, criteria: Optional[PostCriteria]) -> Specification:
        if criteria is None:
            return Specification.where()

        specification = Specification.where(distinct=criteria.distinct)
        if criteria.id is not None:
            specification = specification.and_(
                self.build_range_specification(criteria.id, "id")
            )
        if criteria.title is not None:
            specification = specification.and_(
                self.build_string_specification(criteria.title, "title")
            )
        if criteria.date is not None:
            specification = specification.and_(
                self.build_range_specification(criteria.date, "date")
            )
        if criteria.blog_id is not None:
            specification = specification.and_(
                self.build_specification(criteria.blog_id, "blog__id")
            )
        if criteria.tag_id is not None:
            specification = specification.and_(
                self.build_specification(criteria.tag_id, "tags__id")
            )
        return specification
