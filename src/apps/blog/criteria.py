"""
Criteria for the blog entities.

These classes receive the filtering options of the list and count
endpoints, for example::

    /api/blogs/?id.greaterThan=5&name.contains=dev&userId.specified=false
    /api/posts/?date.lessThan=2024-01-01T00:00:00Z&tagId.in=1,2&distinct=true
"""

from dataclasses import dataclass
from typing import Optional

from src.apps.core.criteria import Criteria, criteria_field
from src.apps.core.filters import InstantFilter, LongFilter, StringFilter


@dataclass(unsafe_hash=True)
class BlogCriteria(Criteria):
    """Filters for :class:`~src.apps.blog.models.Blog`."""

    id: Optional[LongFilter] = criteria_field("id", LongFilter)
    name: Optional[StringFilter] = criteria_field("name", StringFilter)
    handle: Optional[StringFilter] = criteria_field("handle", StringFilter)
    user_id: Optional[LongFilter] = criteria_field("userId", LongFilter)
    distinct: Optional[bool] = None


@dataclass(unsafe_hash=True)
class PostCriteria(Criteria):
    """Filters for :class:`~src.apps.blog.models.Post`."""

    id: Optional[LongFilter] = criteria_field("id", LongFilter)
    title: Optional[StringFilter] = criteria_field("title", StringFilter)
    date: Optional[InstantFilter] = criteria_field("date", InstantFilter)
    blog_id: Optional[LongFilter] = criteria_field("blogId", LongFilter)
    tag_id: Optional[LongFilter] = criteria_field("tagId", LongFilter)
    distinct: Optional[bool] = None
