"""
Repositories for the blog app.

Each repository binds the generic storage access of
:class:`~src.apps.core.repositories.BaseRepository` to one model and
declares which relations are loaded together with it.
"""

from src.apps.core.repositories import BaseRepository

from .models import Blog, Post


class BlogRepository(BaseRepository[Blog]):
    model = Blog
    select_related = ("user",)


class PostRepository(BaseRepository[Post]):
    model = Post
    select_related = ("blog",)
    prefetch_related = ("tags",)
