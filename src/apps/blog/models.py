"""Blog, Post and Tag models."""

from django.conf import settings
from django.db import models

from src.apps.core.models import TimestampedModel


class Blog(TimestampedModel):
    """
    A blog owned by a user.

    Attributes:
        name: Display name of the blog
        handle: Short handle used to reference the blog
        user: Owning user; the blog survives the user's deletion
    """

    name = models.CharField(max_length=255, help_text="The name of the blog.")
    handle = models.CharField(max_length=255, help_text="The handle of the blog.")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="blogs",
        help_text="The user who owns the blog.",
    )

    class Meta(TimestampedModel.Meta):
        verbose_name = "Blog"
        verbose_name_plural = "Blogs"

    def __str__(self) -> str:
        return self.name


class Tag(TimestampedModel):
    """A label that can be attached to any number of posts."""

    name = models.CharField(max_length=100, unique=True)

    class Meta(TimestampedModel.Meta):
        verbose_name = "Tag"
        verbose_name_plural = "Tags"

    def __str__(self) -> str:
        return self.name


class Post(TimestampedModel):
    """
    A post published in a blog.

    Attributes:
        title: Title of the post
        content: Body of the post
        date: Publication time
        blog: Blog the post belongs to (optional)
        tags: Tags attached to the post
    """

    title = models.CharField(max_length=255, help_text="The title of the post.")
    content = models.TextField(help_text="The main content of the post.")
    date = models.DateTimeField(help_text="When the post was published.")
    blog = models.ForeignKey(
        Blog,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="posts",
        help_text="The blog the post belongs to.",
    )
    tags = models.ManyToManyField(Tag, blank=True, related_name="posts")

    class Meta(TimestampedModel.Meta):
        verbose_name = "Post"
        verbose_name_plural = "Posts"

    def __str__(self) -> str:
        return self.title
