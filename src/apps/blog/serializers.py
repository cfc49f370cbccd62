"""
Serializers for the blog API.
"""

from rest_framework import serializers

from .models import Blog, Post


class BlogSerializer(serializers.ModelSerializer):  # type: ignore[misc]
    """
    Serializer for the Blog model.

    The owning user is exchanged by primary key.
    """

    class Meta:
        model = Blog
        fields = ["id", "name", "handle", "user", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]


class PostSerializer(serializers.ModelSerializer):  # type: ignore[misc]
    """
    Serializer for the Post model.

    The blog and the tags are exchanged by primary key.
    """

    class Meta:
        model = Post
        fields = [
            "id",
            "title",
            "content",
            "date",
            "blog",
            "tags",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]
