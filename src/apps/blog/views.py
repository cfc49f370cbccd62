"""API views for blogs and posts."""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiExample, extend_schema, extend_schema_view

from src.apps.core.views import EntityViewSet

from .criteria import BlogCriteria, PostCriteria
from .serializers import BlogSerializer, PostSerializer
from .services import BlogQueryService, BlogService, PostQueryService, PostService


@extend_schema_view(
    list=extend_schema(
        summary="List blogs",
        description=(
            "Returns a page of blogs matching every filter given as "
            "`<field>.<operator>=<value>`, e.g. `name.contains=dev` or "
            "`userId.specified=false`. Paging uses `page`, `size` and `sort`; "
            "the total is returned in `X-Total-Count`."
        ),
        responses=BlogSerializer(many=True),
    ),
    count=extend_schema(
        summary="Count blogs",
        description="Returns the number of blogs matching the same filters as the list.",
        responses=OpenApiTypes.INT,
    ),
    retrieve=extend_schema(summary="Retrieve a blog", responses=BlogSerializer),
    create=extend_schema(
        summary="Create a blog",
        request=BlogSerializer,
        responses={201: BlogSerializer},
        examples=[
            OpenApiExample(
                "Create a new blog",
                value={"name": "Engineering", "handle": "eng"},
                request_only=True,
            ),
        ],
    ),
    update=extend_schema(
        summary="Update a blog",
        request=BlogSerializer,
        responses=BlogSerializer,
    ),
    partial_update=extend_schema(
        summary="Partially update a blog",
        description="Fields that are absent from the body keep their stored value.",
        request=BlogSerializer,
        responses=BlogSerializer,
    ),
    destroy=extend_schema(summary="Delete a blog"),
)
@extend_schema(tags=["Blogs"])
class BlogViewSet(EntityViewSet):
    """
    API endpoint that allows blogs to be queried or edited.
    """

    service_class = BlogService
    query_service_class = BlogQueryService
    criteria_class = BlogCriteria
    serializer_class = BlogSerializer
    sortable_fields = ("id", "name", "handle", "created_at", "updated_at")


@extend_schema_view(
    list=extend_schema(
        summary="List posts",
        description=(
            "Returns a page of posts matching every filter given as "
            "`<field>.<operator>=<value>`, e.g. `title.contains=django`, "
            "`date.greaterThan=2024-01-01T00:00:00Z` or `tagId.in=1,2`. "
            "Add `distinct=true` when filtering on tags."
        ),
        responses=PostSerializer(many=True),
    ),
    count=extend_schema(
        summary="Count posts",
        description="Returns the number of posts matching the same filters as the list.",
        responses=OpenApiTypes.INT,
    ),
    retrieve=extend_schema(summary="Retrieve a post", responses=PostSerializer),
    create=extend_schema(
        summary="Create a post",
        request=PostSerializer,
        responses={201: PostSerializer},
        examples=[
            OpenApiExample(
                "Create a new post",
                value={
                    "title": "My New Post Title",
                    "content": "This is the content of my new post.",
                    "date": "2024-05-01T10:00:00Z",
                    "blog": 1,
                    "tags": [1, 2],
                },
                request_only=True,
            ),
        ],
    ),
    update=extend_schema(
        summary="Update a post",
        request=PostSerializer,
        responses=PostSerializer,
    ),
    partial_update=extend_schema(
        summary="Partially update a post",
        description="Fields that are absent from the body keep their stored value; tags are not changed.",
        request=PostSerializer,
        responses=PostSerializer,
    ),
    destroy=extend_schema(summary="Delete a post"),
)
@extend_schema(tags=["Posts"])
class PostViewSet(EntityViewSet):
    """
    API endpoint that allows posts to be queried or edited.
    """

    service_class = PostService
    query_service_class = PostQueryService
    criteria_class = PostCriteria
    serializer_class = PostSerializer
    sortable_fields = ("id", "title", "date", "created_at", "updated_at")
