"""URL configuration for the blog app."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import BlogViewSet, PostViewSet

app_name = "blog"

router = DefaultRouter()
router.register(r"blogs", BlogViewSet, basename="blog")
router.register(r"posts", PostViewSet, basename="post")

urlpatterns = [
    path("api/", include(router.urls)),
]
