"""
Generic REST resource for criteria-queryable entities.

``EntityViewSet`` wires an entity service, a query service, a criteria class
and a serializer into the usual resource:

- ``GET    /<entities>/``          list, filtered by criteria, paged
- ``GET    /<entities>/count/``    number of matches for the same criteria
- ``GET    /<entities>/{id}/``     one entity or 404
- ``POST   /<entities>/``          create; the body must not carry an id
- ``PUT    /<entities>/{id}/``     full update; absent many-to-many lists are cleared
- ``PATCH  /<entities>/{id}/``     partial update; absent or null fields are kept
- ``DELETE /<entities>/{id}/``     delete
"""

import logging
from typing import Any, Optional

from django.conf import settings
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.request import Request
from rest_framework.response import Response

from .criteria import Criteria
from .filters import InvalidFilterError
from .pagination import InvalidPageRequestError, Pageable, pagination_headers
from .query import QueryService
from .services import EntityService

logger = logging.getLogger(__name__)


def error_response(message: str, code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    return Response({"error": message}, status=code)


class EntityViewSet(viewsets.ViewSet):  # type: ignore[misc]
    """Base viewset; subclasses configure the class attributes below."""

    service_class: type[EntityService[Any]]
    query_service_class: type[QueryService[Any, Any]]
    criteria_class: type[Criteria]
    serializer_class: Any
    sortable_fields: tuple[str, ...] = ("id",)

    permission_classes = [IsAuthenticatedOrReadOnly]
    lookup_value_regex = r"\d+"

    def get_service(self) -> EntityService[Any]:
        return self.service_class()

    def get_query_service(self) -> QueryService[Any, Any]:
        return self.query_service_class()

    def get_pageable(self, request: Request) -> Pageable:
        options = getattr(settings, "API_PAGINATION", {})
        return Pageable.from_query_params(
            request.query_params,
            sortable_fields=self.sortable_fields,
            default_size=options.get("DEFAULT_PAGE_SIZE", 20),
            max_size=options.get("MAX_PAGE_SIZE", 2000),
        )

    def list(self, request: Request) -> Response:
        try:
            criteria = self.criteria_class.from_query_params(request.query_params)
            pageable = self.get_pageable(request)
        except (InvalidFilterError, InvalidPageRequestError) as e:
            return error_response(str(e))

        page = self.get_query_service().find_page_by_criteria(criteria, pageable)
        serializer = self.serializer_class(page.content, many=True)
        return Response(serializer.data, headers=pagination_headers(request, page))

    @action(detail=False, methods=["get"])
    def count(self, request: Request) -> Response:
        try:
            criteria = self.criteria_class.from_query_params(request.query_params)
        except InvalidFilterError as e:
            return error_response(str(e))
        return Response(self.get_query_service().count_by_criteria(criteria))

    def retrieve(self, request: Request, pk: Optional[str] = None) -> Response:
        entity = self.get_service().find_one(int(pk))  # type: ignore[arg-type]
        if entity is None:
            return error_response("Not found.", status.HTTP_404_NOT_FOUND)
        return Response(self.serializer_class(entity).data)

    def create(self, request: Request) -> Response:
        if request.data.get("id") is not None:
            return error_response("A new entity cannot already have an id.")

        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        fields, relations = self._split_relations(serializer.validated_data)

        entity = self.get_service().save(
            self.service_class.repository_class.model(**fields), **relations
        )
        data = self.serializer_class(entity).data
        location = request.build_absolute_uri(f"{request.path}{entity.pk}/")
        return Response(data, status=status.HTTP_201_CREATED, headers={"Location": location})

    def update(self, request: Request, pk: Optional[str] = None) -> Response:
        error = self._check_body_id(request, pk)
        if error is not None:
            return error

        service = self.get_service()
        entity = service.find_one(int(pk))  # type: ignore[arg-type]
        if entity is None:
            return error_response("Entity not found.")

        serializer = self.serializer_class(entity, data=request.data)
        serializer.is_valid(raise_exception=True)
        fields, relations = self._split_relations(serializer.validated_data)
        for name, value in fields.items():
            setattr(entity, name, value)
        # a full update replaces every many-to-many set, absent ones with nothing
        relations = {name: relations.get(name, []) for name in self._many_to_many()}

        entity = service.save(entity, **relations)
        return Response(self.serializer_class(entity).data)

    def partial_update(self, request: Request, pk: Optional[str] = None) -> Response:
        error = self._check_body_id(request, pk)
        if error is not None:
            return error

        service = self.get_service()
        if not service.exists(int(pk)):  # type: ignore[arg-type]
            return error_response("Entity not found.")

        serializer = self.serializer_class(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        fields, _ = self._split_relations(serializer.validated_data)

        entity = service.partial_update(int(pk), fields)  # type: ignore[arg-type]
        if entity is None:
            return error_response("Not found.", status.HTTP_404_NOT_FOUND)
        return Response(self.serializer_class(entity).data)

    def destroy(self, request: Request, pk: Optional[str] = None) -> Response:
        self.get_service().delete(int(pk))  # type: ignore[arg-type]
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _check_body_id(self, request: Request, pk: Optional[str]) -> Optional[Response]:
        body_id = request.data.get("id")
        if body_id is None:
            return error_response("Invalid id: the body has no id.")
        if str(body_id) != str(pk):
            return error_response("Invalid id: the body id does not match the URL.")
        return None

    def _split_relations(
        self, validated_data: dict[str, Any]
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """Separate many-to-many values, which can only be set after saving."""
        many_to_many = self._many_to_many()
        fields = {k: v for k, v in validated_data.items() if k not in many_to_many}
        relations = {k: v for k, v in validated_data.items() if k in many_to_many}
        return fields, relations

    def _many_to_many(self) -> set[str]:
        model = self.service_class.repository_class.model
        return {f.name for f in model._meta.many_to_many}
