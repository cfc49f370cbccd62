"""
Base entity service.

Services hold the business logic of an entity and orchestrate its
repository, keeping the web layer (views) thin. The CRUD service here is
deliberately independent from filtering; criteria queries live in
:mod:`src.apps.core.query`.

Mutations run inside ``transaction.atomic``. There is no locking: two
concurrent updates of the same row are resolved by the database, last
writer wins.
"""

import logging
from typing import Any, Generic, Mapping, Optional, TypeVar

from django.db import transaction
from django.db.models import Model

from .pagination import Page, Pageable
from .repositories import BaseRepository

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Model)


class EntityService(Generic[ModelT]):
    """
    Create, read, update and delete operations for one entity.

    Subclasses set ``repository_class`` and list the attributes a partial
    update may overwrite in ``partial_update_fields``.
    """

    repository_class: type[BaseRepository[Any]]
    partial_update_fields: tuple[str, ...] = ()

    def __init__(self, repository: Optional[BaseRepository[ModelT]] = None) -> None:
        self.repository = repository if repository is not None else self.repository_class()

    @property
    def entity_name(self) -> str:
        return self.repository_class.model.__name__

    @transaction.atomic
    def save(self, entity: ModelT) -> ModelT:
        """
        Saves an entity, inserting it when it has no id yet.

        Args:
            entity: The entity to save.

        Returns:
            The persisted entity.
        """
        logger.debug("Request to save %s : %s", self.entity_name, entity)
        is_new = entity.pk is None
        entity = self.repository.save(entity)
        logger.info(
            f"{self.entity_name} saved successfully.",
            extra={"entity_id": entity.pk, "is_new": is_new},
        )
        return entity

    @transaction.atomic
    def partial_update(self, id: Any, changes: Mapping[str, Any]) -> Optional[ModelT]:
        """
        Partially updates an entity.

        Only the keys of ``changes`` that are listed in
        ``partial_update_fields`` and carry a non-None value overwrite the
        stored value. Every other attribute is left untouched.

        Args:
            id: Primary key of the entity to update.
            changes: The values supplied by the caller, by attribute name.

        Returns:
            The updated entity, or None when no entity has that id.
        """
        logger.debug("Request to partially update %s %s : %s", self.entity_name, id, changes)
        existing = self.repository.find_by_id(id)
        if existing is None:
            return None

        for field_name in self.partial_update_fields:
            value = changes.get(field_name)
            if value is not None:
                setattr(existing, field_name, value)

        existing = self.repository.save(existing)
        logger.info(
            f"{self.entity_name} partially updated.",
            extra={"entity_id": existing.pk},
        )
        return existing

    def find_all(self, pageable: Pageable) -> Page[ModelT]:
        logger.debug("Request to get all %ss", self.entity_name)
        return self.repository.find_all_page(pageable)

    def find_one(self, id: Any) -> Optional[ModelT]:
        logger.debug("Request to get %s : %s", self.entity_name, id)
        return self.repository.find_by_id(id)

    def exists(self, id: Any) -> bool:
        return self.repository.exists_by_id(id)

    @transaction.atomic
    def delete(self, id: Any) -> None:
        """Deletes the entity by id. Deleting a missing id is a no-op."""
        logger.debug("Request to delete %s : %s", self.entity_name, id)
        self.repository.delete_by_id(id)
        logger.info(f"{self.entity_name} deleted.", extra={"entity_id": id})
