"""Base models for the application."""

from django.db import models


class TimestampedModel(models.Model):
    """Abstract base model with created/updated timestamps.

    Provides automatic timestamp tracking for all entities. Rows are
    ordered by id so that paging without an explicit sort is stable.
    """

    created_at = models.DateTimeField(
        auto_now_add=True, help_text="Timestamp when the record was created"
    )
    updated_at = models.DateTimeField(
        auto_now=True, help_text="Timestamp when the record was last updated"
    )

    class Meta:
        abstract = True
        ordering = ["id"]
