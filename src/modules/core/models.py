"""Base abstract model for the catalog service.

Provides ``BaseModel``: UUIDv7 primary key + ``created_at`` / ``updated_at``.

Unlike ``auto_now_add`` / ``auto_now``, both timestamps are plain fields:
``created_at`` is written once by whoever builds the record and
``updated_at`` stays ``NULL`` until the record is mutated.
"""

from __future__ import annotations

import uuid6
from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(null=True, blank=True, default=None)

    class Meta:
        abstract = True
