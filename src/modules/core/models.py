"""Abstract model shared by every catalog table."""

from __future__ import annotations

import uuid6
from django.db import models


class BaseModel(models.Model):
    """UUIDv7 primary key plus creation / modification timestamps.

    UUIDv7 values are time-ordered, so sorting by ``id`` follows insertion
    order without an extra index.
    """

    id = models.UUIDField(primary_key=True, default=uuid6.uuid7, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        # auto_now is skipped for fields missing from update_fields.
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = {*update_fields, "updated_at"}
        super().save(*args, **kwargs)
