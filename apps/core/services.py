"""
Shared services for plain single-table records (products, customers).

The HTTP views and the IPC channels both go through these classes so that
validation, uniqueness and not-found reporting behave the same on every
surface.
"""

import logging
from typing import Any, Dict, List, Optional

from .exceptions import RecordValidationError
from .store import RecordStore

logger = logging.getLogger(__name__)


def validate_payload(serializer_class, data, instance=None) -> Dict[str, Any]:
    """
    Run ``serializer_class`` over ``data`` and return the validated fields.

    Raises:
        RecordValidationError: with the serializer's field errors as details
    """
    if not isinstance(data, dict):
        raise RecordValidationError("Request body must be an object")
    serializer = serializer_class(instance, data=data)
    if not serializer.is_valid():
        raise RecordValidationError("Invalid data", details=serializer.errors)
    return serializer.validated_data


class RecordService:
    """
    List/create/update/delete for one model.

    Subclasses set ``model``, ``serializer_class`` and ``ordering``.
    """

    model = None
    serializer_class = None
    ordering = "id"

    def __init__(self, store: Optional[RecordStore] = None):
        self.store = store or RecordStore()

    @property
    def label(self) -> str:
        return self.model._meta.verbose_name

    def list(self) -> List[Any]:
        with self.store.translate_errors():
            return list(self.store.query(self.model, order=self.ordering))

    def get(self, pk):
        return self.store.get(self.model, pk)

    def create(self, data):
        fields = validate_payload(self.serializer_class, data)
        pk = self.store.insert(self.model, **fields)
        logger.info(f"Created {self.label} {pk}")
        return self.store.get(self.model, pk)

    def update(self, pk, data):
        """Replace the editable fields of an existing record."""
        instance = self.store.get(self.model, pk)
        fields = validate_payload(self.serializer_class, data, instance=instance)
        instance = self.store.update(self.model, instance.pk, **fields)
        logger.info(f"Updated {self.label} {instance.pk}")
        return instance

    def delete(self, pk) -> None:
        self.store.delete(self.model, pk)
        logger.info(f"Deleted {self.label} {pk}")

    def serialize(self, instance) -> Dict[str, Any]:
        return self.serializer_class(instance).data

    def serialize_many(self, instances) -> List[Dict[str, Any]]:
        return self.serializer_class(instances, many=True).data
