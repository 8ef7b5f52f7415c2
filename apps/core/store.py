"""
Record Store handle.

Thin adapter over the Django ORM that the ledger services receive through
their constructor instead of reaching for a module-level connection. It owns
the translation of database failures into the domain error taxonomy so the
callers above it only ever see ``LedgerError`` subclasses.

Example:
    store = RecordStore()
    with store.atomic():
        invoice_id = store.insert(Invoice, invoice_number="001/03/24", ...)
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Optional, Union

from django.db import DatabaseError, IntegrityError, models, transaction
from django.db.models import ProtectedError

from .exceptions import (
    DuplicateRecordError,
    LedgerError,
    ProtectedRecordError,
    RecordNotFoundError,
    RecordValidationError,
    StorageError,
)

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Durable table storage for products, customers, invoices and line items.

    All operations run against the database alias given at construction.
    """

    def __init__(self, using: str = "default"):
        self.using = using

    def __repr__(self):
        return f"<RecordStore using={self.using!r}>"

    @contextmanager
    def translate_errors(self):
        """Re-raise database exceptions as ledger errors."""
        try:
            yield
        except LedgerError:
            raise
        except IntegrityError as e:
            message = str(e)
            if "unique" in message.lower():
                logger.warning(f"Uniqueness violation: {message}")
                raise DuplicateRecordError(message) from e
            if "not null" in message.lower():
                raise RecordValidationError(message) from e
            logger.error(f"Integrity error: {message}")
            raise StorageError(message) from e
        except DatabaseError as e:
            logger.error(f"Record store failure: {e}", exc_info=True)
            raise StorageError(f"Record store unavailable: {e}") from e

    @contextmanager
    def atomic(self):
        """
        Run the enclosed block as one atomic unit of work.

        Any exception raised inside the block rolls the whole unit back before
        it propagates.
        """
        with self.translate_errors():
            with transaction.atomic(using=self.using):
                yield self

    def run_atomic(self, unit_of_work: Callable[["RecordStore"], Any]) -> Any:
        """Call ``unit_of_work(store)`` inside an atomic unit and return its result."""
        with self.atomic():
            return unit_of_work(self)

    def insert(self, model, **row) -> int:
        """Insert one row and return the store-assigned identity."""
        with self.atomic():
            instance = model.objects.using(self.using).create(**row)
        return instance.pk

    def query(
        self,
        model,
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[Union[str, Iterable[str]]] = None,
        limit: Optional[int] = None,
    ) -> models.QuerySet:
        """
        Build a lazy query over ``model``.

        Evaluate the result inside ``translate_errors()`` (or ``atomic()``)
        to get ledger errors instead of raw database errors.
        """
        queryset = model.objects.using(self.using).all()
        if filters:
            queryset = queryset.filter(**filters)
        if order:
            if isinstance(order, str):
                order = [order]
            queryset = queryset.order_by(*order)
        if limit is not None:
            queryset = queryset[:limit]
        return queryset

    def count(self, model) -> int:
        with self.translate_errors():
            return model.objects.using(self.using).count()

    def get(self, model, pk):
        """Fetch one row by identity or raise ``RecordNotFoundError``."""
        with self.translate_errors():
            try:
                return model.objects.using(self.using).get(pk=pk)
            except (model.DoesNotExist, ValueError, TypeError):
                raise RecordNotFoundError(
                    f"{model._meta.verbose_name.capitalize()} not found", details={"id": pk}
                )

    def update(self, model, pk, **fields):
        """Replace the given fields of one row and return the saved instance."""
        with self.atomic():
            instance = self.get(model, pk)
            for name, value in fields.items():
                setattr(instance, name, value)
            instance.save(using=self.using)
        return instance

    def delete(self, model, pk) -> None:
        """
        Delete one row.

        Raises ``ProtectedRecordError`` when other rows still reference it.
        """
        with self.atomic():
            instance = self.get(model, pk)
            try:
                instance.delete(using=self.using)
            except ProtectedError as e:
                raise ProtectedRecordError(
                    f"{model._meta.verbose_name.capitalize()} is referenced by existing invoices",
                    details={"id": pk},
                ) from e
