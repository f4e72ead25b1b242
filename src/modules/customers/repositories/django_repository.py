"""Django ORM implementation of the Customer repository.

Methods return ``None`` / ``False`` for missing rows instead of raising;
the service layer decides how a missing entity is reported.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Customer]:
        """Retrieve a customer by primary key; ``None`` for unknown or malformed IDs."""
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Customer]:
        """List customers with optional Django ORM look-ups, e.g. ``{"name__icontains": "ann"}``."""
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        is_new = entity._state.adding
        entity.save()
        logger.info("customer.saved", customer_id=entity.pk, is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        customer = self.get_by_id(id)
        if not customer:
            return False
        customer.delete()
        logger.info("customer.deleted", customer_id=id)
        return True

    def exists(self, id: int) -> bool:
        try:
            return Customer.objects.filter(id=id).exists()
        except (ValueError, TypeError, ValidationError):
            return False

    def get_by_email(self, email: str) -> Optional[Customer]:
        return Customer.objects.filter(email=email).first()

    def exists_by_email(self, email: str) -> bool:
        return Customer.objects.filter(email=email).exists()
