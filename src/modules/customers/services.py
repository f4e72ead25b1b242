"""Customer service layer.

Orchestrates the Customer use cases over an injected
``ICustomerRepository``.  Failures surface as ``OrderManagementError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import IntegrityError, models, transaction

from modules.core.errors import ErrorKind, OrderManagementError
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    def create_customer(self, dto: CreateCustomerDTO) -> Customer:
        """Create a customer; a registered e-mail raises ``CONFLICT``."""
        if self._repo.exists_by_email(dto.email):
            logger.warning("customer.duplicate_email")
            raise self._duplicate_email()

        customer = Customer(
            name=dto.name,
            email=dto.email,
            phone=dto.phone,
            address=dto.address,
        )
        try:
            with transaction.atomic():
                customer = self._repo.save(customer)
        except IntegrityError as exc:
            # Concurrent registration of the same e-mail.
            logger.warning("customer.duplicate_email", race=True)
            raise self._duplicate_email(cause=exc) from exc

        logger.info("customer.created", customer_id=customer.pk)
        return customer

    def get_customer(self, id: int) -> Customer:
        customer = self._repo.get_by_id(id)
        if not customer:
            raise OrderManagementError.not_found("Customer", id)
        return customer

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Customer]:
        return self._repo.list(filters)

    @staticmethod
    def _duplicate_email(cause: Optional[Exception] = None) -> OrderManagementError:
        return OrderManagementError(
            ErrorKind.CONFLICT,
            "A customer with this email already exists",
            recovery_suggestion="Use a different email address",
            cause=cause,
        )
