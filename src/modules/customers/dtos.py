"""Customer DTOs for the service layer.

Pydantic v2, immutable (``frozen=True``).  Output DTOs dump with camelCase
aliases to form the outward JSON shape.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from modules.customers.models import Customer


class CreateCustomerDTO(BaseModel):
    """Validated input for customer creation (checked by the serializer first)."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    phone: str = ""
    address: str = ""


class CustomerOutputDTO(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    email: str
    phone: str
    address: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, customer: Customer) -> CustomerOutputDTO:
        return cls(
            id=customer.pk,
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            address=customer.address,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )
