"""Customer model.

E-mail is the business key: it is unique in the store and two customer
records with the same e-mail are the same customer (see
``has_same_business_key``).  Customers are never created implicitly by
order placement.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=100, unique=True)
    phone = models.CharField(max_length=20, blank=True, default="")
    address = models.TextField(blank=True, default="")

    class Meta:
        db_table = "customers"
        ordering = ["id"]

    def has_same_business_key(self, other: object) -> bool:
        """Two customers are the same entity when their e-mails match."""
        if not isinstance(other, Customer):
            return False
        if not self.email or not other.email:
            return False
        return self.email == other.email

    def __str__(self) -> str:
        return f"{self.name} (#{self.pk})"
