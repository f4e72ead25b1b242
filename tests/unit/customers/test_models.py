from __future__ import annotations

import pytest
from django.db import IntegrityError

from modules.customers.models import Customer

pytestmark = pytest.mark.unit


class TestCustomerModel:
    def test_email_is_unique(self, customer):
        with pytest.raises(IntegrityError):
            Customer.objects.create(name="Other", email=customer.email)

    def test_same_business_key_on_equal_email(self, customer):
        other = Customer(name="Johnny", email="john.smith@example.com")
        assert customer.has_same_business_key(other)

    def test_email_comparison_is_case_sensitive(self, customer):
        other = Customer(name="John", email="John.Smith@example.com")
        assert not customer.has_same_business_key(other)

    def test_blank_email_never_matches(self):
        assert not Customer(name="a").has_same_business_key(Customer(name="b"))

    def test_other_types_never_match(self, customer):
        assert not customer.has_same_business_key("john.smith@example.com")

    def test_str(self, customer):
        assert str(customer) == f"John Smith (#{customer.pk})"
