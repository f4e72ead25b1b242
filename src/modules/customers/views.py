"""Customer API views.

Domain failures propagate to the common error handler; the views only
parse input and render output DTOs.
"""

from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.request import Request
from rest_framework.response import Response

from modules.customers.dtos import CreateCustomerDTO, CustomerOutputDTO
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CreateCustomerSerializer
from modules.customers.services import CustomerService


class CustomerViewSet(viewsets.ViewSet):
    """``/customers`` collection: create, list and retrieve."""

    serializer_class = CreateCustomerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /customers"""
        customers = self._service.list_customers()
        return Response(
            [
                CustomerOutputDTO.from_entity(c).model_dump(mode="json", by_alias=True)
                for c in customers
            ]
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /customers/{pk}"""
        customer = self._service.get_customer(pk)
        return Response(
            CustomerOutputDTO.from_entity(customer).model_dump(mode="json", by_alias=True)
        )

    def create(self, request: Request) -> Response:
        """POST /customers"""
        serializer = CreateCustomerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer = self._service.create_customer(
            CreateCustomerDTO(**serializer.validated_data)
        )
        return Response(
            CustomerOutputDTO.from_entity(customer).model_dump(mode="json", by_alias=True),
            status=status.HTTP_201_CREATED,
        )
