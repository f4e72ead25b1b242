"""Order API views.

Exposes ``OrderService`` over HTTP.  Views parse input with the DRF
serializers and render ``OrderOutputDTO``; every failure propagates to the
common error handler.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from modules.orders.dtos import CreateOrderDTO, OrderOutputDTO, UpdateOrderDTO
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderStatusSerializer,
    UpdateOrderSerializer,
)
from modules.orders.services import build_order_service

LIST_FILTER_PARAMS = ("status", "customer", "start_date", "end_date")


class OrderViewSet(viewsets.ViewSet):
    """``/orders`` resource.

    Uses ``OrderService`` wired by ``build_order_service``.  There is no
    queryset on the view: all ORM access goes through the service and
    its repositories.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_order_service()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @extend_schema(request=CreateOrderSerializer)
    def create(self, request: Request) -> Response:
        """POST /orders

        Returns 201 even when stock locking failed; the order then carries
        the ``Stock Lock Error`` status.
        """
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        dto = CreateOrderDTO(
            customer_id=data["customer_id"],
            items=data.get("items") or [],
        )
        order = self._service.create_order(dto)
        return Response(
            OrderOutputDTO.from_entity(order).to_representation(),
            status=status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(
        parameters=[
            OpenApiParameter("status", str),
            OpenApiParameter("customer", int),
            OpenApiParameter("start_date", str, description="YYYY-MM-DD"),
            OpenApiParameter("end_date", str, description="YYYY-MM-DD"),
        ]
    )
    def list(self, request: Request) -> Response:
        """GET /orders"""
        filters = {
            key: request.query_params[key]
            for key in LIST_FILTER_PARAMS
            if request.query_params.get(key)
        }
        orders = self._service.list_orders(filters or None)
        return Response([OrderOutputDTO.from_entity(o).to_representation() for o in orders])

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /orders/{pk}"""
        order = self._service.get_order(pk)
        return Response(OrderOutputDTO.from_entity(order).to_representation())

    # ------------------------------------------------------------------
    # Update / Delete
    # ------------------------------------------------------------------

    @extend_schema(request=UpdateOrderSerializer)
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /orders/{pk}"""
        serializer = UpdateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = self._service.update_order(pk, UpdateOrderDTO(**serializer.validated_data))
        return Response(OrderOutputDTO.from_entity(order).to_representation())

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /orders/{pk}"""
        self._service.delete_order(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=OrderStatusSerializer)
    @action(detail=True, methods=["put"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PUT /orders/{pk}/status"""
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = self._service.update_status(pk, serializer.validated_data["status"])
        return Response(OrderOutputDTO.from_entity(order).to_representation())
