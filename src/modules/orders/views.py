"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.

Status changes, payment updates and cancellations belong to the back
office and require a staff user.
"""

from __future__ import annotations

from uuid import UUID

import structlog
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.permissions import BasePermission, IsAdminUser, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    InvalidInitialStatus,
    InvalidOrderStatus,
    InvalidPaymentStatus,
    OrderNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    AdvanceStatusSerializer,
    CancelOrderSerializer,
    CreateOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
    StatusOptionsSerializer,
    UpdatePaymentStatusSerializer,
    UpdateStatusSerializer,
)
from modules.orders.services import OrderService

logger = structlog.get_logger(__name__)

BACK_OFFICE_ACTIONS = {"partial_update", "advance", "cancel", "payment"}


def _not_found() -> Response:
    return Response({"detail": "Order not found."}, status=status.HTTP_404_NOT_FOUND)


def _parse_id(pk: str | None) -> UUID | None:
    if pk is None:
        return None
    try:
        return UUID(pk)
    except ValueError:
        return None


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with an injected repository (DIP).
    Does **not** extend ``ModelViewSet``: all writes go through the
    service, which consults the status policy.
    """

    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    search_fields = ["order_number", "customer_name", "customer_phone"]
    ordering_fields = ["created_at", "total", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repository = OrderDjangoRepository()
        self._service = OrderService(order_repository=self._repository)

    def get_queryset(self):
        return self._repository.queryset()

    def get_permissions(self) -> list[BasePermission]:
        if self.action in BACK_OFFICE_ACTIONS:
            return [IsAuthenticated(), IsAdminUser()]
        return [IsAuthenticated()]

    def get_throttles(self) -> list[BaseThrottle]:
        """Define escopos de throttling por ação."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Supports idempotency via the ``Idempotency-Key`` header.
        Returns 200 if the key was already used, 201 for new orders.
        """
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        data = create_serializer.validated_data
        idempotency_key = request.headers.get("Idempotency-Key")
        try:
            dto = CreateOrderDTO(
                customer_name=data["customer_name"],
                customer_phone=data["customer_phone"],
                address=data.get("address", ""),
                payment_method=data["payment_method"],
                payment_status=data.get("payment_status"),
                status=data.get("status"),
                observations=data.get("observations", ""),
                items=[CreateOrderItemDTO(**item) for item in data["items"]],
                frete=data.get("frete") or 0,
                discount=data.get("discount") or 0,
                total=data.get("total"),
                coupon_code=data.get("coupon_code") or None,
                idempotency_key=idempotency_key,
            )
        except PydanticValidationError as exc:
            return Response(
                {"detail": exc.errors(include_url=False, include_context=False)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        replay = bool(
            idempotency_key
            and self._repository.get_by_idempotency_key(idempotency_key)
        )

        try:
            order = self._service.create_order(dto)
        except InvalidInitialStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        out = OrderSerializer(order)
        return Response(
            out.data,
            status=status.HTTP_200_OK if replay else status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (status, payment, phone, date range, today) is handled
        by ``OrderFilter``; ordering by ``OrderingFilter``.  Paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = OrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk or "")
        except OrderNotFound:
            return _not_found()
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["get"], url_path="status-options")
    def status_options(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/status-options/

        What the status policy allows next; drives the back-office buttons.
        """
        try:
            options = self._service.get_status_options(pk or "")
        except OrderNotFound:
            return _not_found()
        return Response(StatusOptionsSerializer(options.model_dump()).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/

        Updates order status.  Cancellations are **not** allowed via
        this endpoint; use ``POST /orders/{id}/cancel/`` instead.
        """
        order_id = _parse_id(pk)
        if order_id is None:
            return _not_found()

        serializer = UpdateStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"detail": "Field 'status' is required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        new_status = serializer.validated_data["status"]
        if new_status == OrderStatus.CANCELLED:
            return Response(
                {"detail": "Use the /cancel/ endpoint for cancellations."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            order = self._service.update_status(
                order_id=order_id,
                new_status=new_status,
                notes=serializer.validated_data["notes"],
                user=request.user,
            )
        except OrderNotFound:
            return _not_found()
        except InvalidOrderStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["post"])
    def advance(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/advance/

        Moves the order to its default next status.
        """
        order_id = _parse_id(pk)
        if order_id is None:
            return _not_found()

        serializer = AdvanceStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.advance_status(
                order_id=order_id,
                notes=serializer.validated_data["notes"],
                user=request.user,
            )
        except OrderNotFound:
            return _not_found()
        except InvalidOrderStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Cancel / Payment (dedicated actions)
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/cancel/"""
        order_id = _parse_id(pk)
        if order_id is None:
            return _not_found()

        serializer = CancelOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.cancel_order(
                order_id=order_id,
                reason=serializer.validated_data["reason"],
                user=request.user,
            )
        except OrderNotFound:
            return _not_found()
        except InvalidOrderStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["post"])
    def payment(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/payment/"""
        order_id = _parse_id(pk)
        if order_id is None:
            return _not_found()

        serializer = UpdatePaymentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.update_payment_status(
                order_id=order_id,
                payment_status=serializer.validated_data["payment_status"],
            )
        except OrderNotFound:
            return _not_found()
        except InvalidPaymentStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)
