"""
Order placement and order administration endpoints
"""

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import filters, mixins, status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from ..exceptions import handle_service_errors
from ..filters import OrderFilter
from ..permissions import IsStoreAdmin
from ..serializers.orders import (
    CustomOrderPlacementSerializer, OrderPlacementResultSerializer,
    OrderPlacementSerializer, OrderSerializer, OrderStatusSerializer,
)
from ..services.cart import CartService
from ..services.order import OrderService


class OrderPlacementView(APIView):
    """Place a catalog order and return the owner hand-off message"""

    permission_classes = [AllowAny]
    serializer_class = OrderPlacementSerializer

    def place(self, service, serializer):
        code, percent = serializer.coupon_snapshot()
        return service.place_order(
            serializer.to_customer(),
            serializer.to_items(),
            serializer.validated_data['total_amount'],
            coupon_code=code,
            coupon_discount_percent=percent,
        )

    def after_placement(self, request):
        CartService.for_request(request).clear()

    @extend_schema(
        summary="Place order",
        request=OrderPlacementSerializer,
        responses={201: OrderPlacementResultSerializer},
    )
    @handle_service_errors
    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = OrderService()
        order = self.place(service, serializer)
        message = service.build_message(order)
        self.after_placement(request)

        result = OrderPlacementResultSerializer({
            'order_id': order.pk,
            'message': message.to_dict(),
        })
        return Response(result.data, status=status.HTTP_201_CREATED)


class CustomOrderPlacementView(OrderPlacementView):
    """Place an order for one custom-designed item"""

    serializer_class = CustomOrderPlacementSerializer

    def place(self, service, serializer):
        code, percent = serializer.coupon_snapshot()
        return service.place_custom_order(
            serializer.to_customer(),
            serializer.to_items()[0],
            serializer.validated_data['total_amount'],
            coupon_code=code,
            coupon_discount_percent=percent,
        )

    def after_placement(self, request):
        # Custom orders are placed from the designer, not from the cart
        pass

    @extend_schema(
        summary="Place custom order",
        request=CustomOrderPlacementSerializer,
        responses={201: OrderPlacementResultSerializer},
    )
    def post(self, request):
        return super().post(request)


@extend_schema_view(
    list=extend_schema(summary="List orders"),
    partial_update=extend_schema(summary="Change order status", request=OrderStatusSerializer),
    destroy=extend_schema(summary="Delete order and its design assets"),
)
class OrderAdminViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Order administration"""

    permission_classes = [IsStoreAdmin]
    serializer_class = OrderSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = OrderFilter
    search_fields = ['customer_name', 'customer_phone', 'customer_email']
    ordering_fields = ['created_at', 'total_amount']
    ordering = ['-created_at']

    def get_queryset(self):
        return OrderService().list_orders()

    @handle_service_errors
    def partial_update(self, request, pk=None):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService().update_status(pk, serializer.validated_data['status'])
        return Response(OrderSerializer(order).data)

    @handle_service_errors
    def destroy(self, request, pk=None):
        OrderService().delete_order(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
