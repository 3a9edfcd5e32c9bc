"""
Session cart endpoints and price quotes
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from ..exceptions import handle_service_errors
from ..serializers.base import CustomDesignSerializer
from ..serializers.cart import (
    CartItemAddSerializer, CartItemKeySerializer, CartItemQuantitySerializer,
)
from ..serializers.orders import (
    OrderItemInputSerializer, PriceBreakdownSerializer, PriceQuoteSerializer,
)
from ..services.cart import CartService


class CartView(APIView):
    """The shopper's cart, kept in their session"""

    permission_classes = [AllowAny]

    @extend_schema(summary="Read cart")
    def get(self, request):
        return Response(CartService.for_request(request).summary())

    @extend_schema(summary="Clear cart")
    def delete(self, request):
        service = CartService.for_request(request)
        service.clear()
        return Response(service.summary())


class CartItemsView(APIView):
    """Add, update and remove cart lines"""

    permission_classes = [AllowAny]

    @extend_schema(summary="Add item to cart", request=CartItemAddSerializer)
    @handle_service_errors
    def post(self, request):
        serializer = CartItemAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        service = CartService.for_request(request)

        if serializer.is_custom:
            service.add_custom_item(
                price=data['price'],
                design=CustomDesignSerializer().to_design(data['custom']),
                quantity=data['quantity'],
                size=data['size'],
                color=data['color'],
                name=data['name'],
            )
        else:
            service.add_product(
                data['product_id'],
                quantity=data['quantity'],
                size=data['size'],
                color=data['color'],
            )
        return Response(service.summary(), status=status.HTTP_201_CREATED)

    @extend_schema(summary="Set cart item quantity", request=CartItemQuantitySerializer)
    @handle_service_errors
    def patch(self, request):
        serializer = CartItemQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        service = CartService.for_request(request)
        service.set_quantity(data['product_id'], data['quantity'], size=data['size'], color=data['color'])
        return Response(service.summary())

    @extend_schema(summary="Remove cart item", request=CartItemKeySerializer)
    def delete(self, request):
        serializer = CartItemKeySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        service = CartService.for_request(request)
        service.remove(data['product_id'], size=data['size'], color=data['color'])
        return Response(service.summary())


class CartQuoteView(APIView):
    """Price breakdown for the cart or for explicit lines"""

    permission_classes = [AllowAny]

    @extend_schema(summary="Quote prices", request=PriceQuoteSerializer)
    @handle_service_errors
    def post(self, request):
        serializer = PriceQuoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        items = None
        if data.get('items') is not None:
            items = [OrderItemInputSerializer.to_order_line(item) for item in data['items']]

        breakdown, coupon = CartService.for_request(request).quote(
            coupon_code=data.get('coupon_code'),
            items=items,
        )
        return Response({
            'breakdown': PriceBreakdownSerializer(breakdown.to_dict()).data,
            'coupon': coupon.to_dict() if data.get('coupon_code') else None,
        })
