"""
Order serializers for placement, hand-off and administration
"""

from decimal import Decimal

from rest_framework import serializers

from .base import ProductSummarySerializer
from ..constants import (
    CUSTOM_PRODUCT_SENTINEL, ORDER_STATUS_CHOICES, PAYMENT_CHANNEL_CHOICES,
    PAYMENT_CHANNEL_WHATSAPP,
)
from ..domain.entities.cart import CustomDesign
from ..domain.entities.order_items import CatalogItem, CustomItem, CustomerInfo
from ..models import Order, OrderItem


class CustomerSerializer(serializers.Serializer):
    # Blank name or phone is reported by the order service with field names
    name = serializers.CharField(max_length=255, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    phone = serializers.CharField(max_length=32, allow_blank=True)


class CouponSnapshotSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50)
    discount_percent = serializers.IntegerField()


class OrderItemInputSerializer(serializers.Serializer):
    """
    One order line. ``product_id`` -1 marks a custom item, which has no
    product and carries its design in the ``custom_*`` fields.
    """

    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField()
    size = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True, default='')
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    custom_color = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True, default='')
    custom_image_url = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True, default='')
    custom_back_image_url = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True, default='')
    custom_text = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    custom_options = serializers.DictField(required=False, allow_null=True, default=None)

    @staticmethod
    def to_order_line(data):
        if data['product_id'] == CUSTOM_PRODUCT_SENTINEL:
            return CustomItem(
                quantity=data['quantity'],
                price=data['price'],
                size=data.get('size') or '',
                color=data.get('custom_color') or '',
                name=data.get('name') or '',
                design=CustomDesign(
                    image_url=data.get('custom_image_url') or '',
                    back_image_url=data.get('custom_back_image_url') or '',
                    text=data.get('custom_text') or '',
                    options=data.get('custom_options') or {},
                ),
            )
        return CatalogItem(
            product_id=data['product_id'],
            quantity=data['quantity'],
            price=data['price'],
            size=data.get('size') or '',
            color=data.get('custom_color') or '',
            name=data.get('name') or '',
        )


class OrderPlacementSerializer(serializers.Serializer):
    customer = CustomerSerializer()
    shipping_address = serializers.CharField(required=False, allow_blank=True, default='')
    payment_channel = serializers.ChoiceField(
        choices=PAYMENT_CHANNEL_CHOICES,
        default=PAYMENT_CHANNEL_WHATSAPP
    )
    items = OrderItemInputSerializer(many=True, allow_empty=True)
    coupon = CouponSnapshotSerializer(required=False, allow_null=True, default=None)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)

    def to_customer(self) -> CustomerInfo:
        data = self.validated_data
        customer = data['customer']
        return CustomerInfo(
            name=customer['name'],
            phone=customer['phone'],
            email=customer.get('email') or '',
            shipping_address=data.get('shipping_address') or '',
            payment_channel=data['payment_channel'],
        )

    def to_items(self):
        return [OrderItemInputSerializer.to_order_line(item) for item in self.validated_data['items']]

    def coupon_snapshot(self):
        coupon = self.validated_data.get('coupon')
        if not coupon:
            return None, None
        return coupon['code'], coupon['discount_percent']


class CustomOrderPlacementSerializer(OrderPlacementSerializer):
    def validate_items(self, items):
        if len(items) != 1 or items[0]['product_id'] != CUSTOM_PRODUCT_SENTINEL:
            raise serializers.ValidationError('Custom orders take exactly one custom item.')
        return items


class PriceQuoteSerializer(serializers.Serializer):
    """Prices the given lines, or the session cart when none are given"""
    items = OrderItemInputSerializer(many=True, required=False)
    coupon_code = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)


class OrderMessageSerializer(serializers.Serializer):
    order_id = serializers.IntegerField()
    recipient = serializers.CharField()
    text = serializers.CharField()
    url = serializers.CharField()


class OrderPlacementResultSerializer(serializers.Serializer):
    order_id = serializers.IntegerField()
    message = OrderMessageSerializer()


class OrderItemSerializer(serializers.ModelSerializer):
    product = ProductSummarySerializer(read_only=True)
    line_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id', 'product', 'quantity', 'size', 'price', 'line_total',
            'custom_color', 'custom_image_url', 'custom_back_image_url',
            'custom_text', 'custom_options'
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order with its items for the admin order list"""

    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'kind', 'status', 'customer_name', 'customer_email',
            'customer_phone', 'shipping_address', 'payment_channel',
            'subtotal_amount', 'discount_amount', 'shipping_amount',
            'tax_amount', 'total_amount', 'coupon_code',
            'coupon_discount_percent', 'items', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ORDER_STATUS_CHOICES)


class PriceBreakdownSerializer(serializers.Serializer):
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    discount = serializers.DecimalField(max_digits=14, decimal_places=2)
    subtotal_after_discount = serializers.DecimalField(max_digits=14, decimal_places=2)
    shipping = serializers.DecimalField(max_digits=14, decimal_places=2)
    tax = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
