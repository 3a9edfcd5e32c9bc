"""
Cart serializers for e-commerce functionality
"""

from decimal import Decimal

from rest_framework import serializers

from .base import CustomDesignSerializer
from ..constants import CUSTOM_PRODUCT_SENTINEL


class CartItemKeySerializer(serializers.Serializer):
    """Identifies a cart line by product, size and color"""

    product_id = serializers.IntegerField()
    size = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    color = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')

    @property
    def is_custom(self) -> bool:
        return self.validated_data['product_id'] == CUSTOM_PRODUCT_SENTINEL


class CartItemAddSerializer(CartItemKeySerializer):
    """
    Adds a line to the cart.

    Catalog items are priced from the product. Custom items (product id -1)
    carry the price shown in the designer and their design.
    """

    quantity = serializers.IntegerField(min_value=1, default=1)
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False
    )
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    custom = CustomDesignSerializer(required=False)

    def validate(self, attrs):
        if attrs['product_id'] == CUSTOM_PRODUCT_SENTINEL:
            errors = {}
            if attrs.get('price') is None:
                errors['price'] = ['Price is required for custom items.']
            if not attrs.get('custom'):
                errors['custom'] = ['Design details are required for custom items.']
            if errors:
                raise serializers.ValidationError(errors)
        elif attrs['product_id'] < 1:
            raise serializers.ValidationError({'product_id': ['Invalid product id.']})
        return attrs


class CartItemQuantitySerializer(CartItemKeySerializer):
    # Zero or less removes the line
    quantity = serializers.IntegerField()

