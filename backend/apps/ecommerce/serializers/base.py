"""
Shared serializers used across the e-commerce API
"""

from rest_framework import serializers

from ..domain.entities.cart import CustomDesign
from ..models import Product


class ProductSummarySerializer(serializers.ModelSerializer):
    """Compact product representation for carts, orders and lists"""

    class Meta:
        model = Product
        fields = ['id', 'name', 'price', 'image_url', 'is_active']
        read_only_fields = fields


class CustomDesignSerializer(serializers.Serializer):
    """Artwork references and placement options of a custom item"""

    image_url = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    back_image_url = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    text = serializers.CharField(required=False, allow_blank=True, default='')
    options = serializers.DictField(required=False, default=dict)

    def to_design(self, data=None) -> CustomDesign:
        data = data if data is not None else self.validated_data
        return CustomDesign(
            image_url=data.get('image_url', ''),
            back_image_url=data.get('back_image_url', ''),
            text=data.get('text', ''),
            options=data.get('options') or {},
        )
