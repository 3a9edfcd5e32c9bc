"""
Store settings serializer
"""

from decimal import Decimal

from rest_framework import serializers


class StoreSettingsSerializer(serializers.Serializer):
    shipping_fee = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0'), required=False
    )
    free_shipping_threshold = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False
    )
    gst_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2,
        min_value=Decimal('0'), max_value=Decimal('100'), required=False
    )
    gst_enabled = serializers.BooleanField(required=False)
