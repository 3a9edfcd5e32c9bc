"""
Coupon serializers
"""

from rest_framework import serializers

from ..constants import MIN_COUPON_PERCENT, MAX_COUPON_PERCENT
from ..models import Coupon


class CouponVerifySerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50, allow_blank=True)


class CouponCheckSerializer(serializers.Serializer):
    code = serializers.CharField()
    discount_percent = serializers.IntegerField()


class CouponSerializer(serializers.ModelSerializer):
    """Serializer for coupon administration"""

    discount_percent = serializers.IntegerField(
        min_value=MIN_COUPON_PERCENT,
        max_value=MAX_COUPON_PERCENT
    )
    is_expired = serializers.BooleanField(read_only=True)

    class Meta:
        model = Coupon
        fields = [
            'id', 'code', 'discount_percent', 'expiry_date', 'is_active',
            'is_expired', 'created_at'
        ]
        read_only_fields = ['id', 'is_expired', 'created_at']
        extra_kwargs = {
            # Uniqueness is checked against the canonical code by the service
            'code': {'validators': []},
        }
