"""
Merchandising list serializers
"""

from rest_framework import serializers

from .base import ProductSummarySerializer
from ..constants import MOVE_DIRECTION_CHOICES
from ..models import RankedEntry


class RankedEntrySerializer(serializers.ModelSerializer):
    product = ProductSummarySerializer(read_only=True)

    class Meta:
        model = RankedEntry
        fields = ['id', 'position', 'product']
        read_only_fields = fields


class RankListAddSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)


class RankMoveSerializer(serializers.Serializer):
    direction = serializers.ChoiceField(choices=MOVE_DIRECTION_CHOICES)
