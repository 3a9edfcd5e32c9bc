# apps/ecommerce/models/settings.py

"""
Store-wide pricing configuration
"""

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal

from apps.core.models import TimeStampedModel
from ..constants import (
    DEFAULT_SHIPPING_FEE, DEFAULT_FREE_SHIPPING_THRESHOLD,
    DEFAULT_GST_PERCENTAGE, DEFAULT_GST_ENABLED,
)
from ..domain.value_objects.pricing import PricingSettings


class StoreSettings(TimeStampedModel):
    """Singleton row holding shipping and tax configuration"""

    SINGLETON_ID = 1

    shipping_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=DEFAULT_SHIPPING_FEE,
        validators=[MinValueValidator(Decimal('0'))]
    )
    free_shipping_threshold = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=DEFAULT_FREE_SHIPPING_THRESHOLD,
        validators=[MinValueValidator(Decimal('0'))]
    )
    gst_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=DEFAULT_GST_PERCENTAGE,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )
    gst_enabled = models.BooleanField(default=DEFAULT_GST_ENABLED)

    class Meta:
        db_table = 'store_settings'
        verbose_name = 'Store Settings'
        verbose_name_plural = 'Store Settings'

    def __str__(self):
        return 'Store Settings'

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_ID
        super().save(*args, **kwargs)

    @classmethod
    def load(cls) -> 'StoreSettings':
        obj, _ = cls.objects.get_or_create(pk=cls.SINGLETON_ID)
        return obj

    def to_pricing_settings(self) -> PricingSettings:
        return PricingSettings(
            shipping_fee=self.shipping_fee,
            free_shipping_threshold=self.free_shipping_threshold,
            gst_percentage=self.gst_percentage,
            gst_enabled=self.gst_enabled,
        )
