# apps/ecommerce/models/coupons.py

"""
Percentage discount coupons
"""

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.core.models import TimeStampedModel
from ..constants import MIN_COUPON_PERCENT, MAX_COUPON_PERCENT


def canonical_coupon_code(code) -> str:
    """Coupon codes are stored and matched trimmed and upper-cased"""
    return (code or '').strip().upper()


class Coupon(TimeStampedModel):
    """Discount code created by a store administrator"""

    code = models.CharField(max_length=50, unique=True)
    discount_percent = models.PositiveSmallIntegerField(
        validators=[
            MinValueValidator(MIN_COUPON_PERCENT),
            MaxValueValidator(MAX_COUPON_PERCENT),
        ]
    )
    expiry_date = models.DateTimeField()
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'coupons'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_active', 'expiry_date'], name='coupons_active_expiry_idx'),
        ]

    def __str__(self):
        return f"{self.code} ({self.discount_percent}%)"

    def clean(self):
        self.code = canonical_coupon_code(self.code)
        if not self.code:
            raise ValidationError({'code': 'Coupon code is required'})
        if self.discount_percent is not None and not (
            MIN_COUPON_PERCENT <= self.discount_percent <= MAX_COUPON_PERCENT
        ):
            raise ValidationError({
                'discount_percent': f'Discount must be between {MIN_COUPON_PERCENT} and {MAX_COUPON_PERCENT}'
            })

    def save(self, *args, **kwargs):
        self.code = canonical_coupon_code(self.code)
        super().save(*args, **kwargs)

    @property
    def is_expired(self) -> bool:
        return self.expiry_date < timezone.now()
