# apps/ecommerce/models/catalog.py

"""
Catalog products that carts price and merchandising lists promote
"""

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal

from apps.core.models import TimeStampedModel


class ProductQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class Product(TimeStampedModel):
    """Sellable catalog product"""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    image_url = models.CharField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        db_table = 'products'
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active', 'name'], name='products_active_name_idx'),
        ]

    def __str__(self):
        return self.name
