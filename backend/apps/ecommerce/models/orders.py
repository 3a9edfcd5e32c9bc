# apps/ecommerce/models/orders.py

"""
Orders and their line items
"""

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal

from apps.core.models import TimeStampedModel
from ..constants import (
    ORDER_KIND_CHOICES, ORDER_KIND_CATALOG, ORDER_STATUS_CHOICES,
    ORDER_STATUS_PENDING, ORDER_STATUSES_BY_KIND, PAYMENT_CHANNEL_CHOICES,
    PAYMENT_CHANNEL_WHATSAPP,
)


class Order(TimeStampedModel):
    """
    Order header.

    ``total_amount`` is the total the shopper was shown and is never changed
    after creation. The component amounts are the server-side breakdown
    computed when the order was placed.
    """

    kind = models.CharField(
        max_length=20,
        choices=ORDER_KIND_CHOICES,
        default=ORDER_KIND_CATALOG
    )
    status = models.CharField(
        max_length=20,
        choices=ORDER_STATUS_CHOICES,
        default=ORDER_STATUS_PENDING
    )

    # Customer
    customer_name = models.CharField(max_length=255)
    customer_email = models.EmailField(blank=True)
    customer_phone = models.CharField(max_length=32)
    shipping_address = models.TextField(blank=True)
    payment_channel = models.CharField(
        max_length=50,
        choices=PAYMENT_CHANNEL_CHOICES,
        default=PAYMENT_CHANNEL_WHATSAPP
    )

    # Amounts
    subtotal_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    shipping_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )

    # Coupon snapshot
    coupon_code = models.CharField(max_length=50, blank=True)
    coupon_discount_percent = models.PositiveSmallIntegerField(null=True, blank=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['kind', 'status'], name='orders_kind_status_idx'),
            models.Index(fields=['created_at'], name='orders_created_at_idx'),
        ]

    def __str__(self):
        return f"Order #{self.pk} ({self.get_kind_display()})"

    @property
    def allowed_statuses(self):
        return ORDER_STATUSES_BY_KIND[self.kind]

    @property
    def design_asset_references(self):
        references = []
        for item in self.items.all():
            references.extend(item.design_asset_references)
        return references


class OrderItem(models.Model):
    """
    A line of an order.

    Catalog lines reference a product. Custom lines have no product and carry
    the shopper's design in the ``custom_*`` columns instead.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items'
    )
    product = models.ForeignKey(
        'ecommerce.Product',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='order_items'
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    size = models.CharField(max_length=50, blank=True, null=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)

    # Custom design
    custom_color = models.CharField(max_length=50, blank=True, null=True)
    custom_image_url = models.CharField(max_length=500, blank=True, null=True)
    custom_back_image_url = models.CharField(max_length=500, blank=True, null=True)
    custom_text = models.TextField(blank=True, null=True)
    custom_options = models.JSONField(blank=True, null=True)

    class Meta:
        db_table = 'order_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.product or 'custom design'}"

    @property
    def is_custom(self) -> bool:
        return self.product_id is None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    @property
    def design_asset_references(self):
        return [url for url in (self.custom_image_url, self.custom_back_image_url) if url]
