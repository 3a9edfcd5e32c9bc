"""
E-Commerce Order Service
Handles order placement for catalog and custom orders, the hand-off message
and order administration
"""

from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional

from django.conf import settings as django_settings
from django.db import DatabaseError, transaction
from django.db.models import QuerySet

from .base import (
    BaseEcommerceService, ServiceError, ValidationError, NotFoundError, StorageError,
)
from .settings import StoreSettingsService
from ..constants import (
    MIN_COUPON_PERCENT, MAX_COUPON_PERCENT, ORDER_KIND_CUSTOM, ORDER_STATUSES_BY_KIND,
)
from ..domain.entities.order_items import (
    CatalogItem, CustomItem, CustomerInfo, OrderLine, order_kind_for,
)
from ..domain.services.order_messages import OrderMessage, OrderMessageBuilder
from ..domain.services.pricing_service import PriceCalculator
from ..domain.value_objects.pricing import CouponCheck, PriceBreakdown
from ..infrastructure.persistence.order_item_writer import OrderItemWriter
from ..models import Order, Product, canonical_coupon_code


class OrderService(BaseEcommerceService):
    """Service for placing and managing orders"""

    def __init__(self, writer: Optional[OrderItemWriter] = None):
        super().__init__()
        self.writer = writer or OrderItemWriter()

    # Validation

    def validate_order_input(self, customer: CustomerInfo, items: List[OrderLine],
                             coupon_code: Optional[str], coupon_discount_percent,
                             total_amount) -> Dict[str, List[str]]:
        """Collect field-level problems with an order; nothing is written"""
        errors: Dict[str, List[str]] = {}

        def add(field, message):
            errors.setdefault(field, []).append(message)

        if not (customer.name or '').strip():
            add('customer.name', 'Customer name is required.')
        if not (customer.phone or '').strip():
            add('customer.phone', 'Phone number is required.')

        if not items:
            add('items', 'At least one item is required.')

        catalog_ids = set()
        for index, item in enumerate(items):
            prefix = f'items[{index}]'
            if item.quantity is None or item.quantity < 1:
                add(f'{prefix}.quantity', 'Quantity must be at least 1.')
            if item.price is None or Decimal(item.price) < 0:
                add(f'{prefix}.price', 'Price cannot be negative.')
            if isinstance(item, CatalogItem):
                catalog_ids.add(item.product_id)
            elif isinstance(item, CustomItem) and not item.asset_references:
                add(f'{prefix}.custom_image_url', 'A design image is required for custom items.')

        if catalog_ids:
            known = set(Product.objects.filter(pk__in=catalog_ids).values_list('pk', flat=True))
            for index, item in enumerate(items):
                if isinstance(item, CatalogItem) and item.product_id not in known:
                    add(f'items[{index}].product_id', f'Product {item.product_id} does not exist.')

        if coupon_code and coupon_discount_percent is not None:
            try:
                percent = int(coupon_discount_percent)
            except (TypeError, ValueError):
                percent = None
            if percent is None or not MIN_COUPON_PERCENT <= percent <= MAX_COUPON_PERCENT:
                add('coupon.discount_percent',
                    f'Discount must be between {MIN_COUPON_PERCENT} and {MAX_COUPON_PERCENT}.')
        elif coupon_code:
            add('coupon.discount_percent', 'Discount percent is required with a coupon code.')

        try:
            if total_amount is None or Decimal(str(total_amount)) < 0:
                add('total_amount', 'Total must not be negative.')
        except (InvalidOperation, ValueError):
            add('total_amount', 'A valid total is required.')

        return errors

    def _raise_for_errors(self, errors: Dict[str, List[str]]):
        if errors:
            field = next(iter(errors))
            raise ValidationError(errors[field][0], details={'field': field, 'errors': errors})

    # Placement

    def reconcile(self, items: List[OrderLine], coupon: CouponCheck,
                  total_amount: Decimal) -> PriceBreakdown:
        """Recompute the breakdown and log when the caller's total disagrees"""
        pricing = StoreSettingsService().get_pricing_settings()
        breakdown = PriceCalculator.compute(items, coupon, pricing)
        if breakdown.total != total_amount:
            self.log_warning("Order total differs from computed total", {
                'supplied_total': str(total_amount),
                'computed_total': str(breakdown.total),
                'coupon_code': coupon.code,
            })
        return breakdown

    def place_order(self, customer: CustomerInfo, items: List[OrderLine],
                    total_amount, coupon_code: Optional[str] = None,
                    coupon_discount_percent: Optional[int] = None) -> Order:
        """
        Persist an order header and all of its items as one unit.

        Input problems raise ValidationError before anything is written. A
        failure while writing items rolls the header back.
        """
        items = list(items)
        coupon_code = canonical_coupon_code(coupon_code) or None
        self._raise_for_errors(self.validate_order_input(
            customer, items, coupon_code, coupon_discount_percent, total_amount
        ))

        total_amount = Decimal(str(total_amount))
        coupon = CouponCheck.from_snapshot(coupon_code, coupon_discount_percent)
        breakdown = self.reconcile(items, coupon, total_amount)

        try:
            with transaction.atomic():
                order = Order.objects.create(
                    kind=order_kind_for(items),
                    customer_name=customer.name.strip(),
                    customer_email=(customer.email or '').strip(),
                    customer_phone=customer.phone.strip(),
                    shipping_address=(customer.shipping_address or '').strip(),
                    payment_channel=customer.payment_channel,
                    subtotal_amount=breakdown.subtotal,
                    discount_amount=breakdown.discount,
                    shipping_amount=breakdown.shipping,
                    tax_amount=breakdown.tax,
                    total_amount=total_amount,
                    coupon_code=coupon.code if coupon.is_valid else '',
                    coupon_discount_percent=coupon.discount_percent,
                )
                self.writer.write(order.pk, items)
        except ServiceError as e:
            self.log_error("Order placement failed", e.original_error or e, {
                'customer_phone': customer.phone,
                'item_count': len(items),
            })
            raise
        except DatabaseError as e:
            self.log_error("Order placement failed", e, {
                'customer_phone': customer.phone,
                'item_count': len(items),
            })
            raise StorageError("Failed to save order", original_error=e)

        self.log_info(f"Order {order.pk} placed", {
            'order_id': order.pk,
            'kind': order.kind,
            'total_amount': str(order.total_amount),
            'item_count': len(items),
        })
        return order

    def place_custom_order(self, customer: CustomerInfo, item: CustomItem,
                           total_amount, coupon_code: Optional[str] = None,
                           coupon_discount_percent: Optional[int] = None) -> Order:
        """Place an order for exactly one custom-designed item"""
        if not isinstance(item, CustomItem):
            raise ValidationError.for_field('items', 'Custom orders take exactly one custom item.')
        return self.place_order(
            customer, [item], total_amount,
            coupon_code=coupon_code,
            coupon_discount_percent=coupon_discount_percent,
        )

    # Hand-off message

    def build_message(self, order: Order) -> OrderMessage:
        """Build the owner notification from the persisted rows"""
        storefront = django_settings.STOREFRONT
        builder = OrderMessageBuilder(
            recipient=storefront['WHATSAPP_NUMBER'],
            currency_symbol=storefront.get('CURRENCY_SYMBOL', '₹'),
        )

        items = order.items.select_related('product')
        missing = self.writer.missing_optional_columns()
        if missing:
            items = items.defer(*missing)
        items = list(items)
        for item in items:
            for column in missing:
                setattr(item, column, None)

        return builder.build(order, items)

    # Administration

    def list_orders(self, kind: Optional[str] = None, status: Optional[str] = None) -> QuerySet:
        queryset = Order.objects.prefetch_related('items', 'items__product')
        if kind:
            queryset = queryset.filter(kind=kind)
        if status:
            queryset = queryset.filter(status=status)
        return queryset

    def get_order(self, order_id: int) -> Order:
        order = Order.objects.filter(pk=order_id).first()
        if order is None:
            raise NotFoundError(f"Order {order_id} not found", details={'order_id': order_id})
        return order

    def update_status(self, order_id: int, status: str) -> Order:
        order = self.get_order(order_id)
        allowed = ORDER_STATUSES_BY_KIND[order.kind]
        if status not in allowed:
            raise ValidationError.for_field(
                'status',
                f"Status must be one of: {', '.join(allowed)}"
            )
        previous = order.status
        order.status = status
        order.save(update_fields=['status', 'updated_at'])
        self.log_info(f"Order {order.pk} status changed", {
            'order_id': order.pk,
            'from': previous,
            'to': status,
        })
        return order

    def delete_order(self, order_id: int):
        """
        Delete an order and its items.

        Stored design images are removed after the transaction commits; see
        the order pre_delete signal handler.
        """
        order = self.get_order(order_id)
        with transaction.atomic():
            order.delete()
        self.log_info(f"Order {order_id} deleted", {
            'order_id': order_id,
            'custom': order.kind == ORDER_KIND_CUSTOM,
        })
