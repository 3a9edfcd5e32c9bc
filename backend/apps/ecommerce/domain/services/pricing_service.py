"""
Price calculator used for both the checkout display and the persisted order.
"""

from decimal import Decimal
from typing import Iterable, Protocol

from ..value_objects.money import percent_of
from ..value_objects.pricing import CouponCheck, PriceBreakdown, PricingSettings


class PricedLine(Protocol):
    @property
    def line_total(self) -> Decimal: ...


class PriceCalculator:
    """
    Pure price calculation over line items, one coupon state and the store
    settings.

    Steps run in a fixed order and each rounding happens exactly once:

    1. subtotal is the sum of unit price times quantity
    2. discount is the coupon percentage of the subtotal, rounded
    3. the discounted subtotal decides free shipping (equality is free)
    4. tax is the GST percentage of the discounted subtotal, rounded
    5. total is discounted subtotal plus shipping plus tax
    """

    @staticmethod
    def compute(
        line_items: Iterable[PricedLine],
        coupon: CouponCheck,
        settings: PricingSettings,
    ) -> PriceBreakdown:
        subtotal = sum((item.line_total for item in line_items), Decimal('0'))

        discount = Decimal('0')
        if coupon is not None and coupon.is_valid:
            discount = percent_of(subtotal, coupon.discount_percent)

        subtotal_after_discount = subtotal - discount

        if subtotal_after_discount >= settings.free_shipping_threshold:
            shipping = Decimal('0')
        else:
            shipping = settings.shipping_fee

        tax = Decimal('0')
        if settings.gst_enabled:
            tax = percent_of(subtotal_after_discount, settings.gst_percentage)

        return PriceBreakdown(
            subtotal=subtotal,
            discount=discount,
            subtotal_after_discount=subtotal_after_discount,
            shipping=shipping,
            tax=tax,
            total=subtotal_after_discount + shipping + tax,
        )
