"""E-commerce domain layer: cart, pricing and order hand-off rules free of persistence"""

from .entities.cart import Cart, CustomDesign, LineItem, LineItemIdentity
from .services.pricing_service import PriceCalculator
from .value_objects.pricing import CouponCheck, CouponStatus, PriceBreakdown, PricingSettings

__all__ = [
    'Cart',
    'CustomDesign',
    'LineItem',
    'LineItemIdentity',
    'PriceCalculator',
    'CouponCheck',
    'CouponStatus',
    'PriceBreakdown',
    'PricingSettings',
]
