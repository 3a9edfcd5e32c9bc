# apps/ecommerce/models/__init__.py

"""
Storefront models: catalog, coupons, store settings, orders and
merchandising lists
"""

from .catalog import Product
from .coupons import Coupon, canonical_coupon_code
from .settings import StoreSettings
from .orders import Order, OrderItem
from .merchandising import RankList, RankedEntry

__all__ = [
    'Product',
    'Coupon', 'canonical_coupon_code',
    'StoreSettings',
    'Order', 'OrderItem',
    'RankList', 'RankedEntry',
]
