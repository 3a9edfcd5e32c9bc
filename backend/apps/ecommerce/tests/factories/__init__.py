# apps/ecommerce/tests/factories/__init__.py
from .core import *
from .catalog import *
from .orders import *
from .merchandising import *

__all__ = [
    # Core factories
    'UserFactory',

    # Catalog factories
    'ProductFactory', 'CouponFactory', 'StoreSettingsFactory',

    # Order factories
    'OrderFactory', 'OrderItemFactory', 'CustomOrderItemFactory',

    # Merchandising factories
    'RankListFactory', 'RankedEntryFactory',
]
