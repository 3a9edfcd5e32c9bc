# apps/ecommerce/constants.py

"""
Constants for the e-commerce module
"""

from decimal import Decimal

# Product id used on the wire for custom-designed order items
CUSTOM_PRODUCT_SENTINEL = -1

# Order kinds
ORDER_KIND_CATALOG = 'catalog'
ORDER_KIND_CUSTOM = 'custom'

ORDER_KIND_CHOICES = [
    (ORDER_KIND_CATALOG, 'Catalog Order'),
    (ORDER_KIND_CUSTOM, 'Custom Order'),
]

# Order status choices
ORDER_STATUS_PENDING = 'pending'
ORDER_STATUS_PAID = 'paid'
ORDER_STATUS_IN_PROGRESS = 'in_progress'
ORDER_STATUS_COMPLETED = 'completed'
ORDER_STATUS_CANCELLED = 'cancelled'

ORDER_STATUS_CHOICES = [
    (ORDER_STATUS_PENDING, 'Pending'),
    (ORDER_STATUS_PAID, 'Paid'),
    (ORDER_STATUS_IN_PROGRESS, 'In Progress'),
    (ORDER_STATUS_COMPLETED, 'Completed'),
    (ORDER_STATUS_CANCELLED, 'Cancelled'),
]

# Statuses an order may take, per kind
ORDER_STATUSES_BY_KIND = {
    ORDER_KIND_CATALOG: (
        ORDER_STATUS_PENDING,
        ORDER_STATUS_PAID,
        ORDER_STATUS_CANCELLED,
    ),
    ORDER_KIND_CUSTOM: (
        ORDER_STATUS_PENDING,
        ORDER_STATUS_IN_PROGRESS,
        ORDER_STATUS_COMPLETED,
        ORDER_STATUS_CANCELLED,
    ),
}

# Payment channel markers
PAYMENT_CHANNEL_WHATSAPP = 'whatsapp'
PAYMENT_CHANNEL_COD = 'cod'
PAYMENT_CHANNEL_ONLINE = 'online'

PAYMENT_CHANNEL_CHOICES = [
    (PAYMENT_CHANNEL_WHATSAPP, 'WhatsApp'),
    (PAYMENT_CHANNEL_COD, 'Cash on Delivery'),
    (PAYMENT_CHANNEL_ONLINE, 'Online'),
]

# Merchandising lists
RANK_LIST_FEATURED = 'featured'
RANK_LIST_HERO = 'hero'

RANK_LIST_CHOICES = [
    (RANK_LIST_FEATURED, 'Featured Products'),
    (RANK_LIST_HERO, 'Hero Carousel'),
]

MOVE_UP = 'up'
MOVE_DOWN = 'down'

MOVE_DIRECTION_CHOICES = [
    (MOVE_UP, 'Up'),
    (MOVE_DOWN, 'Down'),
]

# Coupon limits
MIN_COUPON_PERCENT = 1
MAX_COUPON_PERCENT = 100

# Store settings defaults, used until an administrator saves the singleton
DEFAULT_SHIPPING_FEE = Decimal('99')
DEFAULT_FREE_SHIPPING_THRESHOLD = Decimal('999')
DEFAULT_GST_PERCENTAGE = Decimal('18')
DEFAULT_GST_ENABLED = True

STORE_SETTINGS_CACHE_KEY = 'ecommerce:store_settings'

# Session key holding the serialized cart
CART_SESSION_KEY = 'storefront_cart_v1'

# Columns of order_items that may be absent on databases mid-upgrade
OPTIONAL_ORDER_ITEM_COLUMNS = ('custom_options',)
