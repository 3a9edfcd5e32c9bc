"""
Services for the e-commerce module.
Business logic layer for carts, coupons, store settings, orders and
merchandising lists. Import services from their modules directly.
"""

from .base import (  # noqa: F401
    ServiceError, ValidationError, NotFoundError, ExpiredError,
    StorageError, ConflictError, BaseEcommerceService,
)
