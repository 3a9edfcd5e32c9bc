"""
Cart service for e-commerce functionality
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional, Tuple

from .base import BaseEcommerceService, ValidationError, NotFoundError
from .coupon import CouponService
from .settings import StoreSettingsService
from ..domain.entities.cart import Cart, CustomDesign, LineItem, LineItemIdentity
from ..domain.services.pricing_service import PriceCalculator
from ..domain.value_objects.pricing import CouponCheck, PriceBreakdown
from ..infrastructure.session_cart import SessionCartStorage
from ..models import Product


class CartService(BaseEcommerceService):
    """Service for managing the shopper's session cart"""

    def __init__(self, storage: SessionCartStorage):
        super().__init__()
        self.storage = storage
        self._cart: Optional[Cart] = None

    @classmethod
    def for_request(cls, request) -> 'CartService':
        return cls(SessionCartStorage(request.session))

    @property
    def cart(self) -> Cart:
        if self._cart is None:
            self._cart = self.storage.load()
        return self._cart

    def _validate_quantity(self, quantity) -> int:
        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            raise ValidationError.for_field('quantity', 'Quantity must be a whole number')
        if quantity < 1:
            raise ValidationError.for_field('quantity', 'Quantity must be at least 1')
        return quantity

    def _validate_price(self, price) -> Decimal:
        try:
            price = Decimal(str(price))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError.for_field('price', 'A valid price is required')
        if price < 0:
            raise ValidationError.for_field('price', 'Price cannot be negative')
        return price

    def add_product(self, product_id: int, quantity: int = 1, size: str = '', color: str = '') -> LineItem:
        """Add a catalog product, snapshotting its current price"""
        quantity = self._validate_quantity(quantity)
        product = Product.objects.active().filter(pk=product_id).first()
        if product is None:
            raise NotFoundError(f"Product {product_id} not found", details={'product_id': product_id})

        item = self.cart.add(LineItem(
            identity=LineItemIdentity.build(product.pk, size, color),
            name=product.name,
            unit_price=product.price,
            quantity=quantity,
        ))
        self.log_info(f"Added product {product.pk} to cart", {
            'product_id': product.pk,
            'quantity': quantity,
            'size': size,
        })
        return item

    def add_custom_item(self, price, design: CustomDesign, quantity: int = 1,
                        size: str = '', color: str = '', name: str = '') -> LineItem:
        """Add a custom-designed item at the price shown in the designer"""
        quantity = self._validate_quantity(quantity)
        price = self._validate_price(price)
        if not design.has_design:
            raise ValidationError.for_field('custom_image_url', 'A design image is required for custom items')

        item = self.cart.add(LineItem(
            identity=LineItemIdentity.build(None, size, color),
            name=name or 'Custom design',
            unit_price=price,
            quantity=quantity,
            custom=design,
        ))
        self.log_info("Added custom design to cart", {'size': size, 'color': color})
        return item

    def set_quantity(self, product_id, quantity: int, size: str = '', color: str = ''):
        """Change a line's quantity; zero or less removes the line"""
        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            raise ValidationError.for_field('quantity', 'Quantity must be a whole number')
        self.cart.set_quantity(LineItemIdentity.build(product_id, size, color), quantity)

    def remove(self, product_id, size: str = '', color: str = ''):
        self.cart.remove(LineItemIdentity.build(product_id, size, color))

    def clear(self):
        self.cart.clear()

    def quote(self, coupon_code: Optional[str] = None,
              items: Optional[Iterable[LineItem]] = None) -> Tuple[PriceBreakdown, CouponCheck]:
        """
        Price the cart (or the given items) with an optional coupon.

        An unusable coupon does not fail the quote; it prices without a
        discount and the returned check says why.
        """
        coupon = CouponService().validate(coupon_code) if coupon_code else CouponCheck.none()
        settings = StoreSettingsService().get_pricing_settings()
        lines = list(items) if items is not None else self.cart.list()
        return PriceCalculator.compute(lines, coupon, settings), coupon

    def summary(self) -> Dict[str, Any]:
        return {
            'items': self.cart.to_list(),
            'item_count': self.cart.item_count,
        }
