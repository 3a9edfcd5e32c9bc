# apps/ecommerce/tests/unit/test_cart.py
import pytest
from decimal import Decimal

from ...constants import CART_SESSION_KEY, CUSTOM_PRODUCT_SENTINEL
from ...domain.entities.cart import Cart, CustomDesign, LineItem, LineItemIdentity
from ...infrastructure.session_cart import SessionCartStorage
from ...services.base import NotFoundError, ValidationError
from ...services.cart import CartService
from ..factories import *


class FakeSession(dict):
    modified = False


def tee(quantity=1, price='499', size='M', color='Black', product_id=7):
    return LineItem(
        identity=LineItemIdentity.build(product_id, size, color),
        name='Tee',
        unit_price=Decimal(price),
        quantity=quantity,
    )


class TestCart:
    """Test cart merge and mutation rules."""

    def test_same_identity_merges(self):
        cart = Cart()
        cart.add(tee())
        cart.add(tee())

        assert len(cart) == 1
        assert cart.list()[0].quantity == 2

    def test_merge_keeps_first_price(self):
        cart = Cart()
        cart.add(tee(price='499'))
        cart.add(tee(price='549'))

        assert cart.list()[0].unit_price == Decimal('499')

    def test_size_or_color_makes_separate_lines(self):
        cart = Cart()
        cart.add(tee(size='M'))
        cart.add(tee(size='L'))
        cart.add(tee(size='L', color='White'))

        assert len(cart) == 3
        assert cart.item_count == 3

    def test_set_quantity_zero_removes(self):
        cart = Cart([tee(quantity=3)])
        cart.set_quantity(LineItemIdentity.build(7, 'M', 'Black'), 0)

        assert cart.is_empty

    def test_set_quantity_updates(self):
        cart = Cart([tee()])
        cart.set_quantity(LineItemIdentity.build(7, 'M', 'Black'), 5)

        assert cart.list()[0].quantity == 5

    def test_unknown_identity_is_ignored(self):
        cart = Cart([tee()])
        calls = []
        cart.subscribe(calls.append)

        cart.remove(LineItemIdentity.build(99, 'M', 'Black'))
        cart.set_quantity(LineItemIdentity.build(99, 'M', 'Black'), 2)

        assert len(cart) == 1
        assert calls == []

    def test_listeners_notified_after_each_mutation(self):
        cart = Cart()
        seen = []
        unsubscribe = cart.subscribe(lambda c: seen.append(c.item_count))

        cart.add(tee())
        cart.add(tee())
        cart.clear()
        unsubscribe()
        cart.add(tee())

        assert seen == [1, 2, 0]

    def test_custom_sentinel_maps_to_custom_identity(self):
        identity = LineItemIdentity.build(CUSTOM_PRODUCT_SENTINEL, ' L ', 'White')

        assert identity.is_custom
        assert identity.size == 'L'

    def test_round_trip_keeps_custom_design(self):
        design = CustomDesign(image_url='/media/designs/a.png', options={'scale': 1.5})
        cart = Cart([LineItem(
            identity=LineItemIdentity.build(None, 'L', 'White'),
            name='Custom design',
            unit_price=Decimal('899'),
            custom=design,
        )])

        data = cart.to_list()
        restored = Cart.from_list(data)

        assert data[0]['product_id'] == CUSTOM_PRODUCT_SENTINEL
        assert restored.list()[0].custom == design

    def test_invalid_lines_rejected(self):
        with pytest.raises(ValueError):
            tee(quantity=0)
        with pytest.raises(ValueError):
            tee(price='-1')


class TestSessionCartStorage:
    """Test persisting the cart in the session."""

    def test_mutations_are_written_back(self):
        session = FakeSession()
        cart = SessionCartStorage(session).load()

        cart.add(tee(quantity=2))

        assert session[CART_SESSION_KEY][0]['quantity'] == 2
        assert session.modified is True

    def test_unreadable_cart_is_discarded(self):
        session = FakeSession({CART_SESSION_KEY: [{'name': 'broken'}]})

        cart = SessionCartStorage(session).load()

        assert cart.is_empty
        assert session[CART_SESSION_KEY] == []

    def test_clear_drops_key(self):
        session = FakeSession({CART_SESSION_KEY: []})
        SessionCartStorage(session).clear()

        assert CART_SESSION_KEY not in session


@pytest.mark.django_db
class TestCartService:
    """Test CartService functionality."""

    def test_add_product_snapshots_price(self):
        product = ProductFactory(price=Decimal('650.00'))
        service = CartService(SessionCartStorage(FakeSession()))

        item = service.add_product(product.pk, quantity=2, size='M', color='Black')
        product.price = Decimal('700.00')
        product.save()
        service.add_product(product.pk, size='M', color='Black')

        assert item.quantity == 3
        assert item.unit_price == Decimal('650.00')

    def test_add_inactive_product_fails(self):
        product = ProductFactory(is_active=False)
        service = CartService(SessionCartStorage(FakeSession()))

        with pytest.raises(NotFoundError):
            service.add_product(product.pk)

    def test_add_custom_requires_design(self):
        service = CartService(SessionCartStorage(FakeSession()))

        with pytest.raises(ValidationError) as exc_info:
            service.add_custom_item(Decimal('899'), CustomDesign(text='Hi'))

        assert exc_info.value.details['field'] == 'custom_image_url'

    def test_quote_with_coupon(self, store_settings):
        CouponFactory(code='SAVE10', discount_percent=10)
        product = ProductFactory(price=Decimal('1200.00'))
        service = CartService(SessionCartStorage(FakeSession()))
        service.add_product(product.pk)

        breakdown, coupon = service.quote(coupon_code='save10')

        assert coupon.is_valid
        assert breakdown.total == Decimal('1274')

    def test_quote_with_unknown_coupon_prices_without_discount(self, store_settings):
        product = ProductFactory(price=Decimal('500.00'))
        service = CartService(SessionCartStorage(FakeSession()))
        service.add_product(product.pk)

        breakdown, coupon = service.quote(coupon_code='NOPE')

        assert coupon.reason == 'NOT_FOUND'
        assert breakdown.total == Decimal('689')
