# apps/ecommerce/tests/unit/test_pricing.py
import pytest
from decimal import Decimal

from ...domain.entities.cart import LineItem, LineItemIdentity
from ...domain.services.pricing_service import PriceCalculator
from ...domain.value_objects.money import format_amount, percent_of, round_to_unit
from ...domain.value_objects.pricing import CouponCheck, CouponStatus, PricingSettings


def line(price, quantity=1, product_id=1):
    return LineItem(
        identity=LineItemIdentity.build(product_id, 'M', 'Black'),
        name='Tee',
        unit_price=Decimal(price),
        quantity=quantity,
    )


@pytest.fixture
def settings_default():
    return PricingSettings(
        shipping_fee=Decimal('99'),
        free_shipping_threshold=Decimal('999'),
        gst_percentage=Decimal('18'),
        gst_enabled=True,
    )


class TestMoney:
    """Test currency rounding helpers."""

    def test_round_half_up(self):
        assert round_to_unit(Decimal('194.4')) == Decimal('194')
        assert round_to_unit(Decimal('194.5')) == Decimal('195')

    def test_percent_of_rounds_once(self):
        assert percent_of(Decimal('1080'), 18) == Decimal('194')
        assert percent_of('0.1', 50) == Decimal('0')

    def test_format_amount(self):
        assert format_amount(Decimal('1416')) == '₹1,416'
        assert format_amount(Decimal('12.50'), symbol='$') == '$12.50'


class TestPriceCalculator:
    """Test the checkout price breakdown."""

    def test_no_coupon_above_threshold(self, settings_default):
        breakdown = PriceCalculator.compute([line('600', 2)], CouponCheck.none(), settings_default)

        assert breakdown.subtotal == Decimal('1200')
        assert breakdown.discount == Decimal('0')
        assert breakdown.shipping == Decimal('0')
        assert breakdown.tax == Decimal('216')
        assert breakdown.total == Decimal('1416')

    def test_coupon_applies_before_shipping_and_tax(self, settings_default):
        coupon = CouponCheck.valid('SAVE10', 10)
        breakdown = PriceCalculator.compute([line('1200')], coupon, settings_default)

        assert breakdown.discount == Decimal('120')
        assert breakdown.subtotal_after_discount == Decimal('1080')
        assert breakdown.shipping == Decimal('0')
        assert breakdown.tax == Decimal('194')
        assert breakdown.total == Decimal('1274')

    def test_below_threshold_pays_shipping(self, settings_default):
        breakdown = PriceCalculator.compute([line('500')], CouponCheck.none(), settings_default)

        assert breakdown.shipping == Decimal('99')
        assert breakdown.tax == Decimal('90')
        assert breakdown.total == Decimal('689')

    def test_threshold_equality_ships_free(self, settings_default):
        breakdown = PriceCalculator.compute([line('999')], CouponCheck.none(), settings_default)

        assert breakdown.shipping == Decimal('0')
        assert breakdown.is_free_shipping

    def test_discount_can_drop_below_threshold(self, settings_default):
        coupon = CouponCheck.valid('SAVE20', 20)
        breakdown = PriceCalculator.compute([line('1200')], coupon, settings_default)

        assert breakdown.subtotal_after_discount == Decimal('960')
        assert breakdown.shipping == Decimal('99')

    def test_gst_disabled_has_no_tax(self, settings_default):
        settings = PricingSettings(
            shipping_fee=settings_default.shipping_fee,
            free_shipping_threshold=settings_default.free_shipping_threshold,
            gst_percentage=settings_default.gst_percentage,
            gst_enabled=False,
        )
        breakdown = PriceCalculator.compute(
            [line('300', 2), line('150', 1, product_id=2)], CouponCheck.none(), settings
        )

        assert breakdown.tax == Decimal('0')
        assert breakdown.total == Decimal('750') + Decimal('99')

    @pytest.mark.parametrize('status', [
        CouponStatus.NOT_FOUND, CouponStatus.EXPIRED, CouponStatus.INACTIVE,
    ])
    def test_unusable_coupon_gives_no_discount(self, settings_default, status):
        coupon = CouponCheck.invalid(status, 'DEV10')
        breakdown = PriceCalculator.compute([line('1200')], coupon, settings_default)

        assert breakdown.discount == Decimal('0')
        assert breakdown.total == Decimal('1416')

    def test_empty_cart(self, settings_default):
        breakdown = PriceCalculator.compute([], CouponCheck.none(), settings_default)

        assert breakdown.subtotal == Decimal('0')
        assert breakdown.shipping == Decimal('99')
        assert breakdown.total == Decimal('99')


class TestPricingValueObjects:
    """Test pricing value object guards."""

    def test_negative_settings_rejected(self):
        with pytest.raises(ValueError):
            PricingSettings(shipping_fee=Decimal('-1'))

    def test_snapshot_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            CouponCheck.from_snapshot('BIG', 101)

    def test_snapshot_without_code_is_no_coupon(self):
        check = CouponCheck.from_snapshot('', 10)

        assert not check.is_valid
        assert check.discount_percent is None

    def test_invalid_check_serializes_reason(self):
        check = CouponCheck.invalid(CouponStatus.EXPIRED, 'DEV10')

        assert check.to_dict() == {'valid': False, 'code': 'DEV10', 'reason': 'EXPIRED'}
