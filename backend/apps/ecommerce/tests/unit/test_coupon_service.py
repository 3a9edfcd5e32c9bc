# apps/ecommerce/tests/unit/test_coupon_service.py
import pytest
from datetime import timedelta
from django.utils import timezone

from ...domain.value_objects.pricing import CouponStatus
from ...models import Coupon
from ...services.base import ExpiredError, NotFoundError, ValidationError
from ...services.coupon import CouponService
from ..factories import *


@pytest.mark.django_db
class TestCouponValidation:
    """Test CouponService.validate and verify."""

    def test_valid_coupon(self):
        CouponFactory(code='DEV10', discount_percent=10)

        check = CouponService().validate('DEV10')

        assert check.is_valid
        assert check.discount_percent == 10

    def test_lookup_is_case_insensitive_and_trimmed(self):
        CouponFactory(code='DEV10', discount_percent=15)

        check = CouponService().validate('  dev10 ')

        assert check.is_valid
        assert check.code == 'DEV10'

    def test_expired_coupon(self):
        CouponFactory(code='DEV10', expiry_date=timezone.now() - timedelta(days=1))

        check = CouponService().validate('DEV10')

        assert check.status == CouponStatus.EXPIRED
        assert check.discount_percent is None

    def test_inactive_coupon(self):
        CouponFactory(code='DEV10', is_active=False)

        assert CouponService().validate('DEV10').status == CouponStatus.INACTIVE

    def test_unknown_and_empty_codes(self):
        service = CouponService()

        assert service.validate('MISSING').status == CouponStatus.NOT_FOUND
        assert service.validate('').status == CouponStatus.NOT_FOUND
        assert service.validate(None).status == CouponStatus.NOT_FOUND

    def test_validate_honours_reference_time(self):
        coupon = CouponFactory(code='DEV10')

        check = CouponService().validate('DEV10', now=coupon.expiry_date + timedelta(seconds=1))

        assert check.status == CouponStatus.EXPIRED

    def test_verify_raises_expired(self):
        CouponFactory(code='DEV10', expiry_date=timezone.now() - timedelta(days=1))

        with pytest.raises(ExpiredError):
            CouponService().verify('DEV10')

    def test_verify_raises_not_found_for_inactive(self):
        CouponFactory(code='DEV10', is_active=False)

        with pytest.raises(NotFoundError) as exc_info:
            CouponService().verify('DEV10')

        assert exc_info.value.details['reason'] == 'INACTIVE'

    def test_verify_requires_code(self):
        with pytest.raises(ValidationError):
            CouponService().verify('   ')


@pytest.mark.django_db
class TestCouponAdministration:
    """Test coupon creation and deletion."""

    def test_create_canonicalizes_code(self):
        coupon = CouponService().create_coupon(
            ' summer ', 20, timezone.now() + timedelta(days=10)
        )

        assert coupon.code == 'SUMMER'

    def test_create_rejects_duplicate_in_any_case(self):
        CouponFactory(code='SUMMER')

        with pytest.raises(ValidationError) as exc_info:
            CouponService().create_coupon('summer', 20, timezone.now() + timedelta(days=10))

        assert exc_info.value.field_errors == {'code': ['Coupon code already exists']}

    @pytest.mark.parametrize('percent', [0, 101])
    def test_create_rejects_out_of_range_percent(self, percent):
        with pytest.raises(ValidationError):
            CouponService().create_coupon('EDGE', percent, timezone.now() + timedelta(days=1))

    def test_delete(self):
        coupon = CouponFactory()

        CouponService().delete_coupon(coupon.pk)

        assert not Coupon.objects.filter(pk=coupon.pk).exists()

    def test_delete_missing(self):
        with pytest.raises(NotFoundError):
            CouponService().delete_coupon(12345)
