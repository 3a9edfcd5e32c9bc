"""
Coupon service: code validation for checkout and coupon administration
"""

from datetime import datetime
from typing import Optional

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

from .base import (
    BaseEcommerceService, ValidationError, NotFoundError, ExpiredError, StorageError,
)
from ..constants import MIN_COUPON_PERCENT, MAX_COUPON_PERCENT
from ..domain.value_objects.pricing import CouponCheck, CouponStatus
from ..models import Coupon, canonical_coupon_code


class CouponService(BaseEcommerceService):
    """Service for validating and managing discount coupons"""

    def _lookup(self, code: str) -> Optional[Coupon]:
        try:
            return Coupon.objects.filter(code=code).first()
        except DatabaseError as e:
            self.log_error("Coupon lookup failed", e, {'code': code})
            raise StorageError("Could not look up coupon", original_error=e)

    def validate(self, code: Optional[str], now: Optional[datetime] = None) -> CouponCheck:
        """
        Check a code without raising for an unusable coupon.

        Returns a valid check with the discount percentage, or an invalid one
        carrying NOT_FOUND, INACTIVE or EXPIRED so pricing can fall back to no
        discount and the caller can tell the shopper why.
        """
        canonical = canonical_coupon_code(code)
        if not canonical:
            return CouponCheck.invalid(CouponStatus.NOT_FOUND)

        coupon = self._lookup(canonical)
        if coupon is None:
            check = CouponCheck.invalid(CouponStatus.NOT_FOUND, canonical)
        elif not coupon.is_active:
            check = CouponCheck.invalid(CouponStatus.INACTIVE, canonical)
        elif coupon.expiry_date < (now or timezone.now()):
            check = CouponCheck.invalid(CouponStatus.EXPIRED, canonical)
        else:
            return CouponCheck.valid(coupon.code, coupon.discount_percent)

        self.log_info(f"Coupon {canonical} rejected: {check.reason}", {'code': canonical})
        return check

    def verify(self, code: Optional[str]) -> CouponCheck:
        """Raising variant of ``validate`` used by the coupon check endpoint"""
        if not canonical_coupon_code(code):
            raise ValidationError.for_field('code', 'Coupon code is required')

        check = self.validate(code)
        if check.status == CouponStatus.EXPIRED:
            raise ExpiredError(
                'Coupon has expired',
                details={'code': check.code, 'reason': check.reason}
            )
        if not check.is_valid:
            raise NotFoundError(
                'Invalid coupon code',
                details={'code': check.code, 'reason': check.reason}
            )
        return check

    # Administration

    def list_coupons(self) -> QuerySet:
        return Coupon.objects.order_by('-created_at')

    def create_coupon(self, code: str, discount_percent: int, expiry_date: datetime,
                      is_active: bool = True) -> Coupon:
        canonical = canonical_coupon_code(code)
        if not canonical:
            raise ValidationError.for_field('code', 'Coupon code is required')
        if discount_percent is None or not (
            MIN_COUPON_PERCENT <= int(discount_percent) <= MAX_COUPON_PERCENT
        ):
            raise ValidationError.for_field(
                'discount_percent',
                f'Discount must be between {MIN_COUPON_PERCENT} and {MAX_COUPON_PERCENT}'
            )
        if expiry_date is None:
            raise ValidationError.for_field('expiry_date', 'Expiry date is required')
        if Coupon.objects.filter(code=canonical).exists():
            raise ValidationError.for_field('code', 'Coupon code already exists')

        try:
            with transaction.atomic():
                coupon = Coupon.objects.create(
                    code=canonical,
                    discount_percent=int(discount_percent),
                    expiry_date=expiry_date,
                    is_active=is_active,
                )
        except IntegrityError as e:
            raise ValidationError(
                'Coupon code already exists',
                details={'field': 'code', 'errors': {'code': ['Coupon code already exists']}},
                original_error=e
            )

        self.log_info(f"Created coupon {coupon.code}", {
            'coupon_id': coupon.pk,
            'discount_percent': coupon.discount_percent,
        })
        return coupon

    def delete_coupon(self, coupon_id: int):
        deleted, _ = Coupon.objects.filter(pk=coupon_id).delete()
        if not deleted:
            raise NotFoundError(f"Coupon {coupon_id} not found", details={'coupon_id': coupon_id})
        self.log_info(f"Deleted coupon {coupon_id}", {'coupon_id': coupon_id})
