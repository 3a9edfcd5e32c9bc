"""
Value objects consumed and produced by the price calculator
"""

from dataclasses import dataclass, asdict
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from .money import to_decimal
from ...constants import (
    DEFAULT_SHIPPING_FEE, DEFAULT_FREE_SHIPPING_THRESHOLD,
    DEFAULT_GST_PERCENTAGE, DEFAULT_GST_ENABLED,
    MIN_COUPON_PERCENT, MAX_COUPON_PERCENT,
)


@dataclass(frozen=True)
class PricingSettings:
    """Snapshot of the store settings the calculator needs"""
    shipping_fee: Decimal = DEFAULT_SHIPPING_FEE
    free_shipping_threshold: Decimal = DEFAULT_FREE_SHIPPING_THRESHOLD
    gst_percentage: Decimal = DEFAULT_GST_PERCENTAGE
    gst_enabled: bool = DEFAULT_GST_ENABLED

    def __post_init__(self):
        for name in ('shipping_fee', 'free_shipping_threshold', 'gst_percentage'):
            value = to_decimal(getattr(self, name))
            if value < 0:
                raise ValueError(f"{name} cannot be negative")
            object.__setattr__(self, name, value)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CouponStatus(str, Enum):
    VALID = 'VALID'
    NOT_FOUND = 'NOT_FOUND'
    EXPIRED = 'EXPIRED'
    INACTIVE = 'INACTIVE'


@dataclass(frozen=True)
class CouponCheck:
    """
    Outcome of checking a coupon code.

    An invalid check carries the reason and never a percentage, so pricing
    falls back to no discount.
    """
    status: CouponStatus
    code: str = ''
    discount_percent: Optional[int] = None

    @property
    def is_valid(self) -> bool:
        return self.status == CouponStatus.VALID

    @property
    def reason(self) -> Optional[str]:
        return None if self.is_valid else self.status.value

    @classmethod
    def valid(cls, code: str, discount_percent: int) -> 'CouponCheck':
        return cls(CouponStatus.VALID, code, int(discount_percent))

    @classmethod
    def invalid(cls, status: CouponStatus, code: str = '') -> 'CouponCheck':
        if status == CouponStatus.VALID:
            raise ValueError("An invalid coupon check needs a failure reason")
        return cls(status, code)

    @classmethod
    def none(cls) -> 'CouponCheck':
        """No coupon attached"""
        return cls(CouponStatus.NOT_FOUND)

    @classmethod
    def from_snapshot(cls, code: Optional[str], discount_percent) -> 'CouponCheck':
        """Rebuild a check from the coupon snapshot stored on an order"""
        if not code or discount_percent is None:
            return cls.none()
        percent = int(discount_percent)
        if not MIN_COUPON_PERCENT <= percent <= MAX_COUPON_PERCENT:
            raise ValueError(f"Coupon percent out of range: {percent}")
        return cls.valid(code, percent)

    def to_dict(self) -> Dict[str, Any]:
        if self.is_valid:
            return {
                'valid': True,
                'code': self.code,
                'discount_percent': self.discount_percent,
            }
        return {'valid': False, 'code': self.code, 'reason': self.reason}


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    discount: Decimal
    subtotal_after_discount: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal

    @property
    def is_free_shipping(self) -> bool:
        return self.shipping == 0

    def to_dict(self) -> Dict[str, Decimal]:
        return asdict(self)
