from .money import to_decimal, round_to_unit, percent_of, format_amount
from .pricing import PricingSettings, CouponStatus, CouponCheck, PriceBreakdown
