import django_filters

from .constants import ORDER_KIND_CHOICES, ORDER_STATUS_CHOICES
from .models import Order


class OrderFilter(django_filters.FilterSet):
    """Filter for the admin order list"""

    kind = django_filters.ChoiceFilter(
        choices=ORDER_KIND_CHOICES,
        label='Order Kind'
    )

    status = django_filters.ChoiceFilter(
        choices=ORDER_STATUS_CHOICES,
        label='Status'
    )

    phone = django_filters.CharFilter(
        field_name='customer_phone',
        lookup_expr='icontains',
        label='Customer Phone'
    )

    coupon_code = django_filters.CharFilter(
        field_name='coupon_code',
        lookup_expr='iexact',
        label='Coupon Code'
    )

    created_after = django_filters.DateTimeFilter(
        field_name='created_at',
        lookup_expr='gte',
        label='Created After'
    )

    created_before = django_filters.DateTimeFilter(
        field_name='created_at',
        lookup_expr='lte',
        label='Created Before'
    )

    class Meta:
        model = Order
        fields = ['kind', 'status', 'phone', 'coupon_code', 'created_after', 'created_before']
