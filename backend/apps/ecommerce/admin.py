# apps/ecommerce/admin.py

"""
Django admin configuration for e-commerce models
"""

from django.contrib import admin

from .models import (
    Product, Coupon, StoreSettings, Order, OrderItem, RankList, RankedEntry,
)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'price', 'is_active', 'updated_at')
    list_filter = ('is_active',)
    search_fields = ('name', 'description')


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = ('code', 'discount_percent', 'expiry_date', 'is_active', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('code',)
    readonly_fields = ('created_at', 'updated_at')


@admin.register(StoreSettings)
class StoreSettingsAdmin(admin.ModelAdmin):
    list_display = ('__str__', 'shipping_fee', 'free_shipping_threshold', 'gst_percentage', 'gst_enabled')

    def has_add_permission(self, request):
        return not StoreSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False


class OrderItemInline(admin.TabularInline):
    """Order items are immutable once written"""
    model = OrderItem
    extra = 0
    can_delete = False
    fields = (
        'product', 'quantity', 'size', 'price', 'custom_color',
        'custom_image_url', 'custom_back_image_url', 'custom_text', 'custom_options'
    )
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for orders; only the status is editable"""

    list_display = ('id', 'kind', 'customer_name', 'customer_phone', 'status', 'total_amount', 'created_at')
    list_filter = ('kind', 'status', 'payment_channel', 'created_at')
    search_fields = ('customer_name', 'customer_phone', 'customer_email', 'coupon_code')
    readonly_fields = (
        'kind', 'customer_name', 'customer_email', 'customer_phone', 'shipping_address',
        'payment_channel', 'subtotal_amount', 'discount_amount', 'shipping_amount',
        'tax_amount', 'total_amount', 'coupon_code', 'coupon_discount_percent',
        'created_at', 'updated_at'
    )
    inlines = [OrderItemInline]

    fieldsets = (
        ('Order Information', {
            'fields': ('kind', 'status', 'payment_channel', 'created_at', 'updated_at')
        }),
        ('Customer', {
            'fields': ('customer_name', 'customer_email', 'customer_phone', 'shipping_address')
        }),
        ('Financial Summary', {
            'fields': (
                'subtotal_amount', 'discount_amount', 'shipping_amount',
                'tax_amount', 'total_amount', 'coupon_code', 'coupon_discount_percent'
            )
        }),
    )


class RankedEntryInline(admin.TabularInline):
    """Positions are maintained through the merchandising API"""
    model = RankedEntry
    extra = 0
    fields = ('product', 'position', 'created_at')
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(RankList)
class RankListAdmin(admin.ModelAdmin):
    list_display = ('name',)
    inlines = [RankedEntryInline]
