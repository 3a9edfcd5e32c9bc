# apps/ecommerce/urls.py

"""
URL configuration for e-commerce module
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views.cart import CartItemsView, CartQuoteView, CartView
from .views.coupons import CouponAdminViewSet, CouponVerifyView
from .views.merchandising import RankEntryPositionView, RankEntryView, RankListView
from .views.orders import CustomOrderPlacementView, OrderAdminViewSet, OrderPlacementView
from .views.settings import StoreSettingsView

app_name = 'ecommerce'

# Admin ViewSets
router = DefaultRouter()
router.register('admin/orders', OrderAdminViewSet, basename='admin-orders')
router.register('admin/coupons', CouponAdminViewSet, basename='admin-coupons')

urlpatterns = [
    # Coupons and settings
    path('coupons/verify/', CouponVerifyView.as_view(), name='coupon-verify'),
    path('settings/', StoreSettingsView.as_view(), name='store-settings'),

    # Cart
    path('cart/', CartView.as_view(), name='cart'),
    path('cart/items/', CartItemsView.as_view(), name='cart-items'),
    path('cart/quote/', CartQuoteView.as_view(), name='cart-quote'),

    # Checkout
    path('orders/', OrderPlacementView.as_view(), name='order-place'),
    path('custom-orders/', CustomOrderPlacementView.as_view(), name='custom-order-place'),

    # Merchandising
    path('merchandising/<str:list_name>/', RankListView.as_view(), name='rank-list'),
    path(
        'merchandising/<str:list_name>/<int:product_id>/',
        RankEntryView.as_view(),
        name='rank-entry'
    ),
    path(
        'merchandising/<str:list_name>/<int:product_id>/position/',
        RankEntryPositionView.as_view(),
        name='rank-entry-position'
    ),

    path('', include(router.urls)),
]
