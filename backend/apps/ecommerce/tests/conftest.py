# apps/ecommerce/tests/conftest.py
import pytest
from decimal import Decimal
from django.core.cache import cache
from rest_framework.test import APIClient

from ..constants import RANK_LIST_FEATURED
from ..domain.entities.order_items import CatalogItem, CustomItem, CustomerInfo
from ..domain.entities.cart import CustomDesign
from ..infrastructure.persistence.order_item_writer import OrderItemWriter
from .factories import *


@pytest.fixture(autouse=True)
def clear_cache():
    """Cached store settings must not leak between tests"""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def reset_order_item_columns():
    """Column sets are cached per process; start every test from the live table"""
    OrderItemWriter.invalidate()
    yield
    OrderItemWriter.invalidate()


@pytest.fixture
def user():
    """Create a shopper account."""
    return UserFactory()


@pytest.fixture
def admin_user():
    """Create a store administrator."""
    return UserFactory(is_staff=True)


@pytest.fixture
def api_client():
    """Create API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(api_client, user):
    """Client logged in as a shopper without admin rights."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """Client logged in as a store administrator."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def store_settings(db):
    """Default pricing: 99 shipping below 999, 18% GST."""
    return StoreSettingsFactory()


@pytest.fixture
def customer():
    return CustomerInfo(
        name='Asha Rao',
        phone='9876543210',
        email='asha@example.com',
        shipping_address='12 Lake Road, Chennai',
    )


@pytest.fixture
def tshirt(db):
    return ProductFactory(name='Classic Tee', price=Decimal('600.00'))


@pytest.fixture
def catalog_item(tshirt):
    return CatalogItem(
        product_id=tshirt.pk,
        quantity=2,
        price=Decimal('600.00'),
        size='M',
        color='Black',
        name=tshirt.name,
    )


@pytest.fixture
def custom_item():
    return CustomItem(
        quantity=1,
        price=Decimal('899.00'),
        size='L',
        color='White',
        name='Custom design',
        design=CustomDesign(
            image_url='/media/designs/front.png',
            back_image_url='/media/designs/back.png',
            text='Hello',
            options={'scale': 1.2, 'position': {'x': 10, 'y': 20}},
        ),
    )


@pytest.fixture
def featured_entries(db):
    """Featured list holding three products at positions 1, 2 and 3."""
    rank_list = RankListFactory(name=RANK_LIST_FEATURED)
    return [
        RankedEntryFactory(rank_list=rank_list, position=position)
        for position in (1, 2, 3)
    ]
