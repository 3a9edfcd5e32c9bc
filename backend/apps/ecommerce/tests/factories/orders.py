# apps/ecommerce/tests/factories/orders.py
import factory
from decimal import Decimal
from factory.django import DjangoModelFactory

from ...constants import ORDER_KIND_CATALOG, ORDER_KIND_CUSTOM
from ...models import Order, OrderItem
from .catalog import ProductFactory


class OrderFactory(DjangoModelFactory):
    class Meta:
        model = Order

    kind = ORDER_KIND_CATALOG
    customer_name = factory.Faker('name')
    customer_email = factory.Faker('email')
    customer_phone = factory.Sequence(lambda n: f"98765{n:05d}")
    shipping_address = factory.Faker('address')
    subtotal_amount = Decimal('1200.00')
    discount_amount = Decimal('0.00')
    shipping_amount = Decimal('0.00')
    tax_amount = Decimal('216.00')
    total_amount = Decimal('1416.00')


class OrderItemFactory(DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory)
    quantity = 1
    size = 'M'
    price = factory.LazyAttribute(lambda obj: obj.product.price if obj.product else Decimal('0'))
    custom_color = 'Black'


class CustomOrderItemFactory(OrderItemFactory):
    order = factory.SubFactory(OrderFactory, kind=ORDER_KIND_CUSTOM)
    product = None
    price = Decimal('899.00')
    custom_image_url = factory.Sequence(lambda n: f"/media/designs/front-{n}.png")
    custom_back_image_url = factory.Sequence(lambda n: f"/media/designs/back-{n}.png")
    custom_text = 'Hello'
    custom_options = factory.LazyFunction(lambda: {'scale': 1.2, 'position': {'x': 10, 'y': 20}})
