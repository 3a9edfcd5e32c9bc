# apps/ecommerce/tests/unit/test_order_service.py
import logging
import pytest
from decimal import Decimal
from unittest.mock import patch
from urllib.parse import unquote

from django.db import OperationalError, connection

from ...constants import (
    ORDER_KIND_CATALOG, ORDER_KIND_CUSTOM, ORDER_STATUS_COMPLETED, ORDER_STATUS_PAID,
)
from ...domain.entities.cart import CustomDesign
from ...domain.entities.order_items import CatalogItem, CustomItem, CustomerInfo
from ...infrastructure.persistence.order_item_writer import OrderItemWriter
from ...models import Order, OrderItem
from ...services.base import NotFoundError, StorageError, ValidationError
from ...services.order import OrderService
from ..factories import *


@pytest.mark.django_db
class TestOrderValidation:
    """Test order input validation; nothing may be written on failure."""

    def test_empty_items_rejected(self, customer):
        with pytest.raises(ValidationError) as exc_info:
            OrderService().place_order(customer, [], Decimal('0'))

        assert 'items' in exc_info.value.field_errors
        assert Order.objects.count() == 0

    def test_custom_item_without_design_rejected(self, customer, store_settings):
        item = CustomItem(quantity=1, price=Decimal('899'), design=CustomDesign(text='Hi'))

        with pytest.raises(ValidationError) as exc_info:
            OrderService().place_order(customer, [item], Decimal('1160'))

        assert 'items[0].custom_image_url' in exc_info.value.field_errors
        assert Order.objects.count() == 0

    def test_missing_customer_fields(self, catalog_item):
        customer = CustomerInfo(name='  ', phone='')

        errors = OrderService().validate_order_input(customer, [catalog_item], None, None, Decimal('1416'))

        assert set(errors) == {'customer.name', 'customer.phone'}

    def test_unknown_product_rejected(self, customer):
        item = CatalogItem(product_id=999999, quantity=1, price=Decimal('100'))

        errors = OrderService().validate_order_input(customer, [item], None, None, Decimal('100'))

        assert 'items[0].product_id' in errors

    @pytest.mark.parametrize('percent', [0, 101, None])
    def test_coupon_percent_out_of_range(self, customer, catalog_item, percent):
        errors = OrderService().validate_order_input(
            customer, [catalog_item], 'SAVE10', percent, Decimal('1274')
        )

        assert 'coupon.discount_percent' in errors

    def test_bad_quantity_and_price(self, customer, tshirt):
        item = CatalogItem(product_id=tshirt.pk, quantity=0, price=Decimal('-5'))

        errors = OrderService().validate_order_input(customer, [item], None, None, Decimal('0'))

        assert {'items[0].quantity', 'items[0].price'} <= set(errors)


@pytest.mark.django_db
class TestOrderPlacement:
    """Test writing orders and their items."""

    def test_place_catalog_order(self, customer, catalog_item, store_settings):
        order = OrderService().place_order(customer, [catalog_item], Decimal('1416'))

        order.refresh_from_db()
        assert order.kind == ORDER_KIND_CATALOG
        assert order.subtotal_amount == Decimal('1200')
        assert order.tax_amount == Decimal('216')
        assert order.total_amount == Decimal('1416')

        item = order.items.get()
        assert item.product_id == catalog_item.product_id
        assert item.quantity == 2
        assert item.size == 'M'
        assert item.custom_color == 'Black'
        assert item.custom_options is None

    def test_place_with_coupon_snapshot(self, customer, catalog_item, store_settings):
        order = OrderService().place_order(
            customer, [catalog_item], Decimal('1274'),
            coupon_code=' save10 ', coupon_discount_percent=10,
        )

        order.refresh_from_db()
        assert order.coupon_code == 'SAVE10'
        assert order.coupon_discount_percent == 10
        assert order.discount_amount == Decimal('120')

    def test_total_mismatch_is_logged_and_kept(self, customer, catalog_item, store_settings, caplog):
        with caplog.at_level(logging.WARNING):
            order = OrderService().place_order(customer, [catalog_item], Decimal('1400'))

        order.refresh_from_db()
        assert order.total_amount == Decimal('1400')
        assert 'Order total differs from computed total' in caplog.text

    def test_place_custom_order(self, customer, custom_item, store_settings):
        order = OrderService().place_custom_order(customer, custom_item, Decimal('1160'))

        assert order.kind == ORDER_KIND_CUSTOM
        item = order.items.get()
        assert item.product_id is None
        assert item.custom_image_url == '/media/designs/front.png'
        assert item.custom_back_image_url == '/media/designs/back.png'
        assert item.custom_text == 'Hello'
        assert item.custom_options == {'scale': 1.2, 'position': {'x': 10, 'y': 20}}

    def test_custom_order_needs_custom_item(self, customer, catalog_item):
        with pytest.raises(ValidationError):
            OrderService().place_custom_order(customer, catalog_item, Decimal('1416'))

    def test_item_failure_rolls_back_header(self, customer, catalog_item, store_settings):
        def broken(self, fields, rows):
            raise OperationalError('disk I/O error')

        with patch.object(OrderItemWriter, '_execute', broken):
            with pytest.raises(StorageError):
                OrderService().place_order(customer, [catalog_item], Decimal('1416'))

        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0


@pytest.mark.django_db
class TestOptionalColumnFallback:
    """Test writing items to tables that lack optional columns."""

    def test_negotiated_columns_skip_missing_optional(self, customer, custom_item, store_settings):
        writer = OrderItemWriter()
        live_columns = writer.writable_columns()
        OrderItemWriter.invalidate()

        with patch.object(
            OrderItemWriter, '_introspect',
            return_value=live_columns - {'custom_options'}
        ):
            service = OrderService(writer=OrderItemWriter())
            order = service.place_custom_order(customer, custom_item, Decimal('1160'))
            assert service.writer.missing_optional_columns() == ['custom_options']
            message = service.build_message(order)

        item = OrderItem.objects.get(order=order)
        assert item.custom_options is None
        assert item.custom_image_url == '/media/designs/front.png'
        assert '- Specs:' not in message.text

    def test_missing_column_error_retries_once(self, customer, custom_item, store_settings):
        original = OrderItemWriter._execute
        attempts = []

        def flaky(self, fields, rows):
            attempts.append([field.column for field in fields])
            if len(attempts) == 1:
                raise OperationalError('table order_items has no column named custom_options')
            return original(self, fields, rows)

        with patch.object(OrderItemWriter, '_execute', flaky):
            order = OrderService().place_custom_order(customer, custom_item, Decimal('1160'))

        assert len(attempts) == 2
        assert 'custom_options' in attempts[0]
        assert 'custom_options' not in attempts[1]
        assert OrderItem.objects.get(order=order).custom_options is None

    @pytest.mark.django_db(transaction=True)
    def test_column_dropped_after_negotiation(self, customer, custom_item, store_settings):
        """The live database error for a dropped column triggers the retry."""
        writer = OrderItemWriter()
        assert 'custom_options' in writer.writable_columns()
        field = OrderItem._meta.get_field('custom_options')

        with connection.schema_editor() as editor:
            editor.remove_field(OrderItem, field)
        try:
            service = OrderService(writer=writer)
            order = service.place_custom_order(customer, custom_item, Decimal('1160'))
            message = service.build_message(order)

            assert writer.missing_optional_columns() == ['custom_options']
            with connection.cursor() as cursor:
                cursor.execute(
                    'SELECT custom_image_url, custom_text FROM order_items WHERE order_id = %s',
                    [order.pk]
                )
                assert cursor.fetchall() == [('/media/designs/front.png', 'Hello')]
            assert '- Design URL: /media/designs/front.png\n' in message.text
            assert '- Specs:' not in message.text
        finally:
            with connection.schema_editor() as editor:
                editor.add_field(OrderItem, field)

    def test_missing_required_column_is_storage_error(self, customer, catalog_item):
        writer = OrderItemWriter()
        live_columns = writer.writable_columns()
        OrderItemWriter.invalidate()

        with patch.object(OrderItemWriter, '_introspect', return_value=live_columns - {'price'}):
            with pytest.raises(StorageError):
                OrderItemWriter().write(1, [catalog_item])


@pytest.mark.django_db
class TestOrderMessage:
    """Test the owner hand-off message."""

    def test_catalog_message(self, customer, catalog_item, store_settings):
        service = OrderService()
        order = service.place_order(customer, [catalog_item], Decimal('1416'))

        message = service.build_message(order)

        assert message.text == (
            f"*New Order #{order.pk}*\n"
            "Name: Asha Rao (9876543210)\n"
            "Email: asha@example.com\n"
            "Address: 12 Lake Road, Chennai\n"
            "\n"
            "*Items:*\n"
            "- Classic Tee (Size: M, Color: Black) x2 = ₹1,200\n"
            "\n"
            "Subtotal: ₹1,200\n"
            "Shipping: FREE\n"
            "GST: ₹216\n"
            "*Total: ₹1,416*\n"
        )
        assert message.recipient == '918248333655'
        assert message.url.startswith('https://wa.me/918248333655?text=')
        assert unquote(message.url.split('text=', 1)[1]) == message.text

    def test_coupon_lines(self, customer, catalog_item, store_settings):
        service = OrderService()
        order = service.place_order(
            customer, [catalog_item], Decimal('1274'),
            coupon_code='SAVE10', coupon_discount_percent=10,
        )

        text = service.build_message(order).text

        assert "Coupon: SAVE10 (-10%)\nDiscount: -₹120\n" in text

    def test_custom_message(self, customer, custom_item, store_settings):
        service = OrderService()
        order = service.place_custom_order(customer, custom_item, Decimal('1160'))

        message = service.build_message(order)

        assert message.text == (
            f"*New Custom Order #{order.pk}*\n"
            "Name: Asha Rao (9876543210)\n"
            "Email: asha@example.com\n"
            "Address: 12 Lake Road, Chennai\n"
            "\n"
            "*Custom Design Details:*\n"
            "- Product: Custom design\n"
            "- Size: L | Color: White\n"
            '- Text: "Hello"\n'
            "- Design URL: /media/designs/front.png\n"
            "- Back Design URL: /media/designs/back.png\n"
            "- Specs: Scale 1.20x, Pos(10,20)\n"
            "\n"
            "Subtotal: ₹899\n"
            "Shipping: ₹99\n"
            "GST: ₹162\n"
            "*Total: ₹1,160*\n"
            "\n"
            "(Subject to change based on complexity)\n"
        )

    @pytest.mark.parametrize('position', ['center', [10, 20]])
    def test_custom_message_with_free_form_position(self, customer, store_settings, position):
        item = CustomItem(
            quantity=1,
            price=Decimal('899.00'),
            size='L',
            color='White',
            design=CustomDesign(
                image_url='/media/designs/front.png',
                options={'scale': 1.2, 'position': position},
            ),
        )
        service = OrderService()
        order = service.place_custom_order(customer, item, Decimal('1160'))

        text = service.build_message(order).text

        assert OrderItem.objects.get(order=order).custom_options['position'] == position
        assert '- Design URL: /media/designs/front.png\n' in text
        assert '- Specs:' not in text


@pytest.mark.django_db
class TestOrderAdministration:
    """Test status changes and lookups."""

    def test_update_status_per_kind(self):
        order = OrderFactory()

        OrderService().update_status(order.pk, ORDER_STATUS_PAID)

        order.refresh_from_db()
        assert order.status == ORDER_STATUS_PAID

    def test_catalog_order_cannot_complete(self):
        order = OrderFactory()

        with pytest.raises(ValidationError):
            OrderService().update_status(order.pk, ORDER_STATUS_COMPLETED)

    def test_missing_order(self):
        with pytest.raises(NotFoundError):
            OrderService().get_order(424242)
