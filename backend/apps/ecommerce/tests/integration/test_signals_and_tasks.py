# apps/ecommerce/tests/integration/test_signals_and_tasks.py
import logging
import pytest
from unittest.mock import patch

from ...models import Order
from ...services.order import OrderService
from ...tasks import cleanup_design_assets, storage_name_for
from ..factories import *


@pytest.mark.django_db
class TestDesignAssetCleanup:
    """Test removal of stored design images when orders are deleted."""

    def test_cleanup_scheduled_after_commit(self, django_capture_on_commit_callbacks):
        item = CustomOrderItemFactory()
        references = [item.custom_image_url, item.custom_back_image_url]

        with patch('apps.ecommerce.signals.cleanup_design_assets') as task:
            with django_capture_on_commit_callbacks(execute=False) as callbacks:
                OrderService().delete_order(item.order_id)
            task.delay.assert_not_called()

            for callback in callbacks:
                callback()

        task.delay.assert_called_once_with(references)
        assert not Order.objects.exists()

    def test_cleanup_deletes_hosted_files(self, django_capture_on_commit_callbacks):
        item = CustomOrderItemFactory(
            custom_image_url='/media/designs/front.png',
            custom_back_image_url='https://cdn.example.com/back.png',
        )

        with patch('apps.ecommerce.tasks.default_storage') as storage:
            with django_capture_on_commit_callbacks(execute=True):
                item.order.delete()

        storage.delete.assert_called_once_with('designs/front.png')

    def test_unreachable_broker_does_not_fail_delete(self, django_capture_on_commit_callbacks, caplog):
        item = CustomOrderItemFactory()
        order_id = item.order_id

        with patch('apps.ecommerce.signals.cleanup_design_assets') as task:
            task.delay.side_effect = ConnectionError('broker down')
            with caplog.at_level(logging.WARNING, logger='apps.ecommerce.signals'):
                with django_capture_on_commit_callbacks(execute=True):
                    OrderService().delete_order(order_id)

        task.delay.assert_called_once()
        assert not Order.objects.filter(pk=order_id).exists()
        assert f"Could not queue design asset cleanup for order {order_id}" in caplog.text

    def test_catalog_order_schedules_nothing(self, django_capture_on_commit_callbacks):
        item = OrderItemFactory()

        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            item.order.delete()

        assert callbacks == []

    def test_storage_failures_are_logged_not_raised(self):
        with patch('apps.ecommerce.tasks.default_storage') as storage:
            storage.delete.side_effect = [OSError('permission denied'), None]

            deleted = cleanup_design_assets(['/media/designs/a.png', '/media/designs/b.png'])

        assert deleted == 1
        assert storage.delete.call_count == 2

    @pytest.mark.parametrize('reference, expected', [
        ('/media/designs/front.png', 'designs/front.png'),
        ('https://cdn.example.com/front.png', None),
        ('/media/', None),
    ])
    def test_storage_name_for(self, reference, expected):
        assert storage_name_for(reference) == expected
