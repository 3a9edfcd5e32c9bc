from django.db import transaction
from django.db.models.signals import post_delete, post_save, pre_delete
from django.dispatch import receiver
import logging

from .models import Order, OrderItem, StoreSettings
from .services.settings import invalidate_store_settings_cache
from .tasks import cleanup_design_assets

logger = logging.getLogger(__name__)


@receiver(post_save, sender=StoreSettings)
@receiver(post_delete, sender=StoreSettings)
def store_settings_changed(sender, instance, **kwargs):
    """Drop cached pricing settings whenever the singleton changes"""
    invalidate_store_settings_cache()


def dispatch_asset_cleanup(order_id, references):
    """Queue asset cleanup; a failure to enqueue is logged and the files are left in place"""
    try:
        cleanup_design_assets.delay(references)
    except Exception as e:
        logger.warning(
            f"Could not queue design asset cleanup for order {order_id}: {e}",
            extra={'context': {'order_id': order_id, 'references': references}},
            exc_info=True
        )


@receiver(pre_delete, sender=Order)
def order_pre_delete(sender, instance, **kwargs):
    """Schedule removal of the order's stored design images"""
    references = []
    rows = OrderItem.objects.filter(order_id=instance.pk).values_list(
        'custom_image_url', 'custom_back_image_url'
    )
    for front, back in rows:
        references.extend(url for url in (front, back) if url)

    if not references:
        return

    logger.info(
        f"Scheduling design asset cleanup for order {instance.pk}",
        extra={'context': {'order_id': instance.pk, 'assets': len(references)}}
    )
    order_id = instance.pk
    transaction.on_commit(lambda: dispatch_asset_cleanup(order_id, references))
