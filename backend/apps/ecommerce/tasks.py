from celery import shared_task
from django.conf import settings
from django.core.files.storage import default_storage
import logging

logger = logging.getLogger(__name__)


def storage_name_for(reference: str):
    """Storage path of a design asset URL, or None for assets we do not host"""
    prefix = settings.STOREFRONT.get('DESIGN_ASSET_URL_PREFIX') or ''
    if not prefix or not reference.startswith(prefix):
        return None
    name = reference[len(prefix):].lstrip('/')
    return name or None


@shared_task
def cleanup_design_assets(references):
    """Delete stored design images of a deleted order; failures are only logged"""
    deleted = 0
    for reference in references:
        name = storage_name_for(reference)
        if name is None:
            logger.info(f"Skipping design asset not hosted by the store: {reference}")
            continue
        try:
            default_storage.delete(name)
            deleted += 1
        except Exception as e:
            logger.warning(f"Could not delete design asset {name}: {e}")

    logger.info(f"Design asset cleanup finished: {deleted} of {len(references)} deleted")
    return deleted
