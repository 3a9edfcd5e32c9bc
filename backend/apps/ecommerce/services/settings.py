"""
Store settings service: cached singleton read and administrative upsert
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from django.conf import settings as django_settings
from django.core.cache import cache
from django.db import DatabaseError, transaction

from .base import BaseEcommerceService, ValidationError, StorageError
from ..constants import STORE_SETTINGS_CACHE_KEY
from ..domain.value_objects.pricing import PricingSettings
from ..models import StoreSettings

MONETARY_FIELDS = ('shipping_fee', 'free_shipping_threshold', 'gst_percentage')


def invalidate_store_settings_cache():
    cache.delete(STORE_SETTINGS_CACHE_KEY)


class StoreSettingsService(BaseEcommerceService):
    """Service for reading and updating the store settings singleton"""

    @property
    def cache_timeout(self) -> int:
        return django_settings.STOREFRONT.get('SETTINGS_CACHE_TIMEOUT', 300)

    def get_pricing_settings(self) -> PricingSettings:
        """Current settings, or the defaults when none were ever saved"""
        cached = cache.get(STORE_SETTINGS_CACHE_KEY)
        if cached is not None:
            return PricingSettings(**cached)

        try:
            row = StoreSettings.objects.filter(pk=StoreSettings.SINGLETON_ID).first()
        except DatabaseError as e:
            self.log_error("Failed to load store settings", e)
            raise StorageError("Could not load store settings", original_error=e)

        pricing = row.to_pricing_settings() if row else PricingSettings()
        cache.set(STORE_SETTINGS_CACHE_KEY, pricing.to_dict(), self.cache_timeout)
        return pricing

    def update_settings(self, data: Dict[str, Any]) -> PricingSettings:
        """Upsert the singleton; fields missing from ``data`` keep their value"""
        current = self.get_pricing_settings().to_dict()
        values = {}
        errors = {}

        for field in MONETARY_FIELDS:
            if field not in data or data[field] is None:
                values[field] = current[field]
                continue
            try:
                value = Decimal(str(data[field]))
            except (InvalidOperation, ValueError):
                errors[field] = ['A valid number is required.']
                continue
            if value < 0:
                errors[field] = ['Must not be negative.']
            elif field == 'gst_percentage' and value > 100:
                errors[field] = ['Must not exceed 100.']
            values[field] = value

        values['gst_enabled'] = bool(data.get('gst_enabled', current['gst_enabled']))

        if errors:
            raise ValidationError(
                'Invalid store settings',
                details={'field': next(iter(errors)), 'errors': errors}
            )

        try:
            with transaction.atomic():
                StoreSettings.objects.update_or_create(
                    pk=StoreSettings.SINGLETON_ID,
                    defaults=values,
                )
        except DatabaseError as e:
            self.log_error("Failed to save store settings", e, {'values': str(values)})
            raise StorageError("Could not save store settings", original_error=e)

        # The post_save signal clears the cache right away; clear again once
        # the row is visible to other connections
        transaction.on_commit(invalidate_store_settings_cache)
        self.log_info("Store settings updated", {k: str(v) for k, v in values.items()})
        return PricingSettings(**values)
