"""
Management command to create the storefront's initial rows
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.ecommerce.constants import RANK_LIST_CHOICES
from apps.ecommerce.models import Product, RankList, StoreSettings
from apps.ecommerce.services.ranking import RankListService

SAMPLE_PRODUCTS = [
    ('Classic Crew Tee', Decimal('499')),
    ('Oversized Graphic Tee', Decimal('699')),
    ('Relaxed Fit Hoodie', Decimal('1299')),
    ('Everyday Polo', Decimal('899')),
    ('Linen Summer Shirt', Decimal('999')),
    ('Heavyweight Sweatshirt', Decimal('1499')),
]


class Command(BaseCommand):
    help = 'Create store settings, merchandising lists and optional demo products'

    def add_arguments(self, parser):
        parser.add_argument(
            '--with-products',
            action='store_true',
            help='Also create demo products and feature them'
        )

    def handle(self, *args, **options):
        with transaction.atomic():
            settings = StoreSettings.load()
            self.stdout.write(
                f'Store settings: shipping {settings.shipping_fee}, '
                f'free above {settings.free_shipping_threshold}, GST {settings.gst_percentage}%'
            )

            for name, _ in RANK_LIST_CHOICES:
                _, created = RankList.objects.get_or_create(name=name)
                if created:
                    self.stdout.write(f'Created list {name}')

        if not options['with_products']:
            self.stdout.write(self.style.SUCCESS('Storefront seeded'))
            return

        featured = RankListService('featured')
        created_count = 0
        for name, price in SAMPLE_PRODUCTS:
            product, created = Product.objects.get_or_create(name=name, defaults={'price': price})
            created_count += int(created)
            featured.add(product.pk)

        self.stdout.write(
            self.style.SUCCESS(f'Storefront seeded with {created_count} new products')
        )
