from django.core.management.base import BaseCommand, CommandError
import logging

from apps.ecommerce.constants import RANK_LIST_CHOICES
from apps.ecommerce.services.base import ServiceError
from apps.ecommerce.services.ranking import RankListService

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Renumber merchandising lists so positions run 1..N without gaps'

    def add_arguments(self, parser):
        parser.add_argument(
            '--list',
            dest='list_name',
            choices=[name for name, _ in RANK_LIST_CHOICES],
            help='Only compact this list (default: all lists)'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report gaps without changing anything'
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        names = [options['list_name']] if options['list_name'] else [name for name, _ in RANK_LIST_CHOICES]

        for name in names:
            try:
                positions = RankListService(name).compact(dry_run=dry_run)
            except ServiceError as e:
                raise CommandError(f'Failed to compact {name}: {e.message}')

            expected = list(range(1, len(positions) + 1))
            if positions == expected:
                self.stdout.write(f'{name}: {len(positions)} entries, no gaps')
            elif dry_run:
                self.stdout.write(
                    self.style.WARNING(f'DRY RUN: {name} would be renumbered from {positions}')
                )
            else:
                self.stdout.write(
                    self.style.SUCCESS(f'Renumbered {name}: {positions} -> {expected}')
                )
                logger.info(f'Compacted rank list {name}')
