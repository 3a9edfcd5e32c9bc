"""
Rank list service: ordered featured and hero product lists
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar

from django.db import IntegrityError, transaction
from django.db.models import Max, QuerySet

from .base import BaseEcommerceService, ConflictError, NotFoundError, ValidationError
from ..constants import MOVE_DOWN, MOVE_UP, RANK_LIST_CHOICES
from ..models import Product, RankedEntry, RankList

T = TypeVar('T')

RANK_LIST_NAMES = tuple(name for name, _ in RANK_LIST_CHOICES)

# Swapped entries pass through this position while both rows are rewritten
PARKING_POSITION = 0


@dataclass(frozen=True)
class RankMutation:
    changed: bool
    message: str
    entry: Optional[RankedEntry] = None

    @property
    def position(self) -> Optional[int]:
        return self.entry.position if self.entry is not None else None


class RankListService(BaseEcommerceService):
    """
    Maintains one named list whose positions are always 1..N.

    Each mutation runs in its own transaction that first locks the list's
    RankList row, so mutations of the same list are serialized while other
    lists are unaffected.
    """

    def __init__(self, list_name: str):
        super().__init__()
        if list_name not in RANK_LIST_NAMES:
            raise NotFoundError(f"Unknown list {list_name}", details={'list': list_name})
        self.list_name = list_name

    # Reads

    def entries(self) -> QuerySet:
        return (
            RankedEntry.objects
            .filter(rank_list__name=self.list_name)
            .select_related('product')
            .order_by('position')
        )

    def products(self) -> List[Product]:
        return [entry.product for entry in self.entries().filter(product__is_active=True)]

    # Locking and invariants

    def _lock(self) -> RankList:
        rank_list, _ = RankList.objects.get_or_create(name=self.list_name)
        return RankList.objects.select_for_update().get(pk=rank_list.pk)

    def _positions(self, rank_list: RankList) -> List[int]:
        return list(
            RankedEntry.objects
            .filter(rank_list=rank_list)
            .order_by('position')
            .values_list('position', flat=True)
        )

    def _check_invariant(self, rank_list: RankList):
        positions = self._positions(rank_list)
        if positions != list(range(1, len(positions) + 1)):
            raise ConflictError(
                f"List {self.list_name} positions are not contiguous",
                details={'list': self.list_name, 'positions': positions}
            )

    def _renumber(self, rank_list: RankList) -> int:
        """Close gaps, keeping relative order; returns rows changed"""
        changed = 0
        entries = RankedEntry.objects.filter(rank_list=rank_list).order_by('position', 'id')
        for expected, entry in enumerate(entries, start=1):
            # Sorted positions are never below their index, so each target
            # slot is already free
            if entry.position != expected:
                entry.position = expected
                entry.save(update_fields=['position', 'updated_at'])
                changed += 1
        return changed

    def _heal(self, rank_list: RankList):
        positions = self._positions(rank_list)
        if positions != list(range(1, len(positions) + 1)):
            self.log_warning(f"Repairing gaps in list {self.list_name}", {
                'list': self.list_name,
                'positions': positions,
            })
            self._renumber(rank_list)

    def _run(self, operation: Callable[[RankList], T], action: str) -> T:
        for attempt in (1, 2):
            try:
                with transaction.atomic():
                    rank_list = self._lock()
                    self._heal(rank_list)
                    result = operation(rank_list)
                    self._check_invariant(rank_list)
                    return result
            except IntegrityError as e:
                if attempt == 2:
                    self.log_error(f"Rank list {action} failed after retry", e, {'list': self.list_name})
                    raise ConflictError(
                        f"Concurrent change to list {self.list_name}, please retry",
                        details={'list': self.list_name, 'action': action},
                        original_error=e
                    )
                self.log_warning(f"Rank list {action} conflicted, retrying", {'list': self.list_name})

    def _entry(self, rank_list: RankList, product_id: int) -> RankedEntry:
        entry = RankedEntry.objects.filter(rank_list=rank_list, product_id=product_id).first()
        if entry is None:
            raise NotFoundError(
                f"Product {product_id} is not in list {self.list_name}",
                details={'list': self.list_name, 'product_id': product_id}
            )
        return entry

    # Mutations

    def add(self, product_id: int) -> RankMutation:
        """Append a product; adding a product already listed changes nothing"""
        def operation(rank_list):
            if not Product.objects.filter(pk=product_id).exists():
                raise NotFoundError(f"Product {product_id} not found", details={'product_id': product_id})
            existing = RankedEntry.objects.filter(rank_list=rank_list, product_id=product_id).first()
            if existing is not None:
                return RankMutation(False, 'Already in list', existing)
            last = RankedEntry.objects.filter(rank_list=rank_list).aggregate(last=Max('position'))['last']
            entry = RankedEntry.objects.create(
                rank_list=rank_list,
                product_id=product_id,
                position=(last or 0) + 1,
            )
            return RankMutation(True, 'Added', entry)

        result = self._run(operation, 'add')
        if result.changed:
            self.log_info(f"Added product {product_id} to {self.list_name}", {
                'list': self.list_name,
                'product_id': product_id,
                'position': result.position,
            })
        return result

    def remove(self, product_id: int) -> RankMutation:
        """Remove a product and shift every later entry up by one"""
        def operation(rank_list):
            entry = self._entry(rank_list, product_id)
            removed_position = entry.position
            entry.delete()
            later = (
                RankedEntry.objects
                .filter(rank_list=rank_list, position__gt=removed_position)
                .order_by('position')
            )
            for following in later:
                following.position -= 1
                following.save(update_fields=['position', 'updated_at'])
            return RankMutation(True, 'Removed')

        result = self._run(operation, 'remove')
        self.log_info(f"Removed product {product_id} from {self.list_name}", {
            'list': self.list_name,
            'product_id': product_id,
        })
        return result

    def move(self, product_id: int, direction: str) -> RankMutation:
        """Swap a product with its nearest neighbour above or below"""
        if direction not in (MOVE_UP, MOVE_DOWN):
            raise ValidationError.for_field('direction', f"Direction must be '{MOVE_UP}' or '{MOVE_DOWN}'")

        def operation(rank_list):
            entry = self._entry(rank_list, product_id)
            siblings = RankedEntry.objects.filter(rank_list=rank_list)
            if direction == MOVE_UP:
                neighbour = siblings.filter(position__lt=entry.position).order_by('-position').first()
            else:
                neighbour = siblings.filter(position__gt=entry.position).order_by('position').first()
            if neighbour is None:
                return RankMutation(False, 'Already at the edge', entry)

            current, target = entry.position, neighbour.position
            entry.position = PARKING_POSITION
            entry.save(update_fields=['position', 'updated_at'])
            neighbour.position = current
            neighbour.save(update_fields=['position', 'updated_at'])
            entry.position = target
            entry.save(update_fields=['position', 'updated_at'])
            return RankMutation(True, 'Moved', entry)

        result = self._run(operation, 'move')
        if result.changed:
            self.log_info(f"Moved product {product_id} {direction} in {self.list_name}", {
                'list': self.list_name,
                'product_id': product_id,
                'position': result.position,
            })
        return result

    def compact(self, dry_run: bool = False) -> List[int]:
        """
        Renumber the list to 1..N. Returns the positions found before the
        repair; nothing is written when ``dry_run`` is set.
        """
        with transaction.atomic():
            rank_list = self._lock()
            before = self._positions(rank_list)
            if not dry_run:
                changed = self._renumber(rank_list)
                if changed:
                    self.log_info(f"Compacted list {self.list_name}", {
                        'list': self.list_name,
                        'changed': changed,
                    })
        return before
