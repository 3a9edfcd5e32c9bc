# apps/ecommerce/models/merchandising.py

"""
Rank-ordered merchandising lists (featured products, hero carousel)
"""

from django.db import models
from django.core.validators import MinValueValidator

from apps.core.models import TimeStampedModel
from ..constants import RANK_LIST_CHOICES


class RankList(models.Model):
    """
    A named promotion list.

    Mutations of a list lock this row first, so edits of the same list run
    one at a time while different lists stay independent.
    """

    name = models.CharField(max_length=50, choices=RANK_LIST_CHOICES, unique=True)

    class Meta:
        db_table = 'rank_lists'
        ordering = ['name']

    def __str__(self):
        return self.get_name_display()


class RankedEntry(TimeStampedModel):
    """Membership of a product in a rank list at a 1-based position"""

    rank_list = models.ForeignKey(
        RankList,
        on_delete=models.CASCADE,
        related_name='entries'
    )
    product = models.ForeignKey(
        'ecommerce.Product',
        on_delete=models.CASCADE,
        related_name='rank_entries'
    )
    # Position 0 only ever appears inside a swap transaction
    position = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        db_table = 'ranked_entries'
        ordering = ['rank_list', 'position']
        constraints = [
            models.UniqueConstraint(
                fields=['rank_list', 'product'],
                name='unique_product_per_rank_list'
            ),
            models.UniqueConstraint(
                fields=['rank_list', 'position'],
                name='unique_position_per_rank_list'
            ),
        ]

    def __str__(self):
        return f"{self.rank_list.name} #{self.position}: {self.product}"
