"""
Writes order item rows, tolerating databases that have not yet gained the
optional ``order_items`` columns.

The writable column set is read from the live table the first time a
process writes items and cached per database alias. Inserts list exactly the
columns that exist. If an insert still fails because an optional column has
disappeared since the columns were read, the cache is refreshed and the
insert is retried once without it. Every other failure is raised as a
StorageError.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from django.db import DatabaseError, connections, transaction

from ...constants import OPTIONAL_ORDER_ITEM_COLUMNS
from ...domain.entities.order_items import CatalogItem, CustomItem, OrderLine
from ...models import OrderItem
from ...services.base import StorageError

logger = logging.getLogger(__name__)

MISSING_COLUMN_MARKERS = (
    'no such column',
    'has no column named',
    'unknown column',
    'does not exist',
)


def missing_optional_column(error: Exception) -> Optional[str]:
    """Name of the optional column a database error complains about, if any"""
    message = str(error).lower()
    if not any(marker in message for marker in MISSING_COLUMN_MARKERS):
        return None
    for column in OPTIONAL_ORDER_ITEM_COLUMNS:
        if column in message:
            return column
    return None


class OrderItemWriter:
    """Inserts ``order_items`` rows for both catalog and custom items"""

    _column_cache: Dict[str, FrozenSet[str]] = {}

    def __init__(self, using: str = 'default'):
        self.using = using
        self.connection = connections[using]
        self.opts = OrderItem._meta

    # Capability negotiation

    @classmethod
    def invalidate(cls, using: Optional[str] = None):
        if using is None:
            cls._column_cache.clear()
        else:
            cls._column_cache.pop(using, None)

    def _introspect(self) -> FrozenSet[str]:
        with self.connection.cursor() as cursor:
            description = self.connection.introspection.get_table_description(
                cursor, self.opts.db_table
            )
        return frozenset(column.name for column in description)

    def writable_columns(self) -> FrozenSet[str]:
        columns = self._column_cache.get(self.using)
        if columns is None:
            try:
                columns = self._introspect()
            except DatabaseError as e:
                raise StorageError("Could not inspect the order_items table", original_error=e)
            self._column_cache[self.using] = columns
            missing = self.missing_optional_columns(columns)
            if missing:
                logger.warning(
                    "order_items is missing optional columns, writing without them",
                    extra={'context': {'columns': sorted(missing)}}
                )
        return columns

    def missing_optional_columns(self, columns: Optional[FrozenSet[str]] = None) -> List[str]:
        columns = self.writable_columns() if columns is None else columns
        return [name for name in OPTIONAL_ORDER_ITEM_COLUMNS if name not in columns]

    def _insert_fields(self, columns: FrozenSet[str]):
        fields = []
        for field in self.opts.concrete_fields:
            if field.primary_key:
                continue
            if field.column in columns:
                fields.append(field)
            elif field.column not in OPTIONAL_ORDER_ITEM_COLUMNS:
                raise StorageError(
                    f"order_items has no {field.column} column",
                    details={'column': field.column}
                )
        return fields

    # Row construction

    def _row_values(self, order_id: int, item: OrderLine) -> Dict[str, object]:
        values = {
            'order': order_id,
            'quantity': item.quantity,
            'size': item.size or None,
            'price': item.price,
            'custom_color': item.color or None,
        }
        if isinstance(item, CatalogItem):
            values.update({
                'product': item.product_id,
                'custom_image_url': None,
                'custom_back_image_url': None,
                'custom_text': None,
                'custom_options': None,
            })
        elif isinstance(item, CustomItem):
            design = item.design
            values.update({
                'product': None,
                'custom_image_url': design.image_url or None,
                'custom_back_image_url': design.back_image_url or None,
                'custom_text': design.text or None,
                'custom_options': design.options or None,
            })
        else:
            raise TypeError(f"Unsupported order item: {item!r}")
        return values

    def _params(self, fields, order_id: int, item: OrderLine) -> List[object]:
        values = self._row_values(order_id, item)
        params = []
        for field in fields:
            value = values[field.name]
            if value is None:
                params.append(None)
            else:
                params.append(field.get_db_prep_save(value, connection=self.connection))
        return params

    def _execute(self, fields, rows: Sequence[List[object]]):
        quote = self.connection.ops.quote_name
        sql = 'INSERT INTO {table} ({columns}) VALUES ({placeholders})'.format(
            table=quote(self.opts.db_table),
            columns=', '.join(quote(field.column) for field in fields),
            placeholders=', '.join(['%s'] * len(fields)),
        )
        # A savepoint keeps the surrounding order transaction usable when
        # the statement fails
        with transaction.atomic(using=self.using):
            with self.connection.cursor() as cursor:
                cursor.executemany(sql, rows)

    def write(self, order_id: int, items: Iterable[OrderLine]) -> int:
        """Insert one row per item and return the number of rows written"""
        items = list(items)
        if not items:
            return 0

        fields = self._insert_fields(self.writable_columns())
        rows = [self._params(fields, order_id, item) for item in items]
        try:
            self._execute(fields, rows)
        except DatabaseError as e:
            column = missing_optional_column(e)
            if column is None:
                raise StorageError(
                    "Failed to write order items",
                    details={'order_id': order_id},
                    original_error=e
                )
            logger.warning(
                f"Column {column} disappeared from order_items, retrying without it",
                extra={'context': {'order_id': order_id, 'column': column}}
            )
            self.invalidate(self.using)
            fields = [
                field for field in self._insert_fields(self.writable_columns())
                if field.column != column
            ]
            rows = [self._params(fields, order_id, item) for item in items]
            try:
                self._execute(fields, rows)
            except DatabaseError as retry_error:
                raise StorageError(
                    "Failed to write order items",
                    details={'order_id': order_id},
                    original_error=retry_error
                )
        return len(items)
