"""
Order item shapes accepted by the order writer.

An order line is either a catalog item, which points at a product, or a
custom item, which carries a shopper's design and no product. Both are stored
in the same ``order_items`` table.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Union

from .cart import CustomDesign
from ..value_objects.money import to_decimal
from ...constants import (
    ORDER_KIND_CATALOG, ORDER_KIND_CUSTOM, PAYMENT_CHANNEL_WHATSAPP,
)


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    phone: str
    email: str = ''
    shipping_address: str = ''
    payment_channel: str = PAYMENT_CHANNEL_WHATSAPP


@dataclass(frozen=True)
class CatalogItem:
    product_id: int
    quantity: int
    price: Decimal
    size: str = ''
    color: str = ''
    name: str = ''

    kind = ORDER_KIND_CATALOG

    @property
    def line_total(self) -> Decimal:
        return to_decimal(self.price) * self.quantity


@dataclass(frozen=True)
class CustomItem:
    quantity: int
    price: Decimal
    size: str = ''
    color: str = ''
    name: str = ''
    design: CustomDesign = field(default_factory=CustomDesign)

    kind = ORDER_KIND_CUSTOM

    @property
    def line_total(self) -> Decimal:
        return to_decimal(self.price) * self.quantity

    @property
    def asset_references(self) -> List[str]:
        return self.design.asset_references


OrderLine = Union[CatalogItem, CustomItem]


def order_kind_for(items: List[OrderLine]) -> str:
    """An order holding any custom item is a custom order"""
    if any(isinstance(item, CustomItem) for item in items):
        return ORDER_KIND_CUSTOM
    return ORDER_KIND_CATALOG
