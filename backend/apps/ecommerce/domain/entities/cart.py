"""
Shopping cart held by the shopper between visits.

The cart has no database table. It is rebuilt from the shopper's session at
the start of each request and written back after every mutation.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..value_objects.money import to_decimal
from ...constants import CUSTOM_PRODUCT_SENTINEL


@dataclass(frozen=True)
class LineItemIdentity:
    """Merge key of a cart line: product (None for custom designs), size, color"""
    product_id: Optional[int]
    size: str = ''
    color: str = ''

    @property
    def is_custom(self) -> bool:
        return self.product_id is None

    @classmethod
    def build(cls, product_id, size: str = '', color: str = '') -> 'LineItemIdentity':
        if product_id is not None and int(product_id) == CUSTOM_PRODUCT_SENTINEL:
            product_id = None
        return cls(
            None if product_id is None else int(product_id),
            (size or '').strip(),
            (color or '').strip(),
        )


@dataclass(frozen=True)
class CustomDesign:
    """Artwork and options a shopper attached to a custom item"""
    image_url: str = ''
    back_image_url: str = ''
    text: str = ''
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def asset_references(self) -> List[str]:
        return [url for url in (self.image_url, self.back_image_url) if url]

    @property
    def has_design(self) -> bool:
        return bool(self.asset_references)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'image_url': self.image_url,
            'back_image_url': self.back_image_url,
            'text': self.text,
            'options': dict(self.options),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CustomDesign':
        return cls(
            image_url=data.get('image_url') or '',
            back_image_url=data.get('back_image_url') or '',
            text=data.get('text') or '',
            options=dict(data.get('options') or {}),
        )


@dataclass
class LineItem:
    identity: LineItemIdentity
    name: str
    unit_price: Decimal
    quantity: int = 1
    custom: Optional[CustomDesign] = None

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)
        if self.unit_price < 0:
            raise ValueError("Unit price cannot be negative")
        if int(self.quantity) < 1:
            raise ValueError("Quantity must be at least 1")
        self.quantity = int(self.quantity)

    @property
    def product_id(self) -> Optional[int]:
        return self.identity.product_id

    @property
    def size(self) -> str:
        return self.identity.size

    @property
    def color(self) -> str:
        return self.identity.color

    @property
    def is_custom(self) -> bool:
        return self.identity.is_custom

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'product_id': CUSTOM_PRODUCT_SENTINEL if self.is_custom else self.product_id,
            'name': self.name,
            'size': self.size,
            'color': self.color,
            'unit_price': str(self.unit_price),
            'quantity': self.quantity,
        }
        if self.custom is not None:
            data['custom'] = self.custom.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LineItem':
        custom = data.get('custom')
        return cls(
            identity=LineItemIdentity.build(
                data.get('product_id'), data.get('size', ''), data.get('color', '')
            ),
            name=data.get('name', ''),
            unit_price=data['unit_price'],
            quantity=data.get('quantity', 1),
            custom=CustomDesign.from_dict(custom) if custom else None,
        )


Listener = Callable[['Cart'], None]


class Cart:
    """
    Ordered collection of line items with merge-by-identity semantics.

    Listeners registered with ``subscribe`` are called synchronously after
    every mutation, so any reader in the same request sees the change at once.
    """

    def __init__(self, items: Optional[List[LineItem]] = None):
        self._items: List[LineItem] = []
        self._listeners: List[Listener] = []
        for item in items or []:
            self._merge(item)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    def _find(self, identity: LineItemIdentity) -> Optional[LineItem]:
        for item in self._items:
            if item.identity == identity:
                return item
        return None

    def _merge(self, item: LineItem):
        existing = self._find(item.identity)
        if existing is None:
            self._items.append(item)
        else:
            # Price stays at the first snapshot
            existing.quantity += item.quantity

    def add(self, item: LineItem) -> LineItem:
        self._merge(item)
        self._notify()
        return self._find(item.identity)

    def set_quantity(self, identity: LineItemIdentity, quantity: int):
        item = self._find(identity)
        if item is None:
            return
        if quantity <= 0:
            self._items.remove(item)
        else:
            item.quantity = int(quantity)
        self._notify()

    def remove(self, identity: LineItemIdentity):
        item = self._find(identity)
        if item is None:
            return
        self._items.remove(item)
        self._notify()

    def clear(self):
        self._items.clear()
        self._notify()

    def list(self) -> List[LineItem]:
        return list(self._items)

    def to_list(self) -> List[Dict[str, Any]]:
        return [item.to_dict() for item in self._items]

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]]) -> 'Cart':
        return cls([LineItem.from_dict(entry) for entry in data])
