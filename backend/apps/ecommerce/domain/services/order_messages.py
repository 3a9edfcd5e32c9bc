"""
Builds the chat message handed to the store owner after an order is saved.

The builder only reads persisted order and order item rows. Delivery of the
message happens outside the application through the returned deep link.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

from ..value_objects.money import format_amount, to_decimal
from ...constants import ORDER_KIND_CUSTOM

CHAT_URL_TEMPLATE = 'https://wa.me/{recipient}?text={text}'
CUSTOM_ITEM_LABEL = 'Custom design'


@dataclass(frozen=True)
class OrderMessage:
    order_id: int
    recipient: str
    text: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _number(value, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _design_specs(options: Optional[Dict[str, Any]]) -> Optional[str]:
    """Scale and position summary; None unless both are stored as objects"""
    if not options or not isinstance(options, dict):
        return None
    position = options.get('position') or {}
    if not isinstance(position, dict):
        return None
    scale = _number(options.get('scale'), 1.0)
    x = _number(position.get('x'), 0)
    y = _number(position.get('y'), 0)
    return f"Scale {scale:.2f}x, Pos({_format_number(x)},{_format_number(y)})"


class OrderMessageBuilder:
    """Formats a persisted order as a plain-text chat message"""

    def __init__(self, recipient: str, currency_symbol: str = '₹'):
        self.recipient = ''.join(ch for ch in str(recipient) if ch.isdigit())
        self.currency_symbol = currency_symbol

    def money(self, amount) -> str:
        return format_amount(amount, self.currency_symbol)

    def build(self, order, items: Iterable) -> OrderMessage:
        items = list(items)
        is_custom = order.kind == ORDER_KIND_CUSTOM

        title = 'New Custom Order' if is_custom else 'New Order'
        lines: List[str] = [f"*{title} #{order.id}*"]

        contact = f"Name: {order.customer_name} ({order.customer_phone})"
        lines.append(contact)
        if order.customer_email:
            lines.append(f"Email: {order.customer_email}")
        if order.shipping_address:
            lines.append(f"Address: {order.shipping_address}")
        lines.append('')

        if is_custom:
            lines.append('*Custom Design Details:*')
            for item in items:
                lines.extend(self._custom_item_lines(item))
        else:
            lines.append('*Items:*')
            for item in items:
                lines.append(self._catalog_item_line(item))

        lines.append('')
        lines.extend(self._totals_lines(order))
        if is_custom:
            lines.append('')
            lines.append('(Subject to change based on complexity)')

        text = '\n'.join(lines) + '\n'
        return OrderMessage(
            order_id=order.id,
            recipient=self.recipient,
            text=text,
            url=CHAT_URL_TEMPLATE.format(recipient=self.recipient, text=quote(text, safe='')),
        )

    def _catalog_item_line(self, item) -> str:
        name = item.product.name if item.product_id else CUSTOM_ITEM_LABEL
        details = []
        if item.size:
            details.append(f"Size: {item.size}")
        if item.custom_color:
            details.append(f"Color: {item.custom_color}")
        suffix = f" ({', '.join(details)})" if details else ''
        line_total = to_decimal(item.price) * item.quantity
        return f"- {name}{suffix} x{item.quantity} = {self.money(line_total)}"

    def _custom_item_lines(self, item) -> List[str]:
        name = item.product.name if item.product_id else CUSTOM_ITEM_LABEL
        lines = [
            f"- Product: {name}",
            f"- Size: {item.size or '-'} | Color: {item.custom_color or '-'}",
        ]
        if item.quantity > 1:
            lines.append(f"- Quantity: {item.quantity}")
        if item.custom_text:
            lines.append(f'- Text: "{item.custom_text}"')
        if item.custom_image_url:
            lines.append(f"- Design URL: {item.custom_image_url}")
        if item.custom_back_image_url:
            lines.append(f"- Back Design URL: {item.custom_back_image_url}")
        specs = _design_specs(getattr(item, 'custom_options', None))
        if specs:
            lines.append(f"- Specs: {specs}")
        return lines

    def _totals_lines(self, order) -> List[str]:
        lines = [f"Subtotal: {self.money(order.subtotal_amount)}"]
        if order.coupon_code:
            lines.append(f"Coupon: {order.coupon_code} (-{order.coupon_discount_percent}%)")
            lines.append(f"Discount: -{self.money(order.discount_amount)}")
        shipping = to_decimal(order.shipping_amount)
        lines.append(f"Shipping: {'FREE' if shipping == Decimal('0') else self.money(shipping)}")
        if to_decimal(order.tax_amount) > 0:
            lines.append(f"GST: {self.money(order.tax_amount)}")
        lines.append(f"*Total: {self.money(order.total_amount)}*")
        return lines
