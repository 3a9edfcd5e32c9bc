"""
Keeps the shopper's cart in the Django session.

With the signed-cookie session engine the serialized cart lives entirely on
the client and the server holds no cart rows.
"""

import logging
from typing import Optional

from ..constants import CART_SESSION_KEY
from ..domain.entities.cart import Cart

logger = logging.getLogger(__name__)


class SessionCartStorage:
    """Loads a cart from a session and writes it back after every change"""

    def __init__(self, session, key: Optional[str] = None):
        self.session = session
        self.key = key or CART_SESSION_KEY

    def load(self) -> Cart:
        data = self.session.get(self.key) or []
        try:
            cart = Cart.from_list(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(
                "Discarding unreadable cart from session",
                extra={'context': {'error': str(e)}}
            )
            cart = Cart()
            self.save(cart)
        cart.subscribe(self.save)
        return cart

    def save(self, cart: Cart):
        self.session[self.key] = cart.to_list()
        self.session.modified = True

    def clear(self):
        if self.key in self.session:
            del self.session[self.key]
            self.session.modified = True
