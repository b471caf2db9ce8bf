"""
Checkout events.
"""

from typing import Any, List, Mapping

from ..errors import ValidationError
from ..event_types import EventType
from ..formatter import format_cart_item
from ..models import EmitResult, UserInfo
from ..validator import validate_cart_input, validate_cart_item, validate_products, validate_string
from .context import ModuleContext


class CheckoutModule:
    """Tracks entry into checkout."""

    def __init__(self, context: ModuleContext):
        self.context = context

    def start(self, items: List[Mapping[str, Any]], cart_input: Mapping[str, Any],
              checkout_type: str = "regular") -> EmitResult:
        """Track the start of checkout.

        The given items become the session cart.

        Args:
            items: Raw cart items being checked out
            cart_input: Mapping with cartId and/or quoteId
            checkout_type: e.g. "regular", "guest", "express"
        """
        try:
            validate_products(items, "items", item_validator=validate_cart_item)
            validate_cart_input(cart_input)
            validate_string(checkout_type, "checkoutType")
        except ValidationError as exc:
            return EmitResult.failure(exc)

        self.context.sequencer.ensure_ready()
        cart = self.context.cart
        cart.sync(items, cart_input)
        user = self.context.sequencer.user_info or UserInfo()

        return self.context.emit(EventType.CHECKOUT_START, {
            "default": {
                "page": self.context.page("checkout", "start"),
                "user": user.model_dump(),
            },
            "checkout_type": checkout_type,
            "cart": cart.info.to_dict(),
            "cart_items": [format_cart_item(item) for item in cart.items],
        })
