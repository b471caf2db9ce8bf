"""
Order confirmation events.
"""

from typing import Any, List, Mapping

from ..errors import ValidationError
from ..event_types import EventType
from ..formatter import format_cart_item
from ..models import EmitResult
from ..validator import (
    validate_cart_input,
    validate_cart_item,
    validate_number,
    validate_products,
    validate_string,
)
from .context import ModuleContext

# Monetary order fields that must be non-negative numbers when present
_ORDER_AMOUNTS = ("total", "revenue", "tax")


class OrderModule:
    """Tracks a successfully placed order."""

    def __init__(self, context: ModuleContext):
        self.context = context

    def success(self, order: Mapping[str, Any], items: List[Mapping[str, Any]],
                cart_input: Mapping[str, Any]) -> EmitResult:
        """Track the order confirmation.

        The order block (payments, delivery, shipping, geo, ...) is passed
        through as given. The session cart is emptied once the event is sent.

        Args:
            order: Order details; ``orderId`` is required
            items: Raw cart items that were ordered
            cart_input: Mapping with cartId and/or quoteId
        """
        try:
            if not isinstance(order, Mapping):
                raise ValidationError("order must be an object.")
            validate_string(order.get("orderId"), "orderId")
            for field in _ORDER_AMOUNTS:
                validate_number(order.get(field), field, required=False, non_negative=True)
            validate_products(items, "items", item_validator=validate_cart_item)
            validate_cart_input(cart_input)
        except ValidationError as exc:
            return EmitResult.failure(exc)

        self.context.sequencer.ensure_ready()
        cart = self.context.cart
        cart.sync(items, cart_input)

        result = self.context.emit(EventType.ORDER_SUCCESS, {
            "default": {"page": self.context.page("order", "success")},
            "order": dict(order),
            "cart": cart.info.to_dict(),
            "cart_items": [format_cart_item(item) for item in cart.items],
        })
        cart.clear()
        return result
