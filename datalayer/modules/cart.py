"""
Cart events.

Cart operations mutate the session CartAccumulator and report the resulting
cart state with each event.
"""

from typing import Any, Dict, List, Mapping

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


class CartModule:
    """Tracks cart additions, removals, quantity updates and cart views."""

    def __init__(self, context: ModuleContext):
        self.context = context

    @property
    def _cart(self):
        return self.context.cart

    def _cart_state(self) -> Dict[str, Any]:
        return {
            "cart_items": [format_cart_item(item) for item in self._cart.items],
            "cart": self._cart.info.to_dict(),
        }

    def add(self, item: Mapping[str, Any]) -> EmitResult:
        """Track an item being added to the cart.

        An item whose SKU is already in the cart increases that line's quantity.

        Args:
            item: Raw cart item data including qty, size and sku_by_size
        """
        try:
            validate_cart_item(item)
        except ValidationError as exc:
            return EmitResult.failure(exc)

        self.context.sequencer.ensure_ready()
        self._cart.add(item)

        return self.context.emit(EventType.CART_ADD, {
            "default": {"page": self.context.page("cart", "add", name="add-to-cart")},
            "cart_items": [format_cart_item(item)],
        })

    def remove(self, child_sku: str) -> EmitResult:
        """Track a line being removed from the cart.

        Args:
            child_sku: SKU of the line to remove
        """
        try:
            validate_string(child_sku, "childSku")
        except ValidationError as exc:
            return EmitResult.failure(exc)

        self.context.sequencer.ensure_ready()
        removed = self._cart.remove(child_sku)
        if removed is None:
            return EmitResult.skipped(f"Item with SKU {child_sku} not found in cart")

        return self.context.emit(EventType.CART_REMOVE, {
            "default": {"page": self.context.page("cart", "remove", name="remove-from-cart")},
            "cart_item_removed": format_cart_item(removed),
            **self._cart_state(),
        })

    def update(self, child_sku: str, qty: int) -> EmitResult:
        """Track a quantity change for a cart line.

        Args:
            child_sku: SKU of the line to update
            qty: New quantity
        """
        try:
            validate_string(child_sku, "childSku")
            validate_number(qty, "qty", integer=True, positive=True)
        except ValidationError as exc:
            return EmitResult.failure(exc)

        self.context.sequencer.ensure_ready()
        updated = self._cart.update(child_sku, qty)
        if updated is None:
            return EmitResult.skipped(f"Item with SKU {child_sku} not found in cart")

        return self.context.emit(EventType.CART_UPDATE, {
            "default": {"page": self.context.page("cart", "update", name="update-cart-item-qty")},
            **self._cart_state(),
        })

    def _view(self, event_type: EventType, action: str, items: List[Mapping[str, Any]],
              cart_input: Mapping[str, Any], **page_extra: Any) -> EmitResult:
        try:
            validate_products(items, "items", item_validator=validate_cart_item)
            validate_cart_input(cart_input)
        except ValidationError as exc:
            return EmitResult.failure(exc)

        self.context.sequencer.ensure_ready()
        self._cart.sync(items, cart_input)

        return self.context.emit(event_type, {
            "default": {"page": self.context.page("cart", action, **page_extra)},
            **self._cart_state(),
        })

    def mini_view(self, items: List[Mapping[str, Any]], cart_input: Mapping[str, Any]) -> EmitResult:
        """Track the mini cart being opened; the given items replace the session cart.

        Args:
            items: Raw cart items as rendered
            cart_input: Mapping with cartId and/or quoteId
        """
        return self._view(EventType.CART_VIEW_MINI, "view-mini", items, cart_input, name="view-mini-cart")

    def full_view(self, items: List[Mapping[str, Any]], cart_input: Mapping[str, Any]) -> EmitResult:
        """Track the full cart page view; the given items replace the session cart."""
        return self._view(EventType.CART_VIEW_FULL, "view-full", items, cart_input)

    def get_items(self) -> List[Dict[str, Any]]:
        """Raw items currently held in the session cart."""
        return self._cart.items

    def get_info(self) -> Dict[str, str]:
        """Cart identity and totals."""
        return self._cart.info.to_dict()
