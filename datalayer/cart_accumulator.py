"""
Cart Accumulator

Keeps the ordered cart line items for a session together with the cart
identity and derived totals.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from .models import CartInfo

logger = logging.getLogger(__name__)


class CartAccumulator:
    """
    Ordered cart line items, unique by ``child_sku``.

    Adding a SKU that is already present merges quantities. Removing or
    updating an absent SKU logs a warning and leaves the cart untouched.
    """

    def __init__(self):
        self._items: List[Dict[str, Any]] = []
        self._info = CartInfo()

    def _find(self, child_sku: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.get("child_sku") == child_sku:
                return index
        return None

    def _recalculate(self) -> None:
        total_quantity = sum(item.get("qty") or 0 for item in self._items)
        total_price = sum(
            (item.get("listed_price") or 0) * (item.get("qty") or 0)
            for item in self._items
        )
        self._info.cart_quantity = str(int(total_quantity))
        self._info.cart_total = f"{total_price:.2f}"

    def add(self, item: Mapping[str, Any]) -> Dict[str, Any]:
        """Add an item, merging quantity into an existing line with the same SKU.

        Args:
            item: Raw cart item; ``qty`` defaults to 1

        Returns:
            Copy of the resulting cart line
        """
        incoming_qty = item.get("qty") or 1
        index = self._find(item.get("child_sku"))

        if index is not None:
            line = self._items[index]
            line["qty"] = (line.get("qty") or 0) + incoming_qty
        else:
            line = dict(item)
            line["qty"] = incoming_qty
            self._items.append(line)

        self._recalculate()
        return dict(line)

    def remove(self, child_sku: str) -> Optional[Dict[str, Any]]:
        """Remove the line for a SKU.

        Returns:
            The removed line, or None if the SKU is not in the cart
        """
        index = self._find(child_sku)
        if index is None:
            logger.warning(f"Item with SKU {child_sku} not found in cart")
            return None

        removed = self._items.pop(index)
        self._recalculate()
        return removed

    def update(self, child_sku: str, qty: int) -> Optional[Dict[str, Any]]:
        """Overwrite the quantity of the line for a SKU.

        Returns:
            Copy of the updated line, or None if the SKU is not in the cart
        """
        index = self._find(child_sku)
        if index is None:
            logger.warning(f"Item with SKU {child_sku} not found in cart")
            return None

        self._items[index]["qty"] = qty
        self._recalculate()
        return dict(self._items[index])

    def sync(self, items: List[Mapping[str, Any]], cart_input: Mapping[str, Any]) -> None:
        """Replace the whole cart with externally supplied state."""
        self._items = [dict(item) for item in items]
        self._info = CartInfo(
            cartId=cart_input.get("cartId") or "",
            quoteId=cart_input.get("quoteId") or "",
        )
        self._recalculate()

    def clear(self) -> None:
        """Empty the cart and forget its identity."""
        self._items = []
        self._info = CartInfo()

    @property
    def items(self) -> List[Dict[str, Any]]:
        """Copies of the current cart lines, in insertion order."""
        return [dict(item) for item in self._items]

    @property
    def info(self) -> CartInfo:
        """Copy of the cart identity and totals."""
        return CartInfo(**self._info.to_dict())

    def __len__(self) -> int:
        return len(self._items)
