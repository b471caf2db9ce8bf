"""
Wishlist events.
"""

from typing import Any, List, Mapping

from ..errors import ValidationError
from ..event_types import EventType
from ..formatter import format_product
from ..models import EmitResult
from ..validator import validate_product, validate_products
from .context import ModuleContext


class WishlistModule:
    """Tracks wishlist views and additions."""

    def __init__(self, context: ModuleContext):
        self.context = context

    def view(self, products: List[Mapping[str, Any]]) -> EmitResult:
        """Track the wishlist page view.

        Args:
            products: Raw product data for every wishlisted product
        """
        try:
            validate_products(products)
        except ValidationError as exc:
            return EmitResult.failure(exc)

        self.context.clear_stale_products()
        return self.context.emit(EventType.WISHLIST_HOME, {
            "default": {"page": self.context.page("wishlist", "home")},
            "products": [format_product(product) for product in products],
        })

    def add(self, product_data: Mapping[str, Any]) -> EmitResult:
        """Track a product being added to the wishlist."""
        try:
            validate_product(product_data)
        except ValidationError as exc:
            return EmitResult.failure(exc)

        self.context.clear_stale_products()
        return self.context.emit(EventType.WISHLIST_ADD, {
            "default": {"page": self.context.page("wishlist", "add")},
            "products": [format_product(product_data)],
        })
