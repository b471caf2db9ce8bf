"""
Product detail page events.
"""

from typing import Any, Mapping

from ..errors import ValidationError
from ..event_types import EventType
from ..formatter import format_product
from ..models import EmitResult
from ..validator import validate_product, validate_string
from .context import ModuleContext


class ProductDisplayModule:
    """Tracks product detail views and variant selection."""

    def __init__(self, context: ModuleContext):
        self.context = context

    def view(self, product_data: Mapping[str, Any]) -> EmitResult:
        """Track a product detail page view.

        Args:
            product_data: Raw product data for the displayed product
        """
        try:
            validate_product(product_data)
        except ValidationError as exc:
            return EmitResult.failure(exc)

        self.context.clear_stale_products()
        return self.context.emit(EventType.PRODUCT_VIEW, {
            "default": {"page": self.context.page("product", "view")},
            "products": [format_product(product_data)],
        })

    def color_select(self, color: str) -> EmitResult:
        """Track a color swatch selection."""
        try:
            validate_string(color, "color")
        except ValidationError as exc:
            return EmitResult.failure(exc)

        return self.context.emit(EventType.PRODUCT_COLOR_SELECT, {
            "default": {"page": self.context.page("product", "color-select")},
            "products": [{"color": color}],
        })

    def size_select(self, size: str) -> EmitResult:
        """Track a size selection."""
        try:
            validate_string(size, "size")
        except ValidationError as exc:
            return EmitResult.failure(exc)

        return self.context.emit(EventType.PRODUCT_SIZE_SELECT, {
            "default": {"page": self.context.page("product", "size-select")},
            "products": [{"size": size}],
        })
