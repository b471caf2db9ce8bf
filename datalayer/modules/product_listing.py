"""
Product listing page events.
"""

from typing import Any, List, Mapping, Optional

from ..errors import ValidationError
from ..event_types import EventType
from ..formatter import format_product
from ..models import EmitResult
from ..validator import validate_products, validate_string
from .context import ModuleContext


class ProductListingModule:
    """Tracks listing views, filtering and sorting."""

    def __init__(self, context: ModuleContext):
        self.context = context

    def _default_list_name(self) -> str:
        """Last path segment of the current location, e.g. ``sale`` for ``/mens/sale/``."""
        environment = self.context.environment
        if environment is None:
            return ""
        segments = [segment for segment in environment.path.split("/") if segment]
        return segments[-1] if segments else ""

    def view(self, products: List[Mapping[str, Any]], list_name: Optional[str] = None) -> EmitResult:
        """Track a product listing view.

        Should be triggered once when the listing initially loads.

        Args:
            products: Raw product data in display order
            list_name: Name of the list; the URL slug is used when omitted
        """
        try:
            validate_products(products)
            validate_string(list_name, "listName", required=False)
        except ValidationError as exc:
            return EmitResult.failure(exc)

        formatted = [
            {"position": position, **format_product(product)}
            for position, product in enumerate(products)
        ]

        self.context.clear_stale_products()
        return self.context.emit(EventType.PRODUCT_LISTING_VIEW, {
            "default": {
                "page": self.context.page(
                    "product", "listing-view",
                    list_name=list_name or self._default_list_name(),
                ),
            },
            "products": formatted,
        })

    def filter(self, list_filters: Mapping[str, Any]) -> EmitResult:
        """Track filters applied to a listing.

        Multiple filter types are separated with ``|`` and multiple values for
        one type with ``,``, e.g. ``{"filter_type": "category|color",
        "filter_value": "sneakers|red,blue"}``.
        """
        try:
            if not isinstance(list_filters, Mapping):
                raise ValidationError("list_filters must be an object.")
            validate_string(list_filters.get("filter_type"), "filter_type")
            validate_string(list_filters.get("filter_value"), "filter_value")
        except ValidationError as exc:
            return EmitResult.failure(exc)

        return self.context.emit(EventType.PRODUCT_LISTING_FILTERS, {
            "default": {"page": self.context.page("product", "listing-filters")},
            "list_filters": {
                "filter_type": list_filters["filter_type"],
                "filter_value": list_filters["filter_value"],
            },
        })

    def sort(self, option: str) -> EmitResult:
        """Track a change of sort order, e.g. ``price_descending``."""
        try:
            validate_string(option, "option")
        except ValidationError as exc:
            return EmitResult.failure(exc)

        return self.context.emit(EventType.PRODUCT_LISTING_SORT, {
            "default": {"page": self.context.page("product", "listing-sort")},
            "list_sort": {"option": option},
        })
