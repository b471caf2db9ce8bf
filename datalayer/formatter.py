"""
Product Formatting

Converts loosely-typed product and cart item input into the canonical shape
pushed to the data layer.
"""

from typing import Any, Dict, Mapping

from .normalizer import normalize

# Optional fields copied through unchanged when truthy
_PASSTHROUGH_OPTIONALS = ("available_size", "barcode", "rating", "reward_points", "size", "sku_by_size")

# Optional free-text fields normalized when truthy
_NORMALIZED_OPTIONALS = ("model", "speciality", "sport", "story")


def calculate_discount(full_price: Any, listed_price: Any) -> float:
    """Percentage discount of listed price against full price, rounded to 2 places."""
    if not full_price:
        return 0.0
    return round((full_price - listed_price) / full_price * 100, 2)


def format_category(category: Any) -> str:
    """Flatten a category list into one comma-separated normalized string."""
    if not category:
        return ""
    if isinstance(category, str):
        category = category.split(",")
    return ",".join(normalize(cat) for cat in category)


def format_product(product: Mapping[str, Any]) -> Dict[str, Any]:
    """Format raw product data into the canonical product shape.

    Discount and markdown state are always derived from the price fields;
    caller-supplied ``discount`` and ``is_markdown`` are ignored.

    Args:
        product: Raw product mapping

    Returns:
        Canonical product dictionary
    """
    full_price = product.get("full_price")
    listed_price = product.get("listed_price")

    formatted: Dict[str, Any] = {
        "brand": normalize(product.get("brand")),
        "category": format_category(product.get("category")),
        "child_sku": product.get("child_sku"),
        "color": normalize(product.get("color")),
        "discount": calculate_discount(full_price, listed_price),
        "feature": list(product.get("feature") or []),
        "full_price": full_price,
        "gender": normalize(product.get("gender")),
        "is_markdown": full_price != listed_price,
        "listed_price": listed_price,
        "name": normalize(product.get("name")),
        "parent_category": normalize(product.get("parent_category")),
        "parent_sku": product.get("parent_sku"),
        "sku_available": product.get("sku_available") or False,
    }

    for field in _PASSTHROUGH_OPTIONALS:
        if product.get(field):
            formatted[field] = product[field]

    for field in _NORMALIZED_OPTIONALS:
        if product.get(field):
            formatted[field] = normalize(product[field])

    return formatted


def format_cart_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    """Format a raw cart item: the canonical product plus qty, size and sku_by_size."""
    formatted = format_product(item)
    formatted["size"] = item.get("size")
    formatted["sku_by_size"] = item.get("sku_by_size")
    formatted["qty"] = item.get("qty")
    return formatted
