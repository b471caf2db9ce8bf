"""
Input Validation

Structural checks for strings, numbers, products and cart items before they
are formatted into events. Product-level checks collect every failing field
and raise a single aggregated ValidationError.
"""

import math
import re
from typing import Any, Callable, List, Mapping, Optional, Pattern, Union

from .errors import ValidationError

_PRODUCT_STRING_FIELDS = (
    "brand",
    "child_sku",
    "color",
    "gender",
    "name",
    "parent_category",
    "parent_sku",
)

_CART_ITEM_STRING_FIELDS = ("sku_by_size", "size")


def validate_string(
    value: Any,
    name: str,
    required: bool = True,
    allow_empty: bool = False,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Optional[Union[str, Pattern[str]]] = None,
) -> None:
    """Validate a string parameter.

    Args:
        value: Value to check
        name: Parameter name used in error messages
        required: Whether a missing value is an error
        allow_empty: Whether a blank string is accepted
        min_length: Optional minimum length
        max_length: Optional maximum length
        pattern: Optional regular expression the value must match

    Raises:
        ValidationError: If any check fails
    """
    if value is None:
        if required:
            raise ValidationError(f"{name} is required.")
        return

    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string.")

    if not allow_empty and not value.strip():
        raise ValidationError(f"{name} cannot be empty or whitespace.")

    if min_length is not None and len(value) < min_length:
        raise ValidationError(f"{name} must be at least {min_length} characters long.")

    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{name} cannot exceed {max_length} characters.")

    if pattern is not None and not re.search(pattern, value):
        raise ValidationError(f"{name} format is invalid.")


def validate_number(
    value: Any,
    name: str,
    required: bool = True,
    integer: bool = False,
    non_negative: bool = False,
    positive: bool = False,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> None:
    """Validate a numeric parameter.

    ``non_negative`` rejects values below zero, ``positive`` also rejects zero.

    Raises:
        ValidationError: If any check fails
    """
    if value is None:
        if required:
            raise ValidationError(f"{name} is required.")
        return

    # bool is an int subclass but never a valid quantity or price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number.")

    if not math.isfinite(value):
        raise ValidationError(f"{name} must be a valid number.")

    if integer and value != int(value):
        raise ValidationError(f"{name} must be an integer.")

    if non_negative and value < 0:
        raise ValidationError(f"{name} cannot be negative.")

    if positive and value <= 0:
        raise ValidationError(f"{name} must be greater than 0.")

    if minimum is not None and value < minimum:
        raise ValidationError(f"{name} must be at least {minimum}.")

    if maximum is not None and value > maximum:
        raise ValidationError(f"{name} cannot exceed {maximum}.")


def _collect(errors: List[str], check: Callable[[], None]) -> None:
    """Run a check and record its failure messages instead of raising."""
    try:
        check()
    except ValidationError as exc:
        errors.extend(exc.errors)


def _raise_if_failed(errors: List[str], name: str) -> None:
    if errors:
        message = f"{name} validation failed:\n  + " + "\n  + ".join(errors)
        raise ValidationError(message, errors)


def _product_errors(data: Mapping[str, Any]) -> List[str]:
    errors: List[str] = []

    for field in _PRODUCT_STRING_FIELDS:
        _collect(errors, lambda field=field: validate_string(data.get(field), field))

    _collect(errors, lambda: validate_number(data.get("full_price"), "full_price", positive=True))
    _collect(errors, lambda: validate_number(data.get("listed_price"), "listed_price", positive=True))

    category = data.get("category")
    if not isinstance(category, list):
        errors.append("category must be a list.")
    elif not category:
        errors.append("category cannot be empty.")
    else:
        for index, cat in enumerate(category):
            _collect(errors, lambda cat=cat, index=index: validate_string(cat, f"category[{index}]"))

    feature = data.get("feature")
    if feature is not None:
        if not isinstance(feature, list):
            errors.append("feature must be a list.")
        else:
            for index, item in enumerate(feature):
                _collect(errors, lambda item=item, index=index: validate_string(item, f"feature[{index}]"))

    sku_available = data.get("sku_available")
    if sku_available is not None and not isinstance(sku_available, bool):
        errors.append("sku_available must be a boolean.")

    return errors


def validate_product(data: Any, name: str = "productData") -> None:
    """Validate raw product input, reporting every failing field at once.

    Raises:
        ValidationError: Aggregated over all failing fields
    """
    if not isinstance(data, Mapping):
        raise ValidationError(f"{name} must be an object.")

    _raise_if_failed(_product_errors(data), name)


def validate_cart_item(data: Any, name: str = "cartProductData") -> None:
    """Validate raw cart item input: product fields plus size, sku_by_size and qty.

    Raises:
        ValidationError: Aggregated over all failing fields
    """
    if not isinstance(data, Mapping):
        raise ValidationError(f"{name} must be an object.")

    errors = _product_errors(data)
    for field in _CART_ITEM_STRING_FIELDS:
        _collect(errors, lambda field=field: validate_string(data.get(field), field))
    _collect(errors, lambda: validate_number(data.get("qty"), "qty", integer=True, positive=True))

    _raise_if_failed(errors, name)


def validate_products(items: Any, name: str = "productsArray",
                      item_validator: Callable[..., None] = validate_product) -> None:
    """Validate a list of products (or cart items), aggregating across elements.

    Each element's messages are prefixed with its index, e.g. ``[2] brand is required.``.

    Raises:
        ValidationError: If the list is missing or any element fails
    """
    if items is None:
        raise ValidationError(f"{name} is required.")
    if not isinstance(items, list):
        raise ValidationError(f"{name} must be a list.")

    errors: List[str] = []
    for index, item in enumerate(items):
        try:
            item_validator(item)
        except ValidationError as exc:
            errors.extend(f"[{index}] {message}" for message in exc.errors)

    _raise_if_failed(errors, name)


def validate_cart_input(cart_input: Any, name: str = "cartInput") -> None:
    """Validate cart identity: at least one of cartId or quoteId must be set.

    Raises:
        ValidationError: If neither identifier is a non-blank string
    """
    if not isinstance(cart_input, Mapping):
        raise ValidationError(f"{name} must be an object.")

    errors: List[str] = []
    for field in ("cartId", "quoteId"):
        _collect(errors, lambda field=field: validate_string(cart_input.get(field), field, required=False, allow_empty=True))

    has_id = any(
        isinstance(cart_input.get(field), str) and cart_input.get(field).strip()
        for field in ("cartId", "quoteId")
    )
    if not has_id:
        errors.append("cartId or quoteId is required.")

    _raise_if_failed(errors, name)
