"""
Event names emitted by the domain modules.
"""

from enum import Enum


class EventType(Enum):
    """Canonical event names."""

    # Page events
    PAGE_DEFAULT = "page_default"
    PAGE_ERROR = "page_error"

    # Product display events
    PRODUCT_VIEW = "product_view"
    PRODUCT_COLOR_SELECT = "product_color-select"
    PRODUCT_SIZE_SELECT = "product_size-select"

    # Product listing events
    PRODUCT_LISTING_VIEW = "product_listing-view"
    PRODUCT_LISTING_FILTERS = "product_listing-filters"
    PRODUCT_LISTING_SORT = "product_listing-sort"

    # Cart events
    CART_ADD = "cart_add"
    CART_REMOVE = "cart_remove"
    CART_UPDATE = "cart_update"
    CART_VIEW_MINI = "cart_view-mini"
    CART_VIEW_FULL = "cart_view-full"

    # Checkout and order events
    CHECKOUT_START = "checkout_start"
    ORDER_SUCCESS = "order_success"

    # Account events
    ACCOUNT_LOGIN_START = "account_login-start"
    ACCOUNT_LOGIN_SUCCESS = "account_login-success"
    ACCOUNT_CREATE_START = "account_create-start"
    ACCOUNT_CREATE_COMPLETE = "account_create-complete"

    # Wishlist events
    WISHLIST_HOME = "wishlist_home"
    WISHLIST_ADD = "add_to-wishlist"

    @classmethod
    def is_valid(cls, event_type: str) -> bool:
        """Check if an event name string is known."""
        try:
            cls(event_type)
            return True
        except ValueError:
            return False

    @classmethod
    def get_allowed_types(cls) -> set[str]:
        """Get all known event name strings."""
        return {e.value for e in cls}
