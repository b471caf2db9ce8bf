"""
Domain modules, one per business area.
"""

from .account import AccountModule
from .cart import CartModule
from .checkout import CheckoutModule
from .context import ModuleContext
from .order import OrderModule
from .page import PageModule
from .product_display import ProductDisplayModule
from .product_listing import ProductListingModule
from .wishlist import WishlistModule

__all__ = [
    "AccountModule",
    "CartModule",
    "CheckoutModule",
    "ModuleContext",
    "OrderModule",
    "PageModule",
    "ProductDisplayModule",
    "ProductListingModule",
    "WishlistModule",
]
