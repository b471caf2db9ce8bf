"""
Unified Data Layer

Builds structured analytics events (page, product, cart, checkout, account,
wishlist, order) and appends them to the Adobe Client Data Layer queue with
one-time site context and smart nullification of stale keys.
"""

from .environment import EnvironmentContext, FlaskEnvironment, StaticEnvironment, render_data_layer_script
from .errors import ConfigurationError, DataLayerError, NotInitializedError, ValidationError
from .event_types import EventType
from .facade import DataLayer, get_data_layer, reset_data_layer
from .factory import create_data_layer, get_request_data_layer, init_app
from .models import CartInfo, DataLayerConfig, EmitResult, SiteInfo, UserInfo
from .normalizer import normalize

__all__ = [
    # Facade
    "DataLayer",
    "get_data_layer",
    "reset_data_layer",
    "create_data_layer",
    "get_request_data_layer",
    "init_app",

    # Environment
    "EnvironmentContext",
    "FlaskEnvironment",
    "StaticEnvironment",
    "render_data_layer_script",

    # Models
    "CartInfo",
    "DataLayerConfig",
    "EmitResult",
    "EventType",
    "SiteInfo",
    "UserInfo",

    # Errors
    "ConfigurationError",
    "DataLayerError",
    "NotInitializedError",
    "ValidationError",

    # Utilities
    "normalize",
]
