"""
DataLayer Facade

One namespaced entry point over the domain modules. The facade owns the
session's EventSequencer and CartAccumulator, and applies the log-and-suppress
policy to every domain module call in one place.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .cart_accumulator import CartAccumulator
from .environment import EnvironmentContext
from .errors import ConfigurationError, NotInitializedError
from .models import DataLayerConfig, EmitResult, SiteInfo, UserInfo
from .modules import (
    AccountModule,
    CartModule,
    CheckoutModule,
    ModuleContext,
    OrderModule,
    PageModule,
    ProductDisplayModule,
    ProductListingModule,
    WishlistModule,
)
from .sequencer import EventSequencer

logger = logging.getLogger(__name__)

LOG_PREFIX = "[unified-datalayer]"


class SafeModule:
    """Wraps a domain module so its operations return the emitted event or None.

    Validation failures and unexpected errors are logged at ERROR and skipped
    operations at WARNING; none of them reaches the caller. Configuration and
    initialization errors are re-raised.
    """

    def __init__(self, name: str, module: Any):
        self._name = name
        self._module = module

    def __getattr__(self, attr: str) -> Any:
        target = getattr(self._module, attr)
        if not callable(target):
            return target

        def call(*args: Any, **kwargs: Any) -> Any:
            operation = f"{self._name}.{attr}"
            try:
                result = target(*args, **kwargs)
            except (ConfigurationError, NotInitializedError):
                raise
            except Exception as exc:
                logger.exception(f"{LOG_PREFIX} Unexpected {type(exc).__name__} in {operation}: {exc}")
                return None
            if not isinstance(result, EmitResult):
                return result
            return self._unwrap(operation, result)

        call.__name__ = attr
        call.__doc__ = target.__doc__
        return call

    @staticmethod
    def _unwrap(operation: str, result: EmitResult) -> Optional[Dict[str, Any]]:
        if result.is_success:
            return result.event
        if result.error is not None:
            logger.error(f"{LOG_PREFIX} {type(result.error).__name__} in {operation}: {result.error}")
        elif result.reason:
            logger.warning(f"{LOG_PREFIX} {operation} skipped: {result.reason}")
        return None

    def __repr__(self) -> str:
        return f"SafeModule({self._name!r})"


class DataLayer:
    """Unified interface for data layer events.

    Example::

        dl = DataLayer(StaticEnvironment())
        dl.init({"siteInfo": {"name": "my-site", "experience": "desktop",
                              "currency": "AUD", "division": "myCompany",
                              "domain": "www.my-site.com.au", "env": "prod",
                              "version": "4.2.0"}})
        dl.page.home()
        dl.pdp.view(product)
    """

    def __init__(self, environment: Optional[EnvironmentContext] = None):
        """Create a data layer session.

        Args:
            environment: Host environment holding the queue; None runs headless
        """
        self.sequencer = EventSequencer(environment)
        self.context = ModuleContext(self.sequencer, CartAccumulator())

        self.modules: Dict[str, Any] = {
            "page": PageModule(self.context),
            "pdp": ProductDisplayModule(self.context),
            "plp": ProductListingModule(self.context),
            "cart": CartModule(self.context),
            "checkout": CheckoutModule(self.context),
            "account": AccountModule(self.context),
            "wishlist": WishlistModule(self.context),
            "order": OrderModule(self.context),
        }

        self.page = SafeModule("page", self.modules["page"])
        self.pdp = SafeModule("pdp", self.modules["pdp"])
        self.plp = SafeModule("plp", self.modules["plp"])
        self.cart = SafeModule("cart", self.modules["cart"])
        self.checkout = SafeModule("checkout", self.modules["checkout"])
        self.account = SafeModule("account", self.modules["account"])
        self.wishlist = SafeModule("wishlist", self.modules["wishlist"])
        self.order = SafeModule("order", self.modules["order"])

    def init(self, options: Union[DataLayerConfig, Mapping[str, Any]]) -> None:
        """Initialise the data layer with site information.

        Raises:
            ConfigurationError: If siteInfo is not provided
        """
        self.sequencer.init(options)

    def push_event(self, event_name: str, event_data: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Push a custom event through the nullification pipeline.

        Raises:
            NotInitializedError: If the first event is pushed before init
        """
        return self.sequencer.emit(event_name, event_data)

    def clear_products(self) -> None:
        self.sequencer.clear_products()

    def reset_first_event_flag(self) -> None:
        """Force the site information to be sent again with the next event."""
        self.sequencer.reset_first_event_flag()

    def configure_nullification(self, properties: Mapping[str, List[str]]) -> None:
        self.sequencer.configure_nullification(properties)

    def add_nullified_properties(self, key: str, properties: List[str]) -> None:
        self.sequencer.add_nullified_properties(key, properties)

    @property
    def environment(self) -> Optional[EnvironmentContext]:
        return self.sequencer.environment

    @property
    def queue(self) -> List[Dict[str, Any]]:
        """The environment's event queue; empty when headless."""
        environment = self.sequencer.environment
        return environment.queue if environment is not None else []

    @property
    def site_info(self) -> Optional[SiteInfo]:
        return self.sequencer.site_info

    @property
    def user_info(self) -> Optional[UserInfo]:
        return self.sequencer.user_info


_instance: Optional[DataLayer] = None


def get_data_layer(environment: Optional[EnvironmentContext] = None) -> DataLayer:
    """Get the process-wide DataLayer, creating it on first use.

    Args:
        environment: Environment for the instance; only used on creation
    """
    global _instance
    if _instance is None:
        _instance = DataLayer(environment)
    return _instance


def reset_data_layer() -> None:
    """Discard the process-wide DataLayer so the next call starts a new session."""
    global _instance
    _instance = None
