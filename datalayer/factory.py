"""
Factory for creating initialised data layer sessions.
"""

import atexit
from typing import Any, Mapping, Optional, Union

from flask import Flask, g, has_request_context
from markupsafe import Markup

from .config_manager import ConfigManager
from .environment import EnvironmentContext, FlaskEnvironment, render_data_layer_script
from .facade import DataLayer
from .logging_config import setup_logging, stop_logging
from .models import DataLayerConfig

REQUEST_ATTR = "datalayer"


def create_data_layer(
    config: Optional[Union[DataLayerConfig, Mapping[str, Any]]] = None,
    environment: Optional[EnvironmentContext] = None,
    config_manager: Optional[ConfigManager] = None,
) -> DataLayer:
    """Create a DataLayer and initialise it.

    Args:
        config: Init options; loaded from the config manager when omitted
        environment: Host environment holding the queue; None runs headless
        config_manager: Source of configuration when ``config`` is omitted

    Returns:
        Initialised DataLayer

    Raises:
        ConfigurationError: If no site information is available
    """
    if config is None:
        config = (config_manager or ConfigManager()).get_data_layer_config()

    data_layer = DataLayer(environment)
    data_layer.init(config)
    return data_layer


def get_request_data_layer(
    config: Optional[Union[DataLayerConfig, Mapping[str, Any]]] = None,
    config_manager: Optional[ConfigManager] = None,
) -> DataLayer:
    """Get the DataLayer for the current Flask request, creating it on first use.

    Each request is one data layer session: its first event carries the site
    context and its queue is rendered into the response page.

    Raises:
        RuntimeError: If called outside a request context
        ConfigurationError: If no site information is available
    """
    if not has_request_context():
        raise RuntimeError("get_request_data_layer() requires an active Flask request context")

    data_layer = g.get(REQUEST_ATTR)
    if data_layer is None:
        manager = config_manager or ConfigManager()
        tracking = manager.get_tracking_config()
        environment = FlaskEnvironment(
            identity_cookie=tracking.identity_cookie,
            session_cookie=tracking.session_cookie,
        )
        data_layer = create_data_layer(config, environment, manager)
        setattr(g, REQUEST_ATTR, data_layer)
    return data_layer


def init_app(app: Flask, config_manager: Optional[ConfigManager] = None) -> None:
    """Wire the data layer into a Flask application.

    Starts logging at the configured level, stops it at interpreter exit and
    exposes ``datalayer_script()`` to templates, which renders the current
    request's queue.

    Args:
        app: Flask application
        config_manager: Source of tracking configuration
    """
    tracking = (config_manager or ConfigManager()).get_tracking_config()
    setup_logging(debug=tracking.debug)
    atexit.register(stop_logging)

    @app.context_processor
    def inject_data_layer():
        """Inject the data layer script helper into template context."""
        def datalayer_script() -> Markup:
            data_layer = g.get(REQUEST_ATTR)
            return render_data_layer_script(data_layer.queue if data_layer is not None else [])

        return {"datalayer_script": datalayer_script}
