"""
Host Environment

The data layer never reads globals directly. Page location, title, the
persisted user identifiers and the event queue all come from an injected
environment. A data layer without an environment runs headless.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flask import g, has_request_context, request
from jinja2.utils import htmlsafe_json_dumps
from markupsafe import Markup

logger = logging.getLogger(__name__)


class EnvironmentContext:
    """Capabilities a host environment offers to the data layer."""

    @property
    def queue(self) -> List[Dict[str, Any]]:
        """The externally-owned, append-only event queue."""
        raise NotImplementedError

    @property
    def path(self) -> str:
        return ""

    @property
    def url(self) -> str:
        return ""

    @property
    def title(self) -> str:
        return ""

    @property
    def uem_hashed(self) -> Optional[str]:
        """Persisted hashed user identifier, if the client has one."""
        return None

    @property
    def session_id(self) -> Optional[str]:
        return None


@dataclass
class StaticEnvironment(EnvironmentContext):
    """Environment with fixed values; used by scripts and tests."""
    path_value: str = ""
    url_value: str = ""
    title_value: str = ""
    uem_hashed_value: Optional[str] = None
    session_id_value: Optional[str] = None
    queue_value: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def queue(self) -> List[Dict[str, Any]]:
        return self.queue_value

    @property
    def path(self) -> str:
        return self.path_value

    @property
    def url(self) -> str:
        return self.url_value

    @property
    def title(self) -> str:
        return self.title_value

    @property
    def uem_hashed(self) -> Optional[str]:
        return self.uem_hashed_value

    @property
    def session_id(self) -> Optional[str]:
        return self.session_id_value


class FlaskEnvironment(EnvironmentContext):
    """Environment backed by the current Flask request.

    The queue and page title live on ``flask.g``, so each request is its own
    data layer session. Outside a request context every value is empty and
    appended events are dropped with a warning.
    """

    QUEUE_ATTR = "adobe_data_layer"
    TITLE_ATTR = "datalayer_title"

    def __init__(self, identity_cookie: str = "uem_hashed", session_cookie: str = "session_id"):
        """Initialize the Flask environment.

        Args:
            identity_cookie: Cookie holding the hashed user identifier
            session_cookie: Cookie holding the client session id
        """
        self.identity_cookie = identity_cookie
        self.session_cookie = session_cookie

    @property
    def queue(self) -> List[Dict[str, Any]]:
        if not has_request_context():
            logger.warning("No active request; data layer events are dropped")
            return []
        return g.setdefault(self.QUEUE_ATTR, [])

    @property
    def path(self) -> str:
        return request.path if has_request_context() else ""

    @property
    def url(self) -> str:
        return request.url if has_request_context() else ""

    @property
    def title(self) -> str:
        if not has_request_context():
            return ""
        return g.get(self.TITLE_ATTR, "")

    def set_title(self, title: str) -> None:
        """Set the page title reported with page events for this request."""
        setattr(g, self.TITLE_ATTR, title)

    @property
    def uem_hashed(self) -> Optional[str]:
        if not has_request_context():
            return None
        return request.cookies.get(self.identity_cookie) or None

    @property
    def session_id(self) -> Optional[str]:
        if not has_request_context():
            return None
        return request.cookies.get(self.session_cookie) or None


def render_data_layer_script(queue: List[Dict[str, Any]], var_name: str = "adobeDataLayer") -> Markup:
    """Render a queue as a script tag that hands the events to the tag manager.

    Args:
        queue: Events to push, in order
        var_name: Name of the global data layer array

    Returns:
        HTML-safe ``<script>`` markup
    """
    payload = htmlsafe_json_dumps(queue)
    return Markup(
        "<script>"
        f"window.{var_name} = window.{var_name} || [];"
        f"Array.prototype.push.apply(window.{var_name}, {payload});"
        "</script>"
    )
