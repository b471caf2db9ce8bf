"""
Event Sequencer

Assembles event envelopes, injects site and user context once per session,
nulls keys that disappeared since the previous event, and appends the result
to the environment's queue.
"""

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .environment import EnvironmentContext
from .errors import ConfigurationError, NotInitializedError
from .models import DataLayerConfig, SiteInfo, UserInfo, default_nullify_map

logger = logging.getLogger(__name__)


class EventSequencer:
    """Stateful core of the data layer.

    One instance represents one session: the first emitted event carries the
    site (and user) context, and each later event is reconciled against a
    cleaned snapshot of the one before it.
    """

    def __init__(self, environment: Optional[EnvironmentContext] = None):
        """Initialize the sequencer.

        Args:
            environment: Host environment holding the queue; None runs headless
        """
        self.environment = environment
        self.site_info: Optional[SiteInfo] = None
        self.user_info: Optional[UserInfo] = None
        self.first_event_sent = False
        self._previous_event: Optional[Dict[str, Any]] = None
        self.properties_to_nullify: Dict[str, List[str]] = default_nullify_map()

    def init(self, config: Union[DataLayerConfig, Mapping[str, Any]]) -> None:
        """Store session configuration and derive user state.

        Args:
            config: DataLayerConfig or a mapping with a ``siteInfo`` entry

        Raises:
            ConfigurationError: If site information is missing or invalid
        """
        if not isinstance(config, DataLayerConfig):
            if not isinstance(config, Mapping):
                raise ConfigurationError("DataLayer initialisation failed: config must be a mapping")
            try:
                config = DataLayerConfig.model_validate(dict(config))
            except PydanticValidationError as exc:
                raise ConfigurationError(f"DataLayer initialisation failed: invalid siteInfo ({exc})") from exc

        if config.site_info is None:
            raise ConfigurationError("DataLayer initialisation failed: siteInfo is required")

        self.site_info = config.site_info
        if config.properties_to_nullify is not None:
            self.configure_nullification(config.properties_to_nullify)

        if self.environment is not None:
            self.refresh_user_info()

        logger.debug(f"DataLayer initialised for site {self.site_info.name}")

    def refresh_user_info(self) -> Optional[UserInfo]:
        """Re-derive user state from the environment's persisted identifiers."""
        if self.environment is None:
            return self.user_info

        self.user_info = UserInfo.from_identity(
            self.environment.uem_hashed,
            self.environment.session_id,
        )
        return self.user_info

    def ensure_ready(self) -> None:
        """Check that the next event can be emitted.

        Raises:
            NotInitializedError: If the first event is due and init was not called
        """
        if not self.first_event_sent and self.site_info is None:
            raise NotInitializedError(
                "DataLayer not initialised: call init({'siteInfo': {...}}) before pushing events"
            )

    def emit(self, event_name: str, event_data: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Push an event to the queue with smart nullification.

        Args:
            event_name: Stable event name, e.g. ``product_view``
            event_data: Event payload keyed by top-level data layer key

        Returns:
            The envelope that was appended

        Raises:
            NotInitializedError: If this is the first event and init was not called
        """
        self.ensure_ready()

        event_data = event_data or {}

        if self.environment is None:
            logger.debug(f"Headless mode, event not queued: {event_name}")
            return {"event": event_name, **event_data}

        payload = dict(event_data)
        if isinstance(payload.get("default"), dict):
            payload["default"] = dict(payload["default"])

        if not self.first_event_sent:
            if not isinstance(payload.get("default"), dict):
                payload["default"] = {}
            payload["default"]["site"] = self.site_info.model_dump()
            if self.user_info is not None:
                payload["default"]["user"] = self.user_info.model_dump()
            self.first_event_sent = True

        envelope = {"event": event_name, **payload}

        self._apply_nullification(envelope)
        self.environment.queue.append(envelope)
        self._store_previous_event(envelope)

        logger.debug(f"Event pushed: {event_name}")
        return envelope

    def _apply_nullification(self, envelope: Dict[str, Any]) -> None:
        """Null keys that were present in the previous event but are now absent."""
        if self._previous_event is None:
            return

        for key, previous_value in self._previous_event.items():
            if key == "event":
                continue

            if key == "default":
                if not isinstance(previous_value, dict):
                    continue
                if not isinstance(envelope.get(key), dict):
                    envelope[key] = {}
                for nested_key in self.properties_to_nullify.get(key, []):
                    if nested_key in previous_value and nested_key not in envelope[key]:
                        envelope[key][nested_key] = None
            elif key not in envelope:
                envelope[key] = None

    def _store_previous_event(self, envelope: Dict[str, Any]) -> None:
        """Snapshot the envelope without its null placeholders."""
        snapshot = copy.deepcopy(envelope)

        for key in [k for k, v in snapshot.items() if v is None and k != "default"]:
            del snapshot[key]

        default = snapshot.get("default")
        if isinstance(default, dict):
            for key in [k for k, v in default.items() if v is None]:
                del default[key]

        self._previous_event = snapshot

    @property
    def previous_event(self) -> Optional[Dict[str, Any]]:
        """Copy of the last emitted event as used for the next diff."""
        return copy.deepcopy(self._previous_event)

    def clear_products(self) -> None:
        """Append ``{"products": None}`` directly, outside the nullification diff."""
        if self.environment is None:
            return
        self.environment.queue.append({"products": None})

    def reset_first_event_flag(self) -> None:
        """Force site and user context to be injected into the next event."""
        self.first_event_sent = False

    def configure_nullification(self, properties: Mapping[str, List[str]]) -> None:
        """Replace the nullification allow-list.

        Args:
            properties: Map of top-level key to nested property names
        """
        self.properties_to_nullify = {key: list(names) for key, names in properties.items()}

    def add_nullified_properties(self, key: str, properties: List[str]) -> None:
        """Extend the nullification allow-list for one top-level key."""
        existing = self.properties_to_nullify.get(key, [])
        self.properties_to_nullify[key] = existing + [p for p in properties if p not in existing]
