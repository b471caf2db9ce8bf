"""
Shared services for the domain modules.

Every domain module is composed with one ModuleContext instead of inheriting
from a common base class.
"""

from typing import Any, Dict, Mapping, Optional

from ..cart_accumulator import CartAccumulator
from ..event_types import EventType
from ..models import EmitResult
from ..normalizer import normalize
from ..sequencer import EventSequencer


class ModuleContext:
    """Gives domain modules access to the sequencer, the session cart and the host environment."""

    def __init__(self, sequencer: EventSequencer, cart: Optional[CartAccumulator] = None):
        self.sequencer = sequencer
        self.cart = cart if cart is not None else CartAccumulator()

    @property
    def environment(self):
        return self.sequencer.environment

    def page(self, page_type: str, action: str, **extra: Any) -> Dict[str, Any]:
        """Build the ``default.page`` block for the current location."""
        environment = self.environment
        page = {
            "type": page_type,
            "action": action,
            "path": environment.path if environment else "",
            "title": normalize(environment.title) if environment else "",
            "url": environment.url if environment else "",
        }
        page.update(extra)
        return page

    def emit(self, event_type: EventType, data: Optional[Mapping[str, Any]] = None) -> EmitResult:
        """Emit an event and wrap the envelope in a successful result."""
        return EmitResult.success(self.sequencer.emit(event_type.value, data))

    def clear_stale_products(self) -> None:
        """Drop product context left over from the previous event, if any."""
        previous = self.sequencer.previous_event
        if previous and previous.get("products") is not None:
            self.sequencer.clear_products()
