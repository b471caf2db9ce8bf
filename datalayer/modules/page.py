"""
Page events.
"""

from typing import Optional

from ..errors import ValidationError
from ..event_types import EventType
from ..models import EmitResult
from ..validator import validate_string
from .context import ModuleContext


class PageModule:
    """Tracks page views and page errors."""

    def __init__(self, context: ModuleContext):
        self.context = context

    def home(self) -> EmitResult:
        """Track a home page view."""
        return self.context.emit(EventType.PAGE_DEFAULT, {
            "default": {"page": self.context.page("home", "view")},
        })

    def view(self, page_type: str, action: str = "view") -> EmitResult:
        """Track a page view for any page type.

        Args:
            page_type: Type of page, e.g. "category", "search", "blog"
            action: Action performed on the page
        """
        try:
            validate_string(page_type, "pageType")
            validate_string(action, "action")
        except ValidationError as exc:
            return EmitResult.failure(exc)

        return self.context.emit(EventType.PAGE_DEFAULT, {
            "default": {"page": self.context.page(page_type, action)},
        })

    def error(self, code: str, message: Optional[str] = None, page_type: str = "error") -> EmitResult:
        """Track a page error.

        The error block sits under ``default`` and is nulled on the next event.

        Args:
            code: Error code, e.g. "404"
            message: Optional human-readable description
            page_type: Page type reported alongside the error
        """
        try:
            validate_string(code, "code")
            validate_string(message, "message", required=False)
        except ValidationError as exc:
            return EmitResult.failure(exc)

        return self.context.emit(EventType.PAGE_ERROR, {
            "default": {
                "page": self.context.page(page_type, "error"),
                "error": {"code": code, "message": message or ""},
            },
        })
