"""
Account events: login and registration forms.
"""

from ..event_types import EventType
from ..models import EmitResult
from .context import ModuleContext

LOGIN_FORM = {"name": "account-login", "type": "login"}
REGISTRATION_FORM = {"name": "create-account", "type": "registration"}


class AccountModule:
    """Tracks the login and account creation flows."""

    def __init__(self, context: ModuleContext):
        self.context = context

    def login_start(self) -> EmitResult:
        """Track the login form being opened."""
        return self.context.emit(EventType.ACCOUNT_LOGIN_START, {
            "default": {"page": self.context.page("account", "login-start")},
            "form_info": dict(LOGIN_FORM),
        })

    def login_success(self) -> EmitResult:
        """Track a successful login.

        User state is re-read from the environment so the event reports the
        newly logged-in user.
        """
        default = {"page": self.context.page("account", "login-complete")}
        user = self.context.sequencer.refresh_user_info()
        if user is not None:
            default["user"] = user.model_dump()

        return self.context.emit(EventType.ACCOUNT_LOGIN_SUCCESS, {
            "default": default,
            "form_info": dict(LOGIN_FORM),
        })

    def create_start(self) -> EmitResult:
        """Track the registration form being opened."""
        return self.context.emit(EventType.ACCOUNT_CREATE_START, {
            "default": {"page": self.context.page("account", "create-start")},
            "form_info": dict(REGISTRATION_FORM),
        })

    def create_complete(self, nl_subscription: bool = False, loyalty_subscription: bool = False) -> EmitResult:
        """Track a completed registration.

        Args:
            nl_subscription: Whether the user opted into the newsletter
            loyalty_subscription: Whether the user joined the loyalty program
        """
        return self.context.emit(EventType.ACCOUNT_CREATE_COMPLETE, {
            "default": {"page": self.context.page("account", "create-complete")},
            "form_info": {
                **REGISTRATION_FORM,
                "nl_subscription": bool(nl_subscription),
                "loyalty_subscription": bool(loyalty_subscription),
            },
        })
