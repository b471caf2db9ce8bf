"""
Data models for the data layer.

Session context (site, user, init config) is described with Pydantic
models; cart state and per-operation results are plain dataclasses.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def default_nullify_map() -> Dict[str, List[str]]:
    """Properties under each top-level key that are nulled when they disappear."""
    return {"default": ["error"]}


class SiteInfo(BaseModel):
    """Per-session site configuration injected into the first event."""
    model_config = ConfigDict(extra="allow")

    name: str = Field(description="Name of the site")
    experience: str = Field(description="Experience type, e.g. 'desktop' or 'mobile'")
    currency: str = Field(description="Currency code, e.g. 'AUD'")
    division: str = Field(description="Company division")
    domain: str = Field(description="Site domain")
    env: str = Field(description="Environment, e.g. 'dev' or 'prod'")
    version: str = Field(description="Site version")


class UserInfo(BaseModel):
    """User state derived from the persisted client identifiers."""
    user_state: str = Field(default="guest", description="'customer' or 'guest'")
    login_state: str = Field(default="anonymous", description="'logged-in' or 'anonymous'")
    uem_hashed: str = Field(default="", description="Hashed user identifier")
    session_id: str = Field(default="", description="Client session identifier")
    division_id: str = Field(default="", description="Division identifier")

    @classmethod
    def from_identity(cls, uem_hashed: Optional[str], session_id: Optional[str] = None,
                      division_id: Optional[str] = None) -> "UserInfo":
        """Build user info from a hashed identifier; no identifier means guest."""
        if uem_hashed:
            return cls(
                user_state="customer",
                login_state="logged-in",
                uem_hashed=uem_hashed,
                session_id=session_id or "",
                division_id=division_id or "",
            )
        return cls(session_id=session_id or "", division_id=division_id or "")


class DataLayerConfig(BaseModel):
    """Options accepted by ``init``."""
    model_config = ConfigDict(populate_by_name=True)

    site_info: Optional[SiteInfo] = Field(default=None, alias="siteInfo",
                                          description="Required site information")
    properties_to_nullify: Optional[Dict[str, List[str]]] = Field(
        default=None,
        description="Replacement for the default nullification allow-list"
    )


@dataclass
class CartInfo:
    """Cart identity and aggregate totals."""
    cartId: str = ""
    quoteId: str = ""
    cart_quantity: str = "0"
    cart_total: str = "0.00"

    def to_dict(self) -> Dict[str, str]:
        """Convert to the ``cart`` payload shape."""
        return {
            "cartId": self.cartId,
            "quoteId": self.quoteId,
            "cart_quantity": self.cart_quantity,
            "cart_total": self.cart_total,
        }


@dataclass
class EmitResult:
    """Outcome of a domain module operation."""
    event: Optional[Dict[str, Any]] = None
    error: Optional[Exception] = None
    reason: Optional[str] = None  # Why nothing was emitted without an error

    @classmethod
    def success(cls, event: Dict[str, Any]) -> "EmitResult":
        return cls(event=event)

    @classmethod
    def failure(cls, error: Exception) -> "EmitResult":
        return cls(error=error)

    @classmethod
    def skipped(cls, reason: str) -> "EmitResult":
        return cls(reason=reason)

    @property
    def is_success(self) -> bool:
        """Check if an event was emitted."""
        return self.event is not None
