"""
Data layer exceptions.

Configuration and initialization errors are raised to the integrator.
Validation errors are contained by the domain modules.
"""

from typing import List, Optional


class DataLayerError(Exception):
    """Base class for all data layer errors."""
    pass


class ConfigurationError(DataLayerError):
    """Raised when init is called without the required site information."""
    pass


class NotInitializedError(DataLayerError):
    """Raised when the first event of a session is emitted before init."""
    pass


class ValidationError(DataLayerError):
    """Raised when business input is malformed.

    Carries every failure message collected for the input, not just the first.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors if errors is not None else [message]
