"""Virtual resolution usage errors."""

from __future__ import annotations


class VirtualResolutionError(RuntimeError):
    """Base class for virtual resolution integration errors."""


class InvalidConfiguration(VirtualResolutionError, ValueError):
    """Raised for non-positive dimensions or out-of-range policy fractions."""


class NotInitialised(VirtualResolutionError):
    """Raised when an operation runs before ``initialise``."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} called before initialise")
        self.operation = operation


class AlreadyBound(VirtualResolutionError):
    """Raised when a scene is already bound by another virtual resolution context."""


class NoBinding(VirtualResolutionError):
    """Raised when releasing a scene that has no transform node."""


class TouchDispatchUnavailable(VirtualResolutionError):
    """Raised when touch scaling is requested without a dispatch entry point."""


__all__ = [
    "AlreadyBound",
    "InvalidConfiguration",
    "NoBinding",
    "NotInitialised",
    "TouchDispatchUnavailable",
    "VirtualResolutionError",
]
