"""Controller layer for decoupling UI state management from widgets."""

from .selection import (
    BuildRequest,
    ImageSelection,
    SelectionBusyError,
)

__all__ = [
    "BuildRequest",
    "ImageSelection",
    "SelectionBusyError",
]
