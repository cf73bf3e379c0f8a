"""Controller layer: keeps storage, presentation and published state in sync.

This package contains:
- validators: sanitize untrusted state against compiled constraints
- events: EventBus coupling the owners and the sync manager
- storage / presentation: the owners of the two external representations
- sync: ThemeSyncManager, the authoritative in-memory state
"""

from controller.validators import PropertyResult, ValidationResult, validate, validate_value
from controller.events import EventBus, EventKind
from controller.storage import StorageOwner
from controller.presentation import PresentationOwner
from controller.sync import ThemeSyncManager

__all__ = [
    # Validation
    "PropertyResult",
    "ValidationResult",
    "validate",
    "validate_value",
    # Events
    "EventBus",
    "EventKind",
    # Owners
    "PresentationOwner",
    "StorageOwner",
    "ThemeSyncManager",
]
