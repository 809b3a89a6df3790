"""
Interactive Element Picker

Lets the user select elements in a live page:
- Hover highlight of the element under the pointer
- Click to pick one element
- Cmd/Ctrl+click to collect several, Enter to finish
- Escape to cancel
"""

from .models import (
    CancelledSelection,
    ElementInfo,
    MultipleSelection,
    SelectionKind,
    SelectionResult,
    SingleSelection,
    parse_selection,
)
from .runner import install_picker, is_picker_active, run_picker, validate_message
from .script import PICKER_NODE_ATTRIBUTE, PICKER_SCRIPT

__all__ = [
    # Models
    "CancelledSelection",
    "ElementInfo",
    "MultipleSelection",
    "SelectionKind",
    "SelectionResult",
    "SingleSelection",
    "parse_selection",
    # Runner
    "install_picker",
    "is_picker_active",
    "run_picker",
    "validate_message",
    # Script
    "PICKER_NODE_ATTRIBUTE",
    "PICKER_SCRIPT",
]
