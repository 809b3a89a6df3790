"""
Data models for the element picker.

This module defines Pydantic models for the values the picker returns
across the page boundary:
- ElementInfo: Snapshot of one selected element
- SingleSelection / MultipleSelection / CancelledSelection: the three
  possible outcomes of one picker session

On the wire a session resolves to a record, a non-empty array of records,
or null. ``parse_selection`` and ``SelectionResult.to_raw`` convert between
the two forms.
"""

from abc import abstractmethod
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ElementInfo(BaseModel):
    """Snapshot of a selected element, taken when it was picked.

    The page reports the class attribute under the key ``class``; it is
    exposed here as ``class_name``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tag: str
    """Lower-cased tag name."""

    id: Optional[str] = None
    """id attribute, None when empty."""

    class_name: Optional[str] = Field(default=None, alias="class")
    """Raw class attribute, None when empty."""

    text: Optional[str] = None
    """Trimmed text content, at most 200 characters."""

    html: str = ""
    """Outer markup, at most 500 characters."""

    parents: str = ""
    """Ancestors nearest first, formatted tag#id.class and joined by ' > '."""

    def to_raw(self) -> dict[str, Any]:
        """Return the record in the page's own key order and naming."""
        return self.model_dump(by_alias=True)

    @property
    def selector_hint(self) -> str:
        """Short tag#id.class descriptor of the element itself."""
        hint = self.tag
        if self.id:
            hint += f"#{self.id}"
        if self.class_name and self.class_name.strip():
            hint += "." + ".".join(self.class_name.split())
        return hint


class SelectionKind(str, Enum):
    """Outcome of a picker session."""

    SINGLE = "single"
    MULTIPLE = "multiple"
    CANCELLED = "cancelled"


class SelectionResult(BaseModel):
    """Base class for picker outcomes; only the subclasses are instantiated."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[SelectionKind]

    @property
    def elements(self) -> list[ElementInfo]:
        """Selected elements in selection order (empty when cancelled)."""
        return []

    @property
    def cancelled(self) -> bool:
        return self.kind is SelectionKind.CANCELLED

    @abstractmethod
    def to_raw(self) -> Union[dict[str, Any], list[dict[str, Any]], None]:
        """Convert back to the value the page resolved with."""


class SingleSelection(SelectionResult):
    """A plain click with nothing multi-selected."""

    kind: ClassVar[SelectionKind] = SelectionKind.SINGLE

    element: ElementInfo

    @property
    def elements(self) -> list[ElementInfo]:
        return [self.element]

    def to_raw(self) -> dict[str, Any]:
        return self.element.to_raw()


class MultipleSelection(SelectionResult):
    """Elements gathered with Cmd/Ctrl+click, in first-click order."""

    kind: ClassVar[SelectionKind] = SelectionKind.MULTIPLE

    items: list[ElementInfo] = Field(min_length=1)

    @property
    def elements(self) -> list[ElementInfo]:
        return list(self.items)

    def to_raw(self) -> list[dict[str, Any]]:
        return [item.to_raw() for item in self.items]


class CancelledSelection(SelectionResult):
    """The user pressed Escape."""

    kind: ClassVar[SelectionKind] = SelectionKind.CANCELLED

    def to_raw(self) -> None:
        return None


def parse_selection(raw: Any) -> SelectionResult:
    """
    Convert the value a picker session resolved with into a SelectionResult.

    Args:
        raw: dict (single), non-empty list of dicts (multiple) or None

    Returns:
        The matching SelectionResult subclass

    Raises:
        ValueError: If the value has none of the three shapes
    """
    if raw is None:
        return CancelledSelection()
    if isinstance(raw, dict):
        return SingleSelection(element=ElementInfo.model_validate(raw))
    if isinstance(raw, list):
        if not raw:
            raise ValueError("Picker returned an empty selection list")
        return MultipleSelection(
            items=[ElementInfo.model_validate(item) for item in raw]
        )
    raise ValueError(f"Unexpected picker result type: {type(raw).__name__}")
