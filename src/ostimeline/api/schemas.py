"""
Request/response models for the HTTP API.

The API is stateless: each request carries the full filter snapshot as a
:class:`TimelineQuery`. Missing facet lists mean "everything selected" and a
missing range endpoint means the dataset bound, which reproduces the
fresh-load state when nothing is sent.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ostimeline.core.contracts.entry import EntryType, Family
from ostimeline.core.contracts.state import FilterState
from ostimeline.core.dataset import Dataset


class TimelineQuery(BaseModel):
    """Filter snapshot as sent by a client."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(default="", description="Case-insensitive substring")
    types: list[EntryType] | None = Field(default=None, description="None selects all types")
    families: list[Family] | None = Field(default=None, description="None selects all families")
    range_from: int | None = Field(default=None, alias="from")
    range_to: int | None = Field(default=None, alias="to")

    def to_state(self, dataset: Dataset) -> FilterState:
        """Build a clamped `FilterState`.

        The upper endpoint is applied first, then the lower one is clamped
        against it, so an inverted pair collapses onto `to`.
        """
        state = FilterState.initial(dataset.min_year, dataset.max_year).with_query(self.query)
        if self.types is not None:
            state = state.with_types(self.types)
        if self.families is not None:
            state = state.with_families(self.families)
        if self.range_to is not None:
            state = state.with_range_to(self.range_to, dataset.max_year)
        if self.range_from is not None:
            state = state.with_range_from(self.range_from, dataset.min_year)
        return state


class FacetsResponse(BaseModel):
    """Facet universes in display order plus the dataset year bounds."""

    types: list[EntryType]
    families: list[Family]
    platforms: list[str]
    min_year: int
    max_year: int


class ToggleRequest(BaseModel):
    """One click on a facet chip."""

    facet: Literal["type", "family"]
    selected: list[str] = Field(default_factory=list)
    clicked: str


class ToggleResponse(BaseModel):
    selected: list[str]


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    environment: str
    version: str


__all__ = [
    "TimelineQuery",
    "FacetsResponse",
    "ToggleRequest",
    "ToggleResponse",
    "HealthResponse",
]
