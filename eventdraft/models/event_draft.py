"""Pydantic v2 models for the pipeline's sole output, the EventDraft.

All models are frozen (immutable).  Fields are declared in snake_case and
serialized in camelCase (``serviceFee``, ``imageUrls``, ``fieldSources``)
because the draft is consumed as initial state by the event-creation form.

Every field has a value: absence is an empty string, empty list or a
category-driven default, never ``None``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EventType(str, Enum):
    """Fixed enumeration of draft event types."""

    COMEDY = "comedy"
    SPORTS = "sports"
    THEATER = "theater"
    MOVIE = "movie"
    CONCERT = "concert"
    EVENT = "event"


_DRAFT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class DraftVenue(BaseModel):
    """Venue block of a draft.  ``name``/``address`` may be ``""`` (ask the user)."""

    model_config = _DRAFT_CONFIG

    name: str = ""
    address: str = ""
    city: str
    state: str
    capacity: int = Field(gt=0)


class PricingTier(BaseModel):
    """One ticket price level."""

    model_config = _DRAFT_CONFIG

    level: str
    price: float = Field(ge=0.0)
    service_fee: float = Field(ge=0.0)
    tax: float = Field(ge=0.0, description="Tax rate in percent.")
    sections: list[str] = Field(default_factory=list)


class LayoutLevel(BaseModel):
    """A seating/standing level in the layout hint."""

    model_config = _DRAFT_CONFIG

    name: str
    capacity: int = Field(ge=0)
    seated: bool


class LayoutConfig(BaseModel):
    """Layout hint for the inventory step: seating chart or general admission."""

    model_config = _DRAFT_CONFIG

    type: str = Field(description="'seating_chart' or 'general_admission'.")
    levels: list[LayoutLevel] = Field(default_factory=list)


class EventDraft(BaseModel):
    """The normalized, always-complete result of one extraction request."""

    model_config = _DRAFT_CONFIG

    title: str = Field(min_length=1)
    description: str
    date: str = Field(description="YYYY-MM-DD; a placeholder when unrecoverable.")
    time: str = Field(description="HH:MM, 24h.")
    venue: DraftVenue
    pricing: list[PricingTier] = Field(min_length=1)
    performers: list[str] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list)
    event_type: EventType = Field(alias="type")
    category: str
    source: str = Field(description="Step that supplied the winning venue/name data.")
    confidence: str
    field_sources: dict[str, str] = Field(default_factory=dict)
    layout_config: LayoutConfig
    error: str = ""

    def to_response(self) -> dict:
        """Serialize with camelCase keys, as returned over HTTP."""
        return self.model_dump(mode="json", by_alias=True)
