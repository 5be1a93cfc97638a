"""Typed partial event record and the merge-if-absent reducer.

Every strategy step returns a :class:`PartialEvent` carrying whatever
subset of fields its channel could observe.  The strategy chain folds those
partials together with :func:`merge_if_absent`, which only ever fills
*empty* fields, so a value contributed by an earlier (higher-priority) step
can never be replaced by a later one.  The reducer also records which step
filled each field (``provenance``) for the draft's ``fieldSources``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PartialEvent(BaseModel):
    """A partial, non-destructive event record produced by one strategy step.

    All fields default to "empty": ``""`` for strings, ``None`` for
    numbers and ``()`` for sequences.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    date: str = Field(default="", description="ISO date YYYY-MM-DD.")
    time: str = Field(default="", description="24h HH:MM.")
    venue_name: str = ""
    venue_address: str = ""
    venue_city: str = ""
    venue_state: str = Field(default="", description="Two-letter code when known.")
    venue_capacity: int | None = None
    price_min: float | None = None
    price_max: float | None = None
    performers: tuple[str, ...] = ()
    image_urls: tuple[str, ...] = ()
    event_type: str = Field(
        default="", description="Upstream classification mapped to an event type."
    )
    provenance: dict[str, str] = Field(
        default_factory=dict, description="Field name -> step that filled it."
    )

    @property
    def has_venue_name(self) -> bool:
        return bool(self.venue_name)

    def filled_fields(self) -> list[str]:
        """Return the names of the data fields that carry a value."""
        return [name for name in MERGEABLE_FIELDS if not _is_empty(getattr(self, name))]

    def is_empty(self) -> bool:
        return not self.filled_fields()


MERGEABLE_FIELDS: tuple[str, ...] = tuple(
    name for name in PartialEvent.model_fields if name != "provenance"
)


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == ()


def merge_if_absent(base: PartialEvent, incoming: PartialEvent | None, source: str) -> PartialEvent:
    """Fill the empty fields of *base* from *incoming*.

    Fields already set on *base* are never overwritten.  Each field taken
    from *incoming* is attributed to *source* in the returned record's
    provenance.

    Args:
        base: Accumulated record from higher-priority steps.
        incoming: The current step's contribution (``None`` = no data).
        source: Name of the step that produced *incoming*.

    Returns:
        A new :class:`PartialEvent`; *base* is not modified.
    """
    if incoming is None:
        return base

    updates: dict[str, Any] = {}
    provenance = dict(base.provenance)
    for name in MERGEABLE_FIELDS:
        if _is_empty(getattr(base, name)):
            value = getattr(incoming, name)
            if not _is_empty(value):
                updates[name] = value
                provenance[name] = source

    if not updates:
        return base
    updates["provenance"] = provenance
    return base.model_copy(update=updates)
