"""Result type of the URL slug tokenizer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SlugParts:
    """An event name, date and location decomposed from a URL slug.

    Attributes
    ----------
    name:
        Title-cased event name built from the remaining tokens.
    date:
        ISO ``YYYY-MM-DD`` date, or ``""`` when no date run was found.
    city:
        Title-cased city, or ``""``.
    state:
        Two-letter state code, or ``""``.
    tokens:
        The lower-case name tokens left after date/city/state removal.
    """

    name: str = ""
    date: str = ""
    city: str = ""
    state: str = ""
    tokens: tuple[str, ...] = ()

    @property
    def search_phrase(self) -> str:
        """Space-joined name tokens, used as a vendor keyword query."""
        return " ".join(self.tokens)
