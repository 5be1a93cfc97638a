"""Confidence scoring utilities for extracted event drafts.

Every field of a draft is filled by exactly one strategy step (or by the
synthetic defaults).  This module turns that provenance into a trust signal:

1. **step_confidence** -- Maps a step name (``ticketmaster_lookup``,
   ``html``, ``slug`` ...) to a numeric score by its kind.
2. **calculate_confidence** -- Weighted average of per-field scores.
3. **confidence_to_level** -- Maps a numeric score to a human-readable
   tier (VERY_LOW through VERY_HIGH) for the draft's ``confidence`` tag.
"""

from enum import Enum


class ConfidenceLevel(Enum):
    """Human-readable confidence tiers."""

    VERY_LOW = "very_low"    # < 0.2 -- synthesized defaults only
    LOW = "low"              # 0.2 - 0.4 -- URL slug heuristics
    MEDIUM = "medium"        # 0.4 - 0.6 -- scraped markup
    HIGH = "high"            # 0.6 - 0.8 -- semi-public JSON endpoints
    VERY_HIGH = "very_high"  # >= 0.8 -- vendor structured API


# Scores per step kind; a step name ends with its kind (``seatgeek_search``).
_KIND_SCORES: dict[str, float] = {
    "lookup": 0.95,
    "search": 0.8,
    "embed": 0.7,
    "html": 0.55,
    "slug": 0.3,
    "default": 0.1,
}

# Fields that decide whether a draft is usable without edits.
_FIELD_WEIGHTS: dict[str, float] = {
    "title": 2.0,
    "venue_name": 3.0,
    "date": 2.0,
    "venue_city": 1.0,
}


def step_confidence(step_name: str) -> float:
    """Return the score for a step name, judged by its trailing kind."""
    kind = step_name.rsplit("_", 1)[-1] if step_name else "default"
    return _KIND_SCORES.get(kind, _KIND_SCORES["default"])


def calculate_confidence(
    scores: list[float],
    weights: list[float] | None = None,
) -> float:
    """Compute a weighted average confidence score.

    Args:
        scores: Individual confidence scores, each in [0.0, 1.0].
        weights: Optional weights for each score. Defaults to equal weighting.

    Returns:
        Weighted average clamped to [0.0, 1.0].

    Raises:
        ValueError: If scores is empty or lengths of scores and weights differ.
    """
    if not scores:
        raise ValueError("scores must not be empty")

    if weights is None:
        weights = [1.0] * len(scores)

    if len(scores) != len(weights):
        raise ValueError("scores and weights must have the same length")

    total_weight = sum(weights)
    if total_weight == 0:
        return 0.0

    weighted_sum = sum(s * w for s, w in zip(scores, weights, strict=True))
    return max(0.0, min(1.0, weighted_sum / total_weight))


def confidence_to_level(score: float) -> ConfidenceLevel:
    """Map a numeric confidence score to a human-readable level."""
    if score < 0.2:
        return ConfidenceLevel.VERY_LOW
    if score < 0.4:
        return ConfidenceLevel.LOW
    if score < 0.6:
        return ConfidenceLevel.MEDIUM
    if score < 0.8:
        return ConfidenceLevel.HIGH
    return ConfidenceLevel.VERY_HIGH


def draft_confidence(field_sources: dict[str, str]) -> ConfidenceLevel:
    """Score a draft from the provenance of its key fields.

    Fields missing from *field_sources* count as synthesized defaults.
    """
    names = list(_FIELD_WEIGHTS)
    scores = [step_confidence(field_sources.get(name, "default")) for name in names]
    weights = [_FIELD_WEIGHTS[name] for name in names]
    return confidence_to_level(calculate_confidence(scores, weights))
