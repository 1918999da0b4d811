"""Profile completeness scoring.

A profile's completeness is the share of tracked fields that are filled,
as an integer percentage truncated toward zero: 1 filled field of 15 scores
6, not 7. Adding a tracked field means adding one entry to TRACKED_FIELDS.
"""

from collections.abc import Callable, Sequence
from typing import Any


def has_text(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def is_positive(value: Any) -> bool:
    return value is not None and value > 0


def has_items(value: Any) -> bool:
    return value is not None and len(value) > 0


def is_set(value: Any) -> bool:
    return value is not None


TRACKED_FIELDS: Sequence[tuple[str, Callable[[Any], bool]]] = (
    ("full_name", has_text),
    ("phone", has_text),
    ("linkedin_url", has_text),
    ("bio", has_text),
    ("target_position", has_text),
    ("target_industry", has_text),
    ("profile_picture_url", has_text),
    ("github_url", has_text),
    ("portfolio_url", has_text),
    ("years_of_experience", is_positive),
    ("education_level", has_text),
    ("preferred_locations", has_items),
    ("availability_date", is_set),
    ("salary_expectation", has_text),
    ("email_signature", has_text),
)


def filled_fields(profile: Any) -> list[str]:
    """Names of the tracked fields that count as filled on ``profile``."""
    return [name for name, is_filled in TRACKED_FIELDS if is_filled(getattr(profile, name, None))]


def compute_completeness(profile: Any) -> int:
    return len(filled_fields(profile)) * 100 // len(TRACKED_FIELDS)
