# khasra/core/errors.py
"""
Structured errors for parcel measurement.
Only GeometryError and ConfigurationError leave the core; both mean
"skip this feature", never "abort the batch".
"""

from __future__ import annotations

# Known error keys
DEGENERATE_RING = "degenerate_ring"
MALFORMED_RING = "malformed_ring"
PROJECTION_FAILED = "projection_failed"
UNSUPPORTED_GEOMETRY = "unsupported_geometry"
UNKNOWN_REFERENCE_FRAME = "unknown_reference_frame"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    DEGENERATE_RING: "Parcel boundary has fewer than 3 distinct corners and cannot be measured.",
    MALFORMED_RING: "Parcel boundary contains an invalid coordinate.",
    PROJECTION_FAILED: "Parcel lies outside the selected projection zone. Try another projection.",
    UNSUPPORTED_GEOMETRY: "Only Polygon and MultiPolygon parcels can be measured.",
    UNKNOWN_REFERENCE_FRAME: "Unknown projection. Pick one of the supported zones.",
}


class KhasraError(ValueError):
    """Base class; carries a structured error_key."""

    default_key: str = ""

    def __init__(self, message: str, error_key: str | None = None) -> None:
        super().__init__(message)
        self.error_key = error_key or self.default_key


class GeometryError(KhasraError):
    """Ring cannot be measured (degenerate, malformed, or outside the frame)."""

    default_key = DEGENERATE_RING


class ConfigurationError(KhasraError):
    """Unrecognized reference frame."""

    default_key = UNKNOWN_REFERENCE_FRAME


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
