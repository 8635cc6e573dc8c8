"""Device classes reported in summary breakdowns."""

from enum import Enum


class DeviceClass(str, Enum):
    """The two device buckets of an event summary.

    Stored device strings are matched case-insensitively. Anything else
    (tablet, tv, empty) belongs to no bucket.
    """

    MOBILE = "mobile"
    DESKTOP = "desktop"

    @classmethod
    def from_raw(cls, raw: str | None) -> "DeviceClass | None":
        """Bucket a stored device string, or None when it fits neither."""
        if not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None
