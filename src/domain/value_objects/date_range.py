"""Inclusive calendar-day range used by analytics queries.

Usage:
    from src.domain.value_objects import DateRange

    match DateRange.resolve(start=None, end=None, today=date(2024, 3, 10)):
        case Success(value=dr):
            dr.start  # 2024-03-03
            dr.end    # 2024-03-10
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success

DEFAULT_RANGE_DAYS = 7


@dataclass(frozen=True, slots=True, kw_only=True)
class DateRange:
    """Inclusive range of UTC calendar days.

    Attributes:
        start: First day included.
        end: Last day included.
    """

    start: date
    end: date

    @classmethod
    def resolve(
        cls,
        *,
        start: date | None,
        end: date | None,
        today: date | None = None,
        default_days: int = DEFAULT_RANGE_DAYS,
    ) -> Result["DateRange", ValidationError]:
        """Fill in missing bounds and validate ordering.

        A missing end is today; a missing start is ``default_days`` before
        the end. The same logical query always resolves to the same days,
        which keeps cache fingerprints stable.

        Returns:
            Success(DateRange), or Failure(ValidationError) when start > end.
        """
        resolved_end = end or today or datetime.now(UTC).date()
        resolved_start = start or resolved_end - timedelta(days=default_days)
        if resolved_start > resolved_end:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_DATE_RANGE,
                    message="startDate must not be after endDate",
                    field="startDate",
                )
            )
        return Success(value=cls(start=resolved_start, end=resolved_end))

    @property
    def starts_at(self) -> datetime:
        """Inclusive lower bound (00:00 UTC on start)."""
        return datetime.combine(self.start, time.min, tzinfo=UTC)

    @property
    def ends_before(self) -> datetime:
        """Exclusive upper bound (00:00 UTC the day after end)."""
        return datetime.combine(self.end + timedelta(days=1), time.min, tzinfo=UTC)

    def contains(self, moment: datetime) -> bool:
        return self.starts_at <= moment < self.ends_before
