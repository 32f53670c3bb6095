"""Normalized duration value built on top of :mod:`timeperiod.durations`."""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Mapping, Union

from .durations import (
    DEFAULT_UNITS,
    INT64_MAX,
    INT64_MIN,
    NumericOverflowError,
    ParseMode,
    parse,
)

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


def _require_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value


@dataclass(frozen=True, init=False, repr=False, order=True)
class TimePeriod:
    """An immutable span of whole seconds split into days, hours, minutes and seconds.

    Two periods compare equal when they cover the same number of seconds, no
    matter how they were built.
    """

    _total: int
    _days: int = field(compare=False)
    _hours: int = field(compare=False)
    _minutes: int = field(compare=False)
    _seconds: int = field(compare=False)

    def __init__(
        self, *, seconds: int = 0, minutes: int = 0, hours: int = 0, days: int = 0
    ):
        total = (
            _require_int("seconds", seconds)
            + _require_int("minutes", minutes) * SECONDS_PER_MINUTE
            + _require_int("hours", hours) * SECONDS_PER_HOUR
            + _require_int("days", days) * SECONDS_PER_DAY
        )
        if not INT64_MIN <= total <= INT64_MAX:
            raise NumericOverflowError(str(total), 0)
        # floor division keeps every component non-negative below its bound
        days_, rest = divmod(total, SECONDS_PER_DAY)
        hours_, rest = divmod(rest, SECONDS_PER_HOUR)
        minutes_, seconds_ = divmod(rest, SECONDS_PER_MINUTE)
        object.__setattr__(self, "_total", total)
        object.__setattr__(self, "_days", days_)
        object.__setattr__(self, "_hours", hours_)
        object.__setattr__(self, "_minutes", minutes_)
        object.__setattr__(self, "_seconds", seconds_)

    @classmethod
    def from_seconds(cls, total: int) -> "TimePeriod":
        return cls(seconds=total)

    @classmethod
    def from_string(
        cls,
        text: str,
        units: Mapping[str, int] = DEFAULT_UNITS,
        mode: ParseMode = ParseMode.LENIENT,
    ) -> "TimePeriod":
        """Parse ``text`` (e.g. ``"5h 30m"``) and normalize the result."""
        return cls.from_seconds(parse(text, units, mode))

    @classmethod
    def parse_factory(cls, text: str) -> "TimePeriod":
        return cls.from_seconds(parse(text))

    @classmethod
    def from_timedelta(cls, td: timedelta) -> "TimePeriod":
        return cls.from_seconds(int(td.total_seconds()))

    @classmethod
    def of(cls, value: Union[str, int, timedelta, "TimePeriod"]) -> "TimePeriod":
        """Build a period from any supported representation."""
        if isinstance(value, TimePeriod):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        if isinstance(value, timedelta):
            return cls.from_timedelta(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_seconds(value)
        raise TypeError(f"Cannot build a TimePeriod from {type(value).__name__}")

    @property
    def duration(self) -> int:
        """Total number of seconds, not normalized."""
        return self._total

    @property
    def days(self) -> int:
        return self._days

    @property
    def hours(self) -> int:
        return self._hours

    @property
    def minutes(self) -> int:
        return self._minutes

    @property
    def seconds(self) -> int:
        return self._seconds

    @property
    def is_zero(self) -> bool:
        return self._total == 0

    def as_timedelta(self) -> timedelta:
        return timedelta(seconds=self._total)

    def as_sql_interval(self) -> str:
        return f"interval {self._total} second"

    def to_string(self) -> str:
        """Format as e.g. ``"2d 5h 30m 15s"``, leaving out zero components.

        A zero period renders as ``"0s"``.
        """
        parts = []
        if self._days > 0:
            parts.append(f"{self._days}d")
        if self._hours > 0:
            parts.append(f"{self._hours}h")
        if self._minutes > 0:
            parts.append(f"{self._minutes}m")
        if self._seconds > 0 or not parts:
            parts.append(f"{self._seconds}s")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seconds={self._total})"

    def __bool__(self) -> bool:
        return not self.is_zero
