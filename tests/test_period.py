import copy
import pickle
from datetime import timedelta

import pytest

from timeperiod.durations import (
    INT64_MAX,
    INT64_MIN,
    NumericOverflowError,
    ParseMode,
    UnknownUnitError,
    parse,
)
from timeperiod.period import TimePeriod

TOTALS = [0, 1, 59, 60, 61, 3599, 3600, 86399, 86400, 93784, 2419200, 31536000, 10**12]


@pytest.mark.parametrize("total", TOTALS)
def test_from_seconds_keeps_total_and_normalizes(total):
    period = TimePeriod.from_seconds(total)
    assert period.duration == total
    assert (
        period.days * 86400 + period.hours * 3600 + period.minutes * 60 + period.seconds
        == total
    )
    assert 0 <= period.hours < 24
    assert 0 <= period.minutes < 60
    assert 0 <= period.seconds < 60
    assert period.days >= 0


@pytest.mark.parametrize("total", TOTALS)
def test_formatted_output_parses_back(total):
    period = TimePeriod.from_seconds(total)
    assert parse(str(period)) == total


def test_component_constructor():
    period = TimePeriod(seconds=4, minutes=3, hours=2, days=1)
    assert period.duration == 93784
    assert (period.days, period.hours, period.minutes, period.seconds) == (1, 2, 3, 4)
    assert TimePeriod().is_zero


def test_component_constructor_normalizes_overflowing_fields():
    period = TimePeriod(minutes=90, seconds=75)
    assert period.duration == 5475
    assert (period.hours, period.minutes, period.seconds) == (1, 31, 15)


def test_component_constructor_is_keyword_only():
    with pytest.raises(TypeError):
        TimePeriod(1, 2)  # type: ignore[misc]


def test_from_string_and_parse_factory():
    period = TimePeriod.from_string("2h 30m 15s")
    assert (period.hours, period.minutes, period.seconds) == (2, 30, 15)
    assert period.duration == 9015
    assert TimePeriod.parse_factory("2h 30m 15s") == period


def test_from_string_strict_mode():
    with pytest.raises(UnknownUnitError):
        TimePeriod.from_string("2fortnights", mode=ParseMode.STRICT)
    assert TimePeriod.from_string("2fortnights").is_zero


@pytest.mark.parametrize(
    "total, expected",
    [
        (0, "0s"),
        (5, "5s"),
        (60, "1m"),
        (5400, "1h 30m"),
        (86400, "1d"),
        (86405, "1d 5s"),
        (93784, "1d 2h 3m 4s"),
        (2419200 + 2 * 86400, "30d"),
    ],
)
def test_to_string(total, expected):
    period = TimePeriod.from_seconds(total)
    assert period.to_string() == expected
    assert str(period) == expected


def test_as_sql_interval_uses_raw_total():
    assert TimePeriod.from_seconds(90).as_sql_interval() == "interval 90 second"
    assert TimePeriod(days=2).as_sql_interval() == "interval 172800 second"
    assert TimePeriod().as_sql_interval() == "interval 0 second"


def test_equality_and_ordering_use_total_only():
    assert TimePeriod.from_seconds(60) == TimePeriod(minutes=1)
    assert TimePeriod.from_string("1h") == TimePeriod.from_string("60m")
    assert TimePeriod.from_seconds(59) < TimePeriod(minutes=1)
    assert TimePeriod(hours=1) >= TimePeriod(minutes=60)
    assert sorted(
        [TimePeriod(days=1), TimePeriod(seconds=1), TimePeriod(hours=1)]
    ) == [TimePeriod(seconds=1), TimePeriod(hours=1), TimePeriod(days=1)]
    assert len({TimePeriod(minutes=1), TimePeriod.from_seconds(60)}) == 1


def test_comparison_with_other_types():
    assert TimePeriod.from_seconds(60) != 60
    with pytest.raises(TypeError):
        TimePeriod.from_seconds(60) < 60  # noqa: B015


def test_is_zero_and_bool():
    assert TimePeriod.from_seconds(0).is_zero
    assert not TimePeriod.from_seconds(0)
    assert TimePeriod.from_seconds(1)
    assert not TimePeriod.from_seconds(1).is_zero


def test_immutable():
    period = TimePeriod(hours=1)
    with pytest.raises(AttributeError):
        period.hours = 2  # type: ignore[misc]
    with pytest.raises(AttributeError):
        period._total = 5  # type: ignore[misc]
    assert period.duration == 3600


def test_negative_totals_stay_in_range():
    period = TimePeriod.from_seconds(-1)
    assert period.duration == -1
    assert (period.days, period.hours, period.minutes, period.seconds) == (-1, 23, 59, 59)


def test_timedelta_bridge():
    period = TimePeriod.from_timedelta(timedelta(hours=1, seconds=5, milliseconds=900))
    assert period.duration == 3605
    assert period.as_timedelta() == timedelta(seconds=3605)


def test_of_dispatches_on_type():
    period = TimePeriod(minutes=5)
    assert TimePeriod.of("5m") == period
    assert TimePeriod.of(300) == period
    assert TimePeriod.of(timedelta(minutes=5)) == period
    assert TimePeriod.of(period) is period
    with pytest.raises(TypeError):
        TimePeriod.of(5.0)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        TimePeriod.of(True)


def test_repr():
    assert repr(TimePeriod(minutes=2)) == "TimePeriod(seconds=120)"


def test_copy_and_pickle_keep_value():
    period = TimePeriod(hours=1, seconds=5)
    for clone in (
        copy.copy(period),
        copy.deepcopy(period),
        pickle.loads(pickle.dumps(period)),
    ):
        assert clone == period
        assert (clone.hours, clone.seconds) == (1, 5)
        assert str(clone) == "1h 5s"


@pytest.mark.parametrize(
    "kwargs",
    [{"seconds": 1.5}, {"minutes": "90"}, {"hours": True}, {"days": None}],
)
def test_component_constructor_rejects_non_int(kwargs):
    with pytest.raises(TypeError):
        TimePeriod(**kwargs)


@pytest.mark.parametrize("total", ["90", 90.0, False])
def test_from_seconds_rejects_non_int(total):
    with pytest.raises(TypeError):
        TimePeriod.from_seconds(total)  # type: ignore[arg-type]


def test_total_must_fit_64_bits():
    assert TimePeriod.from_seconds(INT64_MAX).duration == INT64_MAX
    assert TimePeriod.from_seconds(INT64_MIN).duration == INT64_MIN
    with pytest.raises(ValueError):
        TimePeriod(days=10**20)
    with pytest.raises(NumericOverflowError):
        TimePeriod.from_seconds(INT64_MAX + 1)
    with pytest.raises(NumericOverflowError):
        TimePeriod.from_seconds(INT64_MIN - 1)
