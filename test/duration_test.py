import pytest
from datetime import timedelta as td

from iso_duration.models.duration import Duration, MAX_SECONDS, MIN_SECONDS


def test_construction():
    assert Duration() == Duration.ZERO
    assert Duration.of(days=1) == Duration(86400, 0)
    assert Duration.of(hours=1, minutes=1, seconds=1) == Duration(3661, 0)
    assert Duration.of(milliseconds=1500) == Duration(1, 500_000_000)
    assert Duration.of(seconds=-1, milliseconds=-500) == Duration(-2, 500_000_000)
    assert Duration.from_nanoseconds(-1) == Duration(-1, 999_999_999)

    with pytest.raises(ValueError):
        Duration(0, 1_000_000_000)
    with pytest.raises(ValueError):
        Duration(0, -1)
    with pytest.raises(TypeError):
        Duration(1.5, 0)
    with pytest.raises(TypeError):
        Duration(True, 0)
    with pytest.raises(OverflowError):
        Duration(MAX_SECONDS + 1, 0)
    with pytest.raises(OverflowError):
        Duration(MIN_SECONDS - 1, 0)


def test_accessors():
    d = Duration.of(seconds=-1, milliseconds=-500)
    assert d.whole_seconds == -2
    assert d.subsec_nanoseconds == 500_000_000
    assert d.total_nanoseconds() == -1_500_000_000
    assert d.total_seconds() == -1.5
    assert d.is_negative()
    assert not Duration.ZERO.is_negative()
    assert not Duration.ZERO
    assert Duration(0, 1)


def test_ordering():
    assert Duration.of(seconds=-2) < Duration.of(milliseconds=-1500) < Duration.ZERO
    assert Duration(0, 1) < Duration(1, 0)
    assert Duration.MIN < Duration.ZERO < Duration.MAX
    assert sorted([Duration(1, 0), Duration(-1, 5), Duration(0, 0)]) == [
        Duration(-1, 5), Duration(0, 0), Duration(1, 0),
    ]


def test_arithmetic():
    assert Duration.of(days=2) + Duration.of(hours=3) == Duration.of(days=2, hours=3)
    assert Duration(0, 600_000_000) + Duration(0, 600_000_000) == Duration(1, 200_000_000)
    assert Duration.of(seconds=1) - Duration.of(seconds=2) == Duration.of(seconds=-1)
    assert -Duration(1, 500_000_000) == Duration(-2, 500_000_000)
    assert abs(Duration(-2, 500_000_000)) == Duration(1, 500_000_000)

    with pytest.raises(OverflowError):
        Duration.MAX + Duration(0, 1)
    with pytest.raises(OverflowError):
        -Duration.MIN


def test_timedelta():
    assert Duration.from_timedelta(td(days=1, seconds=1.5)) == Duration(86401, 500_000_000)
    assert Duration.from_timedelta(td(seconds=-1.5)) == Duration(-2, 500_000_000)
    assert Duration(-2, 500_000_000).to_timedelta() == td(seconds=-1.5)
    assert Duration.from_timedelta(td.max).to_timedelta() == td.max

    with pytest.raises(ValueError):
        Duration(0, 1).to_timedelta()
    with pytest.raises(OverflowError):
        Duration(MAX_SECONDS, 0).to_timedelta()
