from unittest import mock

from rvemu.timeutil import clock_gettime, gettimeofday


def test_gettimeofday_fields_in_range():
    tv = gettimeofday()
    assert 0 <= tv.usec < 1_000_000
    assert tv.sec >= 0


def test_clock_gettime_fields_in_range():
    ts = clock_gettime()
    assert 0 <= ts.nsec < 1000
    assert ts.sec >= 0


def test_gettimeofday_is_monotonic():
    first = gettimeofday()
    second = gettimeofday()
    assert (second.sec, second.usec) >= (first.sec, first.usec)


def test_clock_gettime_is_monotonic():
    first = clock_gettime()
    second = clock_gettime()
    assert (second.sec, second.nsec) >= (first.sec, first.nsec)


@mock.patch("time.monotonic_ns", return_value=5_123_456_789)
def test_gettimeofday_splits_nanoseconds(_clock):
    assert gettimeofday() == (5, 123456)


@mock.patch("time.monotonic_ns", return_value=5_123_456_789)
def test_clock_gettime_reports_milliseconds(_clock):
    assert clock_gettime() == (5, 123)


@mock.patch("time.monotonic_ns", return_value=(2**31) * 1_000_000_000)
def test_seconds_wrap_to_signed_32_bits(_clock):
    assert gettimeofday().sec == -(2**31)
    assert clock_gettime().sec == -(2**31)