"""Monotonic clock readings in the shapes guest programs expect."""

from __future__ import annotations

import time
from typing import NamedTuple


class TimeVal(NamedTuple):
    sec: int
    usec: int


class TimeSpec(NamedTuple):
    """Seconds and sub-second part; ``nsec`` carries milliseconds (ms resolution)."""

    sec: int
    nsec: int


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _now() -> tuple:
    ns = time.monotonic_ns()
    return divmod(ns, 1_000_000_000)


def gettimeofday() -> TimeVal:
    """Return the monotonic clock as whole seconds and microseconds."""
    sec, nsec = _now()
    return TimeVal(_int32(sec), nsec // 1000)


def clock_gettime() -> TimeSpec:
    """Return the monotonic clock as whole seconds and milliseconds."""
    sec, nsec = _now()
    return TimeSpec(_int32(sec), nsec // 1_000_000)