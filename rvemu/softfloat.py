"""Bit-level helpers for IEEE 754 single-precision values."""

FMASK_SIGN = 0x80000000
FMASK_EXPN = 0x7F800000
FMASK_FRAC = 0x007FFFFF
FMASK_QNAN = 0x00400000

FFLAG_MASK = 0x1F
FFLAG_INVALID_OP = 0x10
FFLAG_DIV_BY_ZERO = 0x08
FFLAG_OVERFLOW = 0x04
FFLAG_UNDERFLOW = 0x02
FFLAG_INEXACT = 0x01

RV_NAN = 0x7FC00000

_NEG_INF = 0xFF800000
_NEG_ZERO = 0x80000000


def calc_fclass(f: int) -> int:
    """Return the RISC-V FCLASS.S mask for the single-precision bits ``f``."""
    f &= 0xFFFFFFFF
    sign = f & FMASK_SIGN
    expn = f & FMASK_EXPN
    frac = f & FMASK_FRAC

    if expn == FMASK_EXPN:
        if frac:
            return 0x200 if frac & FMASK_QNAN else 0x100
        return 0x001 if f == _NEG_INF else 0x080
    if expn:
        return 0x002 if sign else 0x040
    if frac:
        return 0x004 if sign else 0x020
    return 0x008 if f == _NEG_ZERO else 0x010


def is_nan(f: int) -> bool:
    """True if ``f`` encodes any NaN."""
    return (f & FMASK_EXPN) == FMASK_EXPN and bool(f & FMASK_FRAC)


def is_snan(f: int) -> bool:
    """True if ``f`` encodes a signaling NaN."""
    frac = f & FMASK_FRAC
    return (f & FMASK_EXPN) == FMASK_EXPN and bool(frac) and not frac & FMASK_QNAN