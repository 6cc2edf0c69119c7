from __future__ import annotations

import math
import re
from dataclasses import dataclass

import numpy as np

from yolk.errors import DivisionByZero, DomainError, NumberFormatError

# ==========================================
# Fixed-point decimal with 4 fractional digits
# ==========================================

SCALE = 10_000
PLACES = 4
RAW_MIN = int(np.iinfo(np.int64).min)
RAW_MAX = int(np.iinfo(np.int64).max)

NUMBER_RE = re.compile(r"^(-)?(\d+)(?:\.(\d+))?$")


def _clamp(raw: int) -> int:
    return max(RAW_MIN, min(RAW_MAX, raw))


def _tdiv(n: int, d: int) -> int:
    # integer division truncating toward zero (// floors)
    q = abs(n) // abs(d)
    return q if (n >= 0) == (d >= 0) else -q


@dataclass(frozen=True, order=True)
class YololNumber:
    """
    Signed fixed-point number backed by an int64 scaled by 10,000.
    Every constructed value is clamped to the int64 range, so arithmetic
    saturates instead of wrapping.
    """
    raw: int

    def __post_init__(self):
        object.__setattr__(self, "raw", _clamp(int(self.raw)))

    # --- construction ---

    @classmethod
    def from_str(cls, text: str) -> YololNumber:
        m = NUMBER_RE.match(text.strip())
        if not m:
            raise NumberFormatError(text, "expected digits with an optional fraction")
        sign, whole, frac = m.groups()
        frac = frac or ""
        if len(frac) > PLACES:
            raise NumberFormatError(text, f"more than {PLACES} fractional digits")
        raw = int(whole) * SCALE + int(frac.ljust(PLACES, "0"))
        return cls(-raw if sign else raw)

    @classmethod
    def from_int(cls, value: int) -> YololNumber:
        return cls(value * SCALE)

    @classmethod
    def from_bool(cls, value: bool) -> YololNumber:
        return ONE if value else ZERO

    @classmethod
    def from_float(cls, value: float, op: str = "float") -> YololNumber:
        """Nearest representable value; infinities saturate, NaN is a domain error."""
        if np.isnan(value):
            raise DomainError(op, value)
        if np.isinf(value):
            return cls(RAW_MAX if value > 0 else RAW_MIN)
        return cls(round(value * SCALE))

    # --- conversion ---

    def __float__(self) -> float:
        return self.raw / SCALE

    def __bool__(self) -> bool:
        return self.raw != 0

    def __str__(self) -> str:
        whole, frac = divmod(abs(self.raw), SCALE)
        sign = "-" if self.raw < 0 else ""
        if frac == 0:
            return f"{sign}{whole}"
        return f"{sign}{whole}.{frac:04d}".rstrip("0")

    def __repr__(self) -> str:
        return f"YololNumber({self})"

    # --- arithmetic ---

    def __add__(self, other: YololNumber) -> YololNumber:
        return YololNumber(self.raw + other.raw)

    def __sub__(self, other: YololNumber) -> YololNumber:
        return YololNumber(self.raw - other.raw)

    def __mul__(self, other: YololNumber) -> YololNumber:
        return YololNumber(_tdiv(self.raw * other.raw, SCALE))

    def __truediv__(self, other: YololNumber) -> YololNumber:
        if other.raw == 0:
            raise DivisionByZero("/")
        return YololNumber(_tdiv(self.raw * SCALE, other.raw))

    def __mod__(self, other: YololNumber) -> YololNumber:
        if other.raw == 0:
            raise DivisionByZero("%")
        return YololNumber(self.raw - other.raw * _tdiv(self.raw, other.raw))

    def __pow__(self, other: YololNumber) -> YololNumber:
        if self.raw == 0:
            if other.raw == 0:
                raise DomainError("^", f"{self}^{other}")
            if other.raw < 0:
                raise DivisionByZero("^")
        if self.raw < 0 and other.raw % SCALE != 0:
            # negative base with a fractional exponent has no real result
            raise DomainError("^", f"{self}^{other}")
        with np.errstate(all="ignore"):
            result = np.power(float(self), float(other))
        return YololNumber.from_float(float(result), "^")

    def __neg__(self) -> YololNumber:
        return YololNumber(-self.raw)

    def __abs__(self) -> YololNumber:
        return YololNumber(abs(self.raw))

    # --- logic and comparison, yielding the boolean literals 1 and 0 ---

    def logical_not(self) -> YololNumber:
        return YololNumber.from_bool(not self)

    def logical_and(self, other: YololNumber) -> YololNumber:
        return YololNumber.from_bool(bool(self) and bool(other))

    def logical_or(self, other: YololNumber) -> YololNumber:
        return YololNumber.from_bool(bool(self) or bool(other))

    def lt(self, other: YololNumber) -> YololNumber:
        return YololNumber.from_bool(self.raw < other.raw)

    def le(self, other: YololNumber) -> YololNumber:
        return YololNumber.from_bool(self.raw <= other.raw)

    def gt(self, other: YololNumber) -> YololNumber:
        return YololNumber.from_bool(self.raw > other.raw)

    def ge(self, other: YololNumber) -> YololNumber:
        return YololNumber.from_bool(self.raw >= other.raw)

    def equals(self, other: YololNumber) -> YololNumber:
        return YololNumber.from_bool(self.raw == other.raw)

    def not_equals(self, other: YololNumber) -> YololNumber:
        return YololNumber.from_bool(self.raw != other.raw)

    # --- transcendental (angles in degrees) ---

    def sqrt(self) -> YololNumber:
        if self.raw < 0:
            raise DomainError("sqrt", self)
        return YololNumber(math.isqrt(self.raw * SCALE))

    def sin(self) -> YololNumber:
        return YololNumber.from_float(float(np.sin(np.deg2rad(float(self)))), "sin")

    def cos(self) -> YololNumber:
        return YololNumber.from_float(float(np.cos(np.deg2rad(float(self)))), "cos")

    def tan(self) -> YololNumber:
        if self.cos().raw == 0:
            raise DomainError("tan", self)
        return YololNumber.from_float(float(np.tan(np.deg2rad(float(self)))), "tan")

    def asin(self) -> YololNumber:
        if abs(self.raw) > SCALE:
            raise DomainError("asin", self)
        return YololNumber.from_float(float(np.rad2deg(np.arcsin(float(self)))), "asin")

    def acos(self) -> YololNumber:
        if abs(self.raw) > SCALE:
            raise DomainError("acos", self)
        return YololNumber.from_float(float(np.rad2deg(np.arccos(float(self)))), "acos")

    def atan(self) -> YololNumber:
        return YololNumber.from_float(float(np.rad2deg(np.arctan(float(self)))), "atan")


ZERO = YololNumber(0)
ONE = YololNumber(SCALE)
MIN = YololNumber(RAW_MIN)
MAX = YololNumber(RAW_MAX)
