"""
ephemeris.py  —  Julian Day, Sun, Moon and ayanamsa
====================================================
Uses Jean Meeus "Astronomical Algorithms" 2nd ed.

  Julian Day  : Fliegel–Van Flandern integer form (Gregorian calendar)
  Sun         : Meeus Ch. 25, low-precision theory (true geometric longitude)
  Moon        : Meeus Ch. 47, 34 largest terms of Table 47.A + additive terms
  Ayanamsa    : Lahiri polynomial, plus linear models for Raman / KP / Fagan

Longitudes come in two flavours:
  TropicalLongitude  measured from the vernal equinox
  SiderealLongitude  tropical minus ayanamsa

Both are float subclasses normalised to [0, 360).  The only way to get a
SiderealLongitude out of a TropicalLongitude is to_sidereal().

Accuracy:  Sun ~0.01°, Moon within a few arc-minutes for 1900–2100.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Tuple

# ── Constants ──────────────────────────────────────────────────
J2000          = 2451545.0
DAYS_PER_CENTURY = 36525.0
DEG            = math.pi / 180.0
RAD            = 180.0 / math.pi
ARCSEC         = 1.0 / 3600.0


def normalize(x: float) -> float:
    """Normalize angle to [0, 360)."""
    x = x % 360.0
    # -1e-17 % 360.0 rounds up to 360.0
    return 0.0 if x >= 360.0 else x


def _r(x):
    """Degrees to radians."""
    return x * DEG


# ── Longitude flavours ─────────────────────────────────────────

class TropicalLongitude(float):
    """Ecliptic longitude from the vernal equinox, degrees in [0, 360)."""

    __slots__ = ()

    def __new__(cls, value):
        return super().__new__(cls, normalize(float(value)))

    def __repr__(self):
        return f"TropicalLongitude({float(self)!r})"


class SiderealLongitude(float):
    """Ecliptic longitude in the fixed-star zodiac, degrees in [0, 360)."""

    __slots__ = ()

    def __new__(cls, value):
        if isinstance(value, TropicalLongitude):
            raise TypeError("tropical longitude must go through to_sidereal()")
        return super().__new__(cls, normalize(float(value)))

    def __repr__(self):
        return f"SiderealLongitude({float(self)!r})"


# ── Julian Day ─────────────────────────────────────────────────

@dataclass(frozen=True)
class CivilDateTime:
    """Gregorian calendar instant, UTC."""
    year:   int
    month:  int
    day:    int
    hour:   int = 0
    minute: int = 0
    second: int = 0

    @classmethod
    def from_datetime(cls, dt: datetime) -> "CivilDateTime":
        """Naive datetimes are taken to be UTC already."""
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    @classmethod
    def from_date(cls, d: date) -> "CivilDateTime":
        if isinstance(d, datetime):
            return cls.from_datetime(d)
        return cls(d.year, d.month, d.day)

    @classmethod
    def combine(cls, d: date, hms: Tuple[int, int, int]) -> "CivilDateTime":
        hour, minute, second = hms
        return cls(d.year, d.month, d.day, hour, minute, second)


def civil_to_jd(when: CivilDateTime) -> float:
    """
    Julian Day for a UTC calendar instant.

    The integer Julian Day Number starts at noon, so the day fraction is
    counted from 12:00 (midnight gives x.5).
    """
    a = (14 - when.month) // 12
    y = when.year + 4800 - a
    m = when.month + 12 * a - 3

    jdn = (when.day + (153 * m + 2) // 5 + 365 * y
           + y // 4 - y // 100 + y // 400 - 32045)

    return jdn + (when.hour - 12) / 24.0 + when.minute / 1440.0 + when.second / 86400.0


def julian_centuries(jd: float) -> float:
    """Julian centuries since J2000.0."""
    return (jd - J2000) / DAYS_PER_CENTURY


# ── Sun (Meeus Ch. 25) ─────────────────────────────────────────

def sun_tropical_longitude(jd: float) -> TropicalLongitude:
    """True geometric longitude of the Sun (no nutation or aberration)."""
    T   = julian_centuries(jd)
    L0  = 280.46646  + 36000.76983*T + 0.0003032*T*T
    M   = 357.52911  + 35999.05029*T - 0.0001537*T*T
    M_r = _r(M)

    C = ((1.914602 - 0.004817*T - 0.000014*T*T)*math.sin(M_r)
         + (0.019993 - 0.000101*T)*math.sin(2*M_r)
         + 0.000289*math.sin(3*M_r))

    return TropicalLongitude(L0 + C)


# ── Moon (Meeus Ch. 47) ────────────────────────────────────────

# Multiples of (D, M, M', F) and the sine coefficient in 1e-6 degrees,
# in Table 47.A order.
MOON_LONGITUDE_TERMS: Tuple[Tuple[int, int, int, int, int], ...] = (
    (0,  0,  1,  0,  6288774),
    (2,  0, -1,  0,  1274027),
    (2,  0,  0,  0,   658314),
    (0,  0,  2,  0,   213618),
    (0,  1,  0,  0,  -185116),
    (0,  0,  0,  2,  -114332),
    (2,  0, -2,  0,    58793),
    (2, -1, -1,  0,    57066),
    (2,  0,  1,  0,    53322),
    (2, -1,  0,  0,    45758),
    (0,  1, -1,  0,   -40923),
    (1,  0,  0,  0,   -34720),
    (0,  1,  1,  0,   -30383),
    (2,  0,  0, -2,    15327),
    (0,  0,  1,  2,   -12528),
    (0,  0,  1, -2,    10980),
    (4,  0, -1,  0,    10675),
    (0,  0,  3,  0,    10034),
    (4,  0, -2,  0,     8548),
    (2,  1, -1,  0,    -7888),
    (2,  1,  0,  0,    -6766),
    (1,  0, -1,  0,    -5163),
    (1,  1,  0,  0,     4987),
    (2, -1,  1,  0,     4036),
    (2,  0,  2,  0,     3994),
    (4,  0,  0,  0,     3861),
    (2,  0, -3,  0,     3665),
    (0,  1, -2,  0,    -2689),
    (2,  0, -1,  2,    -2602),
    (2, -1, -2,  0,     2390),
    (1,  0,  1,  0,    -2348),
    (2, -2,  0,  0,     2236),
    (0,  1,  2,  0,    -2120),
    (0,  2,  0,  0,    -2069),
)


def moon_fundamental_arguments(T: float) -> Tuple[float, float, float, float, float]:
    """Returns (L', D, M, M', F) in degrees, not normalised."""
    T2, T3, T4 = T*T, T*T*T, T*T*T*T
    Lp = 218.3164477 + 481267.88123421*T - 0.0015786*T2 + T3/538841.0   - T4/65194000.0
    D  = 297.8501921 + 445267.1114034*T  - 0.0018819*T2 + T3/545868.0   - T4/113065000.0
    M  = 357.5291092 + 35999.0502909*T   - 0.0001536*T2 + T3/24490000.0
    Mp = 134.9633964 + 477198.8675055*T  + 0.0087414*T2 + T3/69699.0    - T4/14712000.0
    F  = 93.2720950  + 483202.0175233*T  - 0.0036539*T2 - T3/3526000.0  + T4/863310000.0
    return Lp, D, M, Mp, F


def moon_tropical_longitude(jd: float) -> TropicalLongitude:
    """Geocentric ecliptic longitude of the Moon."""
    T = julian_centuries(jd)
    Lp, D, M, Mp, F = moon_fundamental_arguments(T)

    A1 = 119.75 + 131.849*T
    A2 = 53.09  + 479264.290*T
    E  = 1.0 - 0.002516*T - 0.0000074*T*T

    sl = 0.0
    for d, m, mp, f, coeff in MOON_LONGITUDE_TERMS:
        term = coeff * math.sin(_r(d*D + m*M + mp*Mp + f*F))
        if m:
            term *= E ** abs(m)
        sl += term

    # Venus, Jupiter and Earth-flattening perturbations
    sl += 3958*math.sin(_r(A1)) + 1962*math.sin(_r(Lp - F)) + 318*math.sin(_r(A2))

    return TropicalLongitude(Lp + sl/1_000_000.0)


# ── Ayanamsa ────────────────────────────────────────────────────

AYANAMSA = {
    # Linear models: value at J2000 and annual rate
    "raman":  {"j2000": 22.46000, "rate": 50.2388 / 3600.0},
    "kp":     {"j2000": 23.86000, "rate": 50.2388 / 3600.0},
    "fagan":  {"j2000": 24.74000, "rate": 50.2388 / 3600.0},
}
AYANAMSA_SYSTEMS = ("lahiri",) + tuple(AYANAMSA)


def lahiri_ayanamsa(jd: float) -> float:
    """Lahiri (Chitrapaksha) ayanamsa in degrees."""
    T = julian_centuries(jd)
    return 23.85 + (50.2564 + (0.0222 - 0.000042*T)*T)*T / 3600.0


def get_ayanamsa(jd: float, system: str = "lahiri") -> float:
    system = system.lower()
    if system == "lahiri":
        return lahiri_ayanamsa(jd)
    try:
        p = AYANAMSA[system]
    except KeyError:
        raise ValueError(f"unknown ayanamsa system: {system!r}") from None
    return p["j2000"] + p["rate"] * julian_centuries(jd) * 100


def to_sidereal(tropical: TropicalLongitude, jd: float,
                system: str = "lahiri") -> SiderealLongitude:
    """Subtract the ayanamsa for ``jd`` from a tropical longitude."""
    return apply_ayanamsa(tropical, get_ayanamsa(jd, system))


def apply_ayanamsa(tropical: TropicalLongitude, ayanamsa: float) -> SiderealLongitude:
    """Same as to_sidereal() with an ayanamsa value already in hand."""
    if not isinstance(tropical, TropicalLongitude):
        raise TypeError(
            f"expected TropicalLongitude, got {type(tropical).__name__}"
        )
    return SiderealLongitude(float(tropical) - ayanamsa)
