"""
houses.py
=========
Sidereal time, Ascendant (Lagna) and whole-sign houses.

Source: Meeus Ch. 12 (sidereal time), Ch. 14 (ascendant), Ch. 22 (obliquity)
"""

import math
from typing import Tuple

from .ephemeris import J2000, DEG, RAD, TropicalLongitude, julian_centuries, normalize
from .zodiac import SIGNS, sign_index

# ---------------------------------------------------------------------------
# GMST and Local Sidereal Time
# ---------------------------------------------------------------------------

def greenwich_mean_sidereal_time(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees.
    Source: Meeus Ch. 12, Eq. 12.4
    """
    T = julian_centuries(jd)
    theta = (280.46061837
             + 360.98564736629 * (jd - J2000)
             + 0.000387933 * T * T
             - T * T * T / 38710000.0)
    return normalize(theta)


def local_sidereal_time(jd: float, longitude_deg: float) -> float:
    """
    Local Mean Sidereal Time (degrees).
    longitude_deg: geographic longitude, positive East
    """
    return normalize(greenwich_mean_sidereal_time(jd) + longitude_deg)


def mean_obliquity(jd: float) -> float:
    """Mean obliquity of the ecliptic in degrees."""
    T = julian_centuries(jd)
    return 23.439291 - 0.0130042*T - 0.00000016*T*T + 0.000000504*T*T*T


# ---------------------------------------------------------------------------
# Ascendant (Lagna) calculation
# ---------------------------------------------------------------------------

def compute_ascendant(lst: float, latitude_deg: float, obliquity: float) -> float:
    """
    Tropical Ascendant degree for a given Local Sidereal Time.
    tan(asc) = cos(LST) / (-sin(LST) cos(ε) + tan(φ) sin(ε))
    """
    ramc_r = lst * DEG
    e = obliquity * DEG
    phi = latitude_deg * DEG

    # atan2 resolves the quadrant; a one-argument arctan is 180° ambiguous.
    y = math.cos(ramc_r)
    x = -math.sin(ramc_r) * math.cos(e) + math.tan(phi) * math.sin(e)
    return normalize(math.atan2(y, x) * RAD)


def ascendant_tropical_longitude(jd: float, latitude: float,
                                 geo_longitude: float) -> TropicalLongitude:
    """Tropical longitude of the Ascendant for an instant and a place."""
    lst = local_sidereal_time(jd, geo_longitude)
    return TropicalLongitude(compute_ascendant(lst, latitude, mean_obliquity(jd)))


# ---------------------------------------------------------------------------
# Whole Sign houses
# ---------------------------------------------------------------------------

def whole_sign_houses(ascendant_sign: str) -> Tuple[str, ...]:
    """
    Sign occupying each house, house 1 first.
    House 1 = sign containing the Ascendant; each house is one whole sign.
    """
    start = sign_index(ascendant_sign)
    return tuple(SIGNS[(start + i) % 12] for i in range(12))


def house_of(sign: str, ascendant_sign: str) -> int:
    """Whole-sign house number (1..12) of ``sign`` counted from the Lagna."""
    return (sign_index(sign) - sign_index(ascendant_sign)) % 12 + 1
