"""
chart.py
========
Vedic birth chart assembler.

Orchestrates the ephemeris, house and zodiac modules to produce the four
placements the app stores on a profile (Moon sign, Sun sign, Lagna,
Nakshatra) together with their sidereal longitudes.

Usage:
    from naksh_engine.tools.chart import compute_chart

    chart = compute_chart(
        birth_date=date(1988, 7, 18),
        birth_time="13:16:00",      # UTC
        latitude=28.6139,           # Delhi
        longitude=77.2090,
    )
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Tuple, Union

from ..core.ephemeris import (
    CivilDateTime, civil_to_jd, get_ayanamsa, apply_ayanamsa,
    sun_tropical_longitude, moon_tropical_longitude,
)
from ..core.houses import ascendant_tropical_longitude, whole_sign_houses, house_of
from ..core.zodiac import sign_of, nakshatra_of, nakshatra_pada, degree_in_sign, format_dms

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


# ---------------------------------------------------------------------------
# Result record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VedicChart:
    moon_sign:           str
    sun_sign:            str
    ascendant:           str
    nakshatra:           str
    moon_longitude:      float
    sun_longitude:       float
    ascendant_longitude: float
    ayanamsa:            float
    julian_day:          float
    nakshatra_pada:      int
    houses:              Tuple[str, ...]
    moon_house:          int
    sun_house:           int

    def to_dict(self) -> dict:
        """Wire form stored on the user profile and returned by the API."""
        return {
            "moonSign": self.moon_sign,
            "sunSign": self.sun_sign,
            "ascendant": self.ascendant,
            "nakshatra": self.nakshatra,
            "moonLongitude": self.moon_longitude,
            "sunLongitude": self.sun_longitude,
            "ascendantLongitude": self.ascendant_longitude,
            "ayanamsa": self.ayanamsa,
            "julianDay": self.julian_day,
            "nakshatraPada": self.nakshatra_pada,
            "houses": [
                {"house": i + 1, "sign": sign} for i, sign in enumerate(self.houses)
            ],
            "moonHouse": self.moon_house,
            "sunHouse": self.sun_house,
            "degrees": {
                "moon": format_dms(degree_in_sign(self.moon_longitude)),
                "sun": format_dms(degree_in_sign(self.sun_longitude)),
                "ascendant": format_dms(degree_in_sign(self.ascendant_longitude)),
            },
        }


# ---------------------------------------------------------------------------
# Input parsing
# ---------------------------------------------------------------------------

def parse_birth_time(value: str) -> Tuple[int, int, int]:
    """'HH:MM' or 'HH:MM:SS' -> (hour, minute, second)."""
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"birth time must be HH:MM or HH:MM:SS, got {value!r}")
    try:
        hour, minute = int(parts[0]), int(parts[1])
        second = int(parts[2]) if len(parts) == 3 else 0
    except ValueError:
        raise ValueError(f"birth time must be numeric, got {value!r}") from None
    if not (0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59):
        raise ValueError(f"birth time out of range: {value!r}")
    return hour, minute, second


def _as_date(value: DateLike) -> date:
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value


def birth_julian_day(birth_date: DateLike, birth_time: str) -> float:
    when = CivilDateTime.combine(_as_date(birth_date), parse_birth_time(birth_time))
    return civil_to_jd(when)


# ---------------------------------------------------------------------------
# Main assembler
# ---------------------------------------------------------------------------

def compute_chart(
    birth_date: DateLike,
    birth_time: str,
    latitude: float,
    longitude: float,
    ayanamsa: str = "lahiri",
) -> VedicChart:
    """
    Compute the Vedic placements for a birth.

    Args:
        birth_date: Gregorian date (or ISO 'YYYY-MM-DD')
        birth_time: 'HH:MM:SS' already expressed in UTC
        latitude: Geographic latitude in degrees (positive = North)
        longitude: Geographic longitude in degrees (positive = East)
        ayanamsa: 'lahiri', 'raman', 'kp', 'fagan'

    Returns:
        VedicChart with sidereal longitudes and their signs
    """
    # One instant and one ayanamsa for all three bodies
    jd = birth_julian_day(birth_date, birth_time)
    ayan = get_ayanamsa(jd, ayanamsa)

    moon_sid = apply_ayanamsa(moon_tropical_longitude(jd), ayan)
    sun_sid  = apply_ayanamsa(sun_tropical_longitude(jd), ayan)
    asc_sid  = apply_ayanamsa(ascendant_tropical_longitude(jd, latitude, longitude), ayan)

    moon_sign = sign_of(moon_sid)
    sun_sign  = sign_of(sun_sid)
    lagna     = sign_of(asc_sid)

    logger.debug("chart jd=%.6f ayanamsa=%.6f moon=%.4f sun=%.4f asc=%.4f",
                 jd, ayan, moon_sid, sun_sid, asc_sid)

    return VedicChart(
        moon_sign=moon_sign,
        sun_sign=sun_sign,
        ascendant=lagna,
        nakshatra=nakshatra_of(moon_sid),
        moon_longitude=float(moon_sid),
        sun_longitude=float(sun_sid),
        ascendant_longitude=float(asc_sid),
        ayanamsa=ayan,
        julian_day=jd,
        nakshatra_pada=nakshatra_pada(moon_sid),
        houses=whole_sign_houses(lagna),
        moon_house=house_of(moon_sign, lagna),
        sun_house=house_of(sun_sign, lagna),
    )


# ---------------------------------------------------------------------------
# Single-placement helpers
# ---------------------------------------------------------------------------

def _moon_sidereal(birth_date: DateLike, birth_time: str, ayanamsa: str):
    jd = birth_julian_day(birth_date, birth_time)
    return apply_ayanamsa(moon_tropical_longitude(jd), get_ayanamsa(jd, ayanamsa))


def compute_moon_sign(birth_date: DateLike, birth_time: str,
                      latitude: float, longitude: float,
                      ayanamsa: str = "lahiri") -> str:
    return sign_of(_moon_sidereal(birth_date, birth_time, ayanamsa))


def compute_sun_sign(birth_date: DateLike, birth_time: str,
                     latitude: float, longitude: float,
                     ayanamsa: str = "lahiri") -> str:
    jd = birth_julian_day(birth_date, birth_time)
    sun_sid = apply_ayanamsa(sun_tropical_longitude(jd), get_ayanamsa(jd, ayanamsa))
    return sign_of(sun_sid)


def compute_ascendant(birth_date: DateLike, birth_time: str,
                      latitude: float, longitude: float,
                      ayanamsa: str = "lahiri") -> str:
    jd = birth_julian_day(birth_date, birth_time)
    asc_sid = apply_ayanamsa(ascendant_tropical_longitude(jd, latitude, longitude),
                             get_ayanamsa(jd, ayanamsa))
    return sign_of(asc_sid)


def compute_nakshatra(birth_date: DateLike, birth_time: str,
                      latitude: float, longitude: float,
                      ayanamsa: str = "lahiri") -> str:
    return nakshatra_of(_moon_sidereal(birth_date, birth_time, ayanamsa))
