"""
zodiac.py
=========
Rashi (sign) and Nakshatra classification of sidereal longitudes.
"""

import math

from .ephemeris import TropicalLongitude

SIGNS = ("Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
         "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces")

NAKSHATRAS = (
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira", "Ardra",
    "Punarvasu", "Pushya", "Ashlesha", "Magha", "Purva Phalguni", "Uttara Phalguni",
    "Hasta", "Chitra", "Swati", "Vishakha", "Anuradha", "Jyeshtha",
    "Mula", "Purva Ashadha", "Uttara Ashadha", "Shravana", "Dhanishta",
    "Shatabhisha", "Purva Bhadrapada", "Uttara Bhadrapada", "Revati",
)

SIGN_SPAN      = 30.0
NAKSHATRA_SPAN = 360.0 / 27          # 13°20'
PADA_SPAN      = NAKSHATRA_SPAN / 4  # 3°20'

_SIGN_INDEX = {name: i for i, name in enumerate(SIGNS)}
_NAKSHATRA_INDEX = {name: i for i, name in enumerate(NAKSHATRAS)}


def _bucket(lon: float, span: float, count: int) -> int:
    if isinstance(lon, TropicalLongitude):
        raise TypeError("classify sidereal longitudes; convert with to_sidereal()")
    return int(math.floor(lon / span)) % count


def sign_index_of(lon: float) -> int:
    return _bucket(lon, SIGN_SPAN, 12)


def sign_of(lon: float) -> str:
    """Sidereal longitude -> Rashi."""
    return SIGNS[sign_index_of(lon)]


def nakshatra_index_of(lon: float) -> int:
    return _bucket(lon, NAKSHATRA_SPAN, 27)


def nakshatra_of(lon: float) -> str:
    """Sidereal Moon longitude -> Nakshatra."""
    return NAKSHATRAS[nakshatra_index_of(lon)]


def nakshatra_pada(lon: float) -> int:
    """Quarter (1..4) of the nakshatra containing ``lon``."""
    return _bucket(lon, PADA_SPAN, 108) % 4 + 1


def sign_index(name: str) -> int:
    try:
        return _SIGN_INDEX[name]
    except KeyError:
        raise ValueError(f"unknown sign: {name!r}") from None


def is_nakshatra(name: str) -> bool:
    return name in _NAKSHATRA_INDEX


def degree_in_sign(lon: float) -> float:
    return lon % SIGN_SPAN


def format_dms(degrees: float) -> str:
    """Format decimal degrees as D°M'S\" string."""
    d = int(degrees)
    m_float = (degrees - d) * 60
    m = int(m_float)
    s = round((m_float - m) * 60, 1)
    return f"{d}°{m}'{s}\""
