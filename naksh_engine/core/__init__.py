# Naksh Engine - Core modules
from .ephemeris import (
    CivilDateTime, TropicalLongitude, SiderealLongitude,
    civil_to_jd, sun_tropical_longitude, moon_tropical_longitude,
    lahiri_ayanamsa, get_ayanamsa, to_sidereal,
)
from .houses import ascendant_tropical_longitude, local_sidereal_time, whole_sign_houses
from .zodiac import SIGNS, NAKSHATRAS, sign_of, nakshatra_of
from .predictions import DailyTransits, daily_transits, compose_daily_horoscope

__all__ = [
    "CivilDateTime", "TropicalLongitude", "SiderealLongitude",
    "civil_to_jd", "sun_tropical_longitude", "moon_tropical_longitude",
    "lahiri_ayanamsa", "get_ayanamsa", "to_sidereal",
    "ascendant_tropical_longitude", "local_sidereal_time", "whole_sign_houses",
    "SIGNS", "NAKSHATRAS", "sign_of", "nakshatra_of",
    "DailyTransits", "daily_transits", "compose_daily_horoscope",
]
