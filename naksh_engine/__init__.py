"""
Naksh Engine
============
Vedic (sidereal) Moon sign, Sun sign, Lagna and Nakshatra calculator.

Quick start:
    from datetime import date
    from naksh_engine import compute_chart

    chart = compute_chart(
        birth_date=date(1988, 7, 18),
        birth_time="13:16:00",      # UTC
        latitude=28.6139,
        longitude=77.2090,
    )
"""

from .tools.chart import (
    VedicChart, compute_chart,
    compute_moon_sign, compute_sun_sign, compute_ascendant, compute_nakshatra,
)
from .core.predictions import (
    DailyTransits, daily_transits, compose_daily_horoscope, horoscope_for_profile,
)

__version__ = "1.0.0"
__all__ = [
    "VedicChart", "compute_chart",
    "compute_moon_sign", "compute_sun_sign", "compute_ascendant", "compute_nakshatra",
    "DailyTransits", "daily_transits", "compose_daily_horoscope", "horoscope_for_profile",
]
