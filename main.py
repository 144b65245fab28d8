"""
Naksh Astrology API — FastAPI Backend
=====================================
Endpoints:
  POST /api/chart               — Moon sign, Sun sign, Lagna, Nakshatra
  POST /api/chart/{placement}   — One placement (moon-sign, sun-sign, ascendant, nakshatra)
  POST /api/transits            — Today's Sun/Moon signs against the natal Moon
  POST /api/horoscope           — Daily horoscope text
  GET  /api/health              — Health check
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

from naksh_engine import compute_chart, daily_transits, horoscope_for_profile
from naksh_engine.config import get_settings
from naksh_engine.core.ephemeris import AYANAMSA_SYSTEMS
from naksh_engine.core.zodiac import SIGNS, is_nakshatra
from naksh_engine.tools.chart import (
    parse_birth_time,
    compute_moon_sign, compute_sun_sign, compute_ascendant, compute_nakshatra,
)

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("naksh_engine.api")

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Vedic placements: Moon sign, Sun sign, Lagna, Nakshatra and daily transits",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

_AYANAMSA_PATTERN = "^(" + "|".join(AYANAMSA_SYSTEMS) + ")$"
_SIGN_PATTERN = "^(" + "|".join(SIGNS) + ")$"

PLACEMENTS = {
    "moon-sign": compute_moon_sign,
    "sun-sign": compute_sun_sign,
    "ascendant": compute_ascendant,
    "nakshatra": compute_nakshatra,
}


# ── Request Models ─────────────────────────────────────────────

class BirthData(BaseModel):
    birth_date: date
    birth_time: str   = Field(..., description="Birth time HH:MM[:SS], UTC")
    latitude:   float = Field(..., ge=-90,  le=90)
    longitude:  float = Field(..., ge=-180, le=180)
    ayanamsa:   str   = Field(settings.default_ayanamsa, pattern=_AYANAMSA_PATTERN)

    @field_validator("birth_date")
    @classmethod
    def _not_in_future(cls, value: date) -> date:
        if value > datetime.now(timezone.utc).date():
            raise ValueError("birth date cannot be in the future")
        return value

    @field_validator("birth_time")
    @classmethod
    def _parseable_time(cls, value: str) -> str:
        parse_birth_time(value)
        return value


class TransitRequest(BaseModel):
    natal_moon_sign: str = Field(..., pattern=_SIGN_PATTERN)
    when:            Optional[datetime] = Field(
                         None, description="Instant to analyse; defaults to now (UTC)")
    ayanamsa:        str = Field(settings.default_ayanamsa, pattern=_AYANAMSA_PATTERN)


class HoroscopeRequest(BaseModel):
    moon_sign:       Optional[str]   = Field(None, pattern=_SIGN_PATTERN)
    nakshatra:       Optional[str]   = None
    birth_latitude:  Optional[float] = Field(None, ge=-90,  le=90)
    birth_longitude: Optional[float] = Field(None, ge=-180, le=180)
    when:            Optional[datetime] = None
    ayanamsa:        str = Field(settings.default_ayanamsa, pattern=_AYANAMSA_PATTERN)

    @field_validator("nakshatra")
    @classmethod
    def _known_nakshatra(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_nakshatra(value):
            raise ValueError(f"unknown nakshatra: {value}")
        return value


# ── Endpoints ──────────────────────────────────────────────────

@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.version,
        "endpoints": [
            "POST /api/chart",
            "POST /api/chart/{placement}",
            "POST /api/transits",
            "POST /api/horoscope",
        ],
    }


@app.post("/api/chart")
def chart_endpoint(data: BirthData):
    logger.info("chart request date=%s time=%s", data.birth_date, data.birth_time)
    try:
        chart = compute_chart(
            birth_date=data.birth_date, birth_time=data.birth_time,
            latitude=data.latitude, longitude=data.longitude,
            ayanamsa=data.ayanamsa,
        )
    except ValueError as e:
        logger.warning("chart rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "chart": chart.to_dict()}


@app.post("/api/chart/{placement}")
def placement_endpoint(placement: str, data: BirthData):
    try:
        compute = PLACEMENTS[placement]
    except KeyError:
        raise HTTPException(status_code=404, detail=f"unknown placement: {placement}")
    try:
        value = compute(data.birth_date, data.birth_time, data.latitude, data.longitude, data.ayanamsa)
    except ValueError as e:
        logger.warning("%s rejected: %s", placement, e)
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, placement: value}


@app.post("/api/transits")
def transits_endpoint(data: TransitRequest):
    try:
        transits = daily_transits(data.when, data.natal_moon_sign, data.ayanamsa)
    except ValueError as e:
        logger.warning("transits rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "transits": transits.to_dict()}


@app.post("/api/horoscope")
def horoscope_endpoint(data: HoroscopeRequest):
    try:
        text = horoscope_for_profile(
            moon_sign=data.moon_sign,
            birth_latitude=data.birth_latitude,
            birth_longitude=data.birth_longitude,
            nakshatra=data.nakshatra,
            when=data.when,
            ayanamsa=data.ayanamsa,
        )
    except ValueError as e:
        logger.warning("horoscope rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "horoscope": text}
