"""
predictions.py  --  Daily transit horoscope
============================================
Compares today's sidereal Sun and Moon signs with the natal Moon sign and
picks interpretive text from fixed tables.

The "aspect" is a sign distance: (transit sign - natal sign) * 30°, so it is
always an exact multiple of 30 and the text buckets below compare by
equality.

Source: David Frawley, "Astrology of the Seers" (Gochara from the Moon)
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from types import MappingProxyType
from typing import Optional, Union

from .ephemeris import (
    CivilDateTime, civil_to_jd, get_ayanamsa, apply_ayanamsa,
    sun_tropical_longitude, moon_tropical_longitude,
)
from .zodiac import sign_of, sign_index

logger = logging.getLogger(__name__)

MOON_SIGN_GUIDANCE = MappingProxyType({
    "Aries":
        "Your fiery nature seeks expression today. Channel your dynamic energy into purposeful "
        "action. The warrior spirit within you is awakened - use it wisely for constructive endeavors.",
    "Taurus":
        "Stability and comfort call to you. Ground yourself in the material world while remaining "
        "open to spiritual growth. Your natural patience is a gift - trust in divine timing.",
    "Gemini":
        "Communication flows through you like a river. Share your ideas and connect with others. "
        "Your curious mind seeks knowledge - follow the threads of wisdom that appear.",
    "Cancer":
        "Emotional depth is your strength. Honor your feelings while maintaining boundaries. The "
        "nurturing energy within you can heal both yourself and others today.",
    "Leo":
        "Your inner light shines brightly. Express your authentic self with confidence. Leadership "
        "comes naturally - inspire others through your example and generosity of spirit.",
    "Virgo":
        "Attention to detail serves you well. Organize and refine your environment and thoughts. "
        "Service to others brings fulfillment, but remember to serve yourself with equal devotion.",
    "Libra":
        "Balance and harmony guide your path. Seek equilibrium in all relationships and decisions. "
        "Your diplomatic nature can bridge divides - use this gift with awareness.",
    "Scorpio":
        "Transformation stirs within your depths. Embrace change and release what no longer "
        "serves. Your intensity is power - direct it toward regeneration and truth.",
    "Sagittarius":
        "Expansion and wisdom call to you. Explore new horizons, whether physical or philosophical. "
        "Your optimistic spirit uplifts others - share your vision generously.",
    "Capricorn":
        "Discipline and structure support your goals. Build steadily toward your aspirations. Your "
        "practical wisdom combined with spiritual awareness creates lasting achievement.",
    "Aquarius":
        "Innovation and humanitarian ideals inspire you. Think beyond convention and embrace your "
        "uniqueness. Your vision for collective progress can manifest through conscious action.",
    "Pisces":
        "Spiritual sensitivity heightens your awareness. Trust your intuition and creative "
        "imagination. Compassion flows naturally from you - extend it to yourself as well as others.",
})

NAKSHATRA_WISDOM = MappingProxyType({
    "Ashwini": "Swift action and healing energy surround you. Trust your pioneering spirit.",
    "Bharani": "Creative power and transformation are your gifts. Honor life cycles.",
    "Krittika": "Sharp discernment cuts through illusion. Use your clarity wisely.",
    "Rohini": "Beauty and growth flourish through you. Nurture what you wish to see bloom.",
    "Mrigashira": "Curiosity leads to discovery. Follow your quest for knowledge.",
    "Ardra": "Storms bring renewal. Embrace change as a purifying force.",
    "Punarvasu": "Return to your center. Renewal and restoration are available.",
    "Pushya": "Nourishment and support flow naturally. Share your abundance.",
    "Ashlesha": "Deep wisdom lies in the shadows. Embrace your mystical nature.",
    "Magha": "Ancestral power supports you. Honor your lineage and authority.",
    "Purva Phalguni": "Joy and creativity are your birthright. Celebrate life.",
    "Uttara Phalguni": "Generosity and partnership bring fulfillment. Give and receive freely.",
    "Hasta": "Skillful hands create magic. Your craftsmanship manifests intentions.",
    "Chitra": "Artistic vision illuminates your path. Create beauty consciously.",
    "Swati": "Independence and flexibility serve you. Move with the wind.",
    "Vishakha": "Determined focus achieves goals. Channel your intensity purposefully.",
    "Anuradha": "Devotion and friendship deepen bonds. Cultivate meaningful connections.",
    "Jyeshtha": "Leadership and protection are your domain. Use power responsibly.",
    "Mula": "Root out what no longer serves. Transformation begins at the foundation.",
    "Purva Ashadha": "Invincible spirit carries you forward. Trust your inner strength.",
    "Uttara Ashadha": "Victory comes through righteousness. Stand in your truth.",
    "Shravana": "Listen deeply to wisdom. Knowledge comes through receptivity.",
    "Dhanishta": "Rhythm and prosperity align. Move in harmony with cosmic timing.",
    "Shatabhisha": "Healing and mystery intertwine. Explore hidden dimensions.",
    "Purva Bhadrapada": "Spiritual fire purifies. Embrace transformation courageously.",
    "Uttara Bhadrapada": "Deep wisdom and compassion unite. Serve the greater good.",
    "Revati": "Journey's end brings new beginnings. Trust in divine guidance.",
})
DEFAULT_NAKSHATRA_WISDOM = "Your birth star guides you with unique wisdom."

GENERAL_GUIDANCE = (
    "Remember: The stars incline but do not compel. Your free will shapes your destiny.",
    "Practice: Take time for meditation or quiet reflection to align with cosmic rhythms.",
    "Affirmation: I am in harmony with the universe and trust in divine timing.",
)

# Aspect buckets keyed by exact sign distance in degrees
MOON_ASPECT_TEXT = MappingProxyType({
    0: "The Moon returns to your natal position, bringing emotional clarity and a fresh start.",
    120: "The Moon forms a harmonious trine, supporting emotional flow and positive connections.",
    240: "The Moon forms a harmonious trine, supporting emotional flow and positive connections.",
    180: "The Moon opposes your natal position, inviting balance between inner needs and outer demands.",
    90: "The Moon creates dynamic tension, catalyzing growth through emotional challenges.",
    270: "The Moon creates dynamic tension, catalyzing growth through emotional challenges.",
})
SUN_ASPECT_TEXT = MappingProxyType({
    0: "The Sun illuminates your emotional nature, bringing vitality and self-awareness.",
    120: "The Sun supports your emotional well-being with harmonious, creative energy.",
    240: "The Sun supports your emotional well-being with harmonious, creative energy.",
})
MOON_IN_NATAL_SIGN_TEXT = "With the Moon in your natal sign, your intuition is particularly strong today."

FALLBACK_HOROSCOPE = """Welcome to Your Daily Guidance

To receive personalized astrological insights based on "Astrology of the Seers" principles, please complete your birth profile with your birth date, time, and location.

General Wisdom for Today:
The cosmos invites you to align with your highest purpose. Take time to connect with your inner wisdom through meditation or quiet reflection. Trust that the universe supports your growth and evolution.

Remember: You are a unique expression of cosmic consciousness. Your journey is sacred, and each day offers opportunities for awakening and transformation.

Complete your profile to unlock personalized daily horoscopes tailored to your birth chart."""


@dataclass(frozen=True)
class Transit:
    planet:         str
    sign:           str
    aspect_degrees: int


@dataclass(frozen=True)
class DailyTransits:
    sun:  Transit
    moon: Transit

    def to_dict(self) -> dict:
        return {
            body.planet.lower(): {"sign": body.sign, "aspectDegrees": body.aspect_degrees}
            for body in (self.sun, self.moon)
        }


def _instant(when: Optional[Union[date, datetime]]) -> datetime:
    if when is None:
        return datetime.now(timezone.utc)
    if isinstance(when, datetime):
        return when
    return datetime(when.year, when.month, when.day)


def sign_distance(transit_sign: str, natal_sign: str) -> int:
    """Degrees from the natal sign to the transit sign, whole signs only."""
    return ((sign_index(transit_sign) - sign_index(natal_sign) + 12) % 12) * 30


def daily_transits(when: Optional[Union[date, datetime]],
                   natal_moon_sign: str,
                   ayanamsa: str = "lahiri") -> DailyTransits:
    """
    Sidereal Sun and Moon signs at ``when`` and their distance from the natal
    Moon sign.  Geocentric, so no location is needed.
    """
    jd = civil_to_jd(CivilDateTime.from_datetime(_instant(when)))
    ayan = get_ayanamsa(jd, ayanamsa)

    sun_sign  = sign_of(apply_ayanamsa(sun_tropical_longitude(jd), ayan))
    moon_sign = sign_of(apply_ayanamsa(moon_tropical_longitude(jd), ayan))

    transits = DailyTransits(
        sun=Transit("Sun", sun_sign, sign_distance(sun_sign, natal_moon_sign)),
        moon=Transit("Moon", moon_sign, sign_distance(moon_sign, natal_moon_sign)),
    )
    logger.debug("transits jd=%.5f natal=%s sun=%s moon=%s",
                 jd, natal_moon_sign, transits.sun, transits.moon)
    return transits


def moon_sign_guidance(moon_sign: str) -> str:
    return MOON_SIGN_GUIDANCE.get(moon_sign, MOON_SIGN_GUIDANCE["Aries"])


def nakshatra_wisdom(nakshatra: str) -> str:
    return NAKSHATRA_WISDOM.get(nakshatra, DEFAULT_NAKSHATRA_WISDOM)


def transit_insights(transits: DailyTransits, natal_moon_sign: str) -> str:
    insights = []

    moon_text = MOON_ASPECT_TEXT.get(transits.moon.aspect_degrees)
    if moon_text:
        insights.append(moon_text)

    sun_text = SUN_ASPECT_TEXT.get(transits.sun.aspect_degrees)
    if sun_text:
        insights.append(sun_text)

    if transits.moon.sign == natal_moon_sign:
        insights.append(MOON_IN_NATAL_SIGN_TEXT)

    return " ".join(insights)


def fallback_horoscope() -> str:
    return FALLBACK_HOROSCOPE


def compose_daily_horoscope(natal_moon_sign: Optional[str],
                            nakshatra: Optional[str] = None,
                            when: Optional[Union[date, datetime]] = None,
                            ayanamsa: str = "lahiri") -> str:
    """
    Daily horoscope text for a natal Moon sign.

    A profile without a Moon sign gets the generic fallback text instead of a
    chart computed from placeholder data.
    """
    if not natal_moon_sign:
        return fallback_horoscope()

    instant = _instant(when)
    transits = daily_transits(instant, natal_moon_sign, ayanamsa)

    horoscope = f"{instant.strftime('%A')}'s Guidance for {natal_moon_sign} Moon\n\n"
    horoscope += f"{moon_sign_guidance(natal_moon_sign)}\n\n"

    insights = transit_insights(transits, natal_moon_sign)
    if insights:
        horoscope += f"Today's Cosmic Influences:\n{insights}\n\n"

    if nakshatra:
        horoscope += f"Nakshatra Wisdom ({nakshatra}):\n{nakshatra_wisdom(nakshatra)}\n\n"

    horoscope += "\n".join(GENERAL_GUIDANCE)
    return horoscope


def profile_is_complete(moon_sign: Optional[str],
                        birth_latitude: Optional[float],
                        birth_longitude: Optional[float]) -> bool:
    return bool(moon_sign) and birth_latitude is not None and birth_longitude is not None


def horoscope_for_profile(moon_sign: Optional[str],
                          birth_latitude: Optional[float],
                          birth_longitude: Optional[float],
                          nakshatra: Optional[str] = None,
                          when: Optional[Union[date, datetime]] = None,
                          ayanamsa: str = "lahiri") -> str:
    """
    Daily horoscope for a stored profile.

    The profile needs its Moon sign and both birth coordinates; anything less
    gets the fallback text. 0° is a valid coordinate, only ``None`` is missing.
    """
    if not profile_is_complete(moon_sign, birth_latitude, birth_longitude):
        logger.info("incomplete profile, returning fallback horoscope")
        return fallback_horoscope()
    return compose_daily_horoscope(moon_sign, nakshatra, when, ayanamsa)
