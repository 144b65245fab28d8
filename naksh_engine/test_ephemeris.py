"""
test_ephemeris.py
=================
Astronomy layer: Julian Day, Sun, Moon, sidereal time, Ascendant, ayanamsa
and the sign / nakshatra classifier.

Reference values are the worked examples in Meeus, "Astronomical Algorithms".

Run with: python -m pytest naksh_engine -v
"""

import pytest

from naksh_engine.core.ephemeris import (
    J2000, CivilDateTime, TropicalLongitude, SiderealLongitude,
    civil_to_jd, julian_centuries, normalize,
    sun_tropical_longitude, moon_tropical_longitude,
    lahiri_ayanamsa, get_ayanamsa, to_sidereal, MOON_LONGITUDE_TERMS,
)
from naksh_engine.core.houses import (
    greenwich_mean_sidereal_time, local_sidereal_time, mean_obliquity,
    compute_ascendant, ascendant_tropical_longitude, whole_sign_houses, house_of,
)
from naksh_engine.core.zodiac import (
    SIGNS, NAKSHATRAS, NAKSHATRA_SPAN,
    sign_of, nakshatra_of, nakshatra_pada, sign_index, degree_in_sign, format_dms,
)


# ---------------------------------------------------------------------------
# Tolerances
# ---------------------------------------------------------------------------
JD_TOLERANCE        = 1e-6
SUN_TOLERANCE_DEG   = 0.001     # same series as Meeus Ex. 25.a
MOON_TOLERANCE_DEG  = 0.05      # truncated Table 47.A vs. full series
GMST_TOLERANCE_DEG  = 1e-4


def _angle_diff(a: float, b: float) -> float:
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


# A century-wide grid of instants, shared by the range checks
JD_GRID = [2415020.5 + k * 731.37 for k in range(100)]


# ---------------------------------------------------------------------------
# Julian Day
# ---------------------------------------------------------------------------

JD_VECTORS = [
    ("J2000.0 epoch, noon UT",        CivilDateTime(2000, 1, 1, 12, 0, 0),   2451545.0),
    ("Meeus Ex. 7.a, Sputnik launch", CivilDateTime(1957, 10, 4, 19, 26, 24), 2436116.31),
    ("Meeus Ex. 25.a, midnight",      CivilDateTime(1992, 10, 13),           2448908.5),
    ("Meeus Ex. 47.a, midnight",      CivilDateTime(1992, 4, 12),            2448724.5),
    ("Leap day",                      CivilDateTime(2000, 2, 29, 12),        2451604.0),
]


@pytest.mark.parametrize("when, expected",
                         [(v[1], v[2]) for v in JD_VECTORS],
                         ids=[v[0] for v in JD_VECTORS])
def test_civil_to_jd(when, expected):
    assert civil_to_jd(when) == pytest.approx(expected, abs=JD_TOLERANCE)


def test_j2000_is_exact():
    assert civil_to_jd(CivilDateTime(2000, 1, 1, 12, 0, 0)) == 2451545.0
    assert julian_centuries(J2000) == 0.0


def test_jd_is_monotonic_across_year_boundary():
    before = civil_to_jd(CivilDateTime(1999, 12, 31, 23, 59, 59))
    after  = civil_to_jd(CivilDateTime(2000, 1, 1, 0, 0, 0))
    assert after > before
    assert after - before == pytest.approx(1 / 86400.0, abs=1e-9)


def test_civil_datetime_from_aware_datetime():
    from datetime import datetime, timedelta, timezone
    ist = timezone(timedelta(hours=5, minutes=30))
    aware = datetime(2000, 1, 1, 17, 30, tzinfo=ist)
    assert CivilDateTime.from_datetime(aware) == CivilDateTime(2000, 1, 1, 12, 0, 0)


# ---------------------------------------------------------------------------
# Sun and Moon
# ---------------------------------------------------------------------------

def test_sun_longitude_meeus_example():
    # Meeus Ex. 25.a: true longitude 199.90988°
    sun = sun_tropical_longitude(2448908.5)
    assert isinstance(sun, TropicalLongitude)
    assert float(sun) == pytest.approx(199.90988, abs=SUN_TOLERANCE_DEG)


def test_moon_longitude_meeus_example():
    # Meeus Ex. 47.a: λ = 133.162655°
    moon = moon_tropical_longitude(2448724.5)
    assert isinstance(moon, TropicalLongitude)
    assert _angle_diff(moon, 133.162655) < MOON_TOLERANCE_DEG


def test_moon_table_is_ordered_by_amplitude():
    amplitudes = [abs(row[4]) for row in MOON_LONGITUDE_TERMS]
    assert amplitudes == sorted(amplitudes, reverse=True)
    assert MOON_LONGITUDE_TERMS[0] == (0, 0, 1, 0, 6288774)


def test_moon_moves_about_13_degrees_per_day():
    for jd in JD_GRID[::10]:
        step = (moon_tropical_longitude(jd + 1) - moon_tropical_longitude(jd)) % 360.0
        assert 11.0 < step < 15.5


@pytest.mark.parametrize("jd", JD_GRID)
def test_longitudes_are_normalised(jd):
    for value in (
        sun_tropical_longitude(jd),
        moon_tropical_longitude(jd),
        ascendant_tropical_longitude(jd, 28.6139, 77.209),
        ascendant_tropical_longitude(jd, -33.8688, 151.2093),
        to_sidereal(moon_tropical_longitude(jd), jd),
    ):
        assert 0.0 <= value < 360.0


def test_normalize_never_returns_360():
    assert normalize(-1e-17) == 0.0
    assert 0.0 <= TropicalLongitude(-1e-17) < 360.0
    assert normalize(720.5) == pytest.approx(0.5)
    assert normalize(-90.0) == 270.0


# ---------------------------------------------------------------------------
# Sidereal time and Ascendant
# ---------------------------------------------------------------------------

def test_gmst_meeus_examples():
    # Ex. 12.a: 1987 April 10, 0h UT -> 13h10m46.3668s
    assert greenwich_mean_sidereal_time(2446895.5) == pytest.approx(197.693195, abs=GMST_TOLERANCE_DEG)
    # Ex. 12.b: 1987 April 10, 19h21m UT -> 128.7378734°
    assert greenwich_mean_sidereal_time(2446896.30625) == pytest.approx(128.7378734, abs=GMST_TOLERANCE_DEG)


def test_local_sidereal_time_adds_east_longitude():
    gmst = greenwich_mean_sidereal_time(J2000)
    assert local_sidereal_time(J2000, 77.209) == pytest.approx((gmst + 77.209) % 360.0)
    assert local_sidereal_time(J2000, -120.0) == pytest.approx((gmst - 120.0) % 360.0)


def test_mean_obliquity_at_j2000():
    assert mean_obliquity(J2000) == pytest.approx(23.439291)


def test_ascendant_on_equator_without_obliquity():
    # Ecliptic = equator: the rising point is 90° ahead of the meridian
    assert compute_ascendant(0.0, 0.0, 0.0) == pytest.approx(90.0)
    assert compute_ascendant(90.0, 0.0, 0.0) == pytest.approx(180.0)
    assert _angle_diff(compute_ascendant(270.0, 0.0, 0.0), 0.0) < 1e-9


def test_ascendant_with_aries_on_meridian_at_51_north():
    # atan2(1, tan 51.5° sin 23.44°)
    asc = compute_ascendant(0.0, 51.5, 23.44)
    assert asc == pytest.approx(63.43, abs=0.05)


def test_ascendant_delhi_at_j2000():
    asc = ascendant_tropical_longitude(J2000, 28.6139, 77.209)
    assert asc == pytest.approx(75.72, abs=0.01)


@pytest.mark.parametrize("latitude", [10.0, 28.6139, 51.5, 66.0])
def test_ascendant_latitude_term(latitude):
    # LST 0: denominator is +tan φ sin ε, so north lands below 90° and south mirrors it
    north = compute_ascendant(0.0, latitude, 23.44)
    south = compute_ascendant(0.0, -latitude, 23.44)
    assert north < 90.0 < south
    assert north + south == pytest.approx(180.0)


def test_ascendant_at_pole_does_not_raise():
    asc = ascendant_tropical_longitude(J2000, 90.0, 0.0)
    assert 0.0 <= asc < 360.0


# ---------------------------------------------------------------------------
# Ayanamsa
# ---------------------------------------------------------------------------

def test_lahiri_at_j2000():
    assert lahiri_ayanamsa(J2000) == pytest.approx(23.85, abs=0.01)


def test_lahiri_is_monotonic_in_modern_era():
    values = [lahiri_ayanamsa(jd) for jd in JD_GRID]
    assert all(b > a for a, b in zip(values, values[1:]))


def test_ayanamsa_systems():
    assert get_ayanamsa(J2000) == lahiri_ayanamsa(J2000)
    assert get_ayanamsa(J2000, "LAHIRI") == lahiri_ayanamsa(J2000)
    assert get_ayanamsa(J2000, "kp") == pytest.approx(23.86)
    for system in ("raman", "kp", "fagan"):
        assert 20.0 <= get_ayanamsa(J2000, system) <= 26.0
    with pytest.raises(ValueError):
        get_ayanamsa(J2000, "krishnamurti-2")


@pytest.mark.parametrize("tropical", [0.0, 10.0, 23.85, 123.456, 250.0, 359.999])
def test_sidereal_round_trip(tropical):
    for jd in JD_GRID[::25]:
        sidereal = to_sidereal(TropicalLongitude(tropical), jd)
        assert isinstance(sidereal, SiderealLongitude)
        assert _angle_diff(sidereal + lahiri_ayanamsa(jd), tropical) < 1e-9


def test_flavours_cannot_be_mixed():
    with pytest.raises(TypeError):
        to_sidereal(100.0, J2000)
    with pytest.raises(TypeError):
        SiderealLongitude(TropicalLongitude(100.0))
    with pytest.raises(TypeError):
        sign_of(TropicalLongitude(100.0))


def test_sidereal_sun_sign_lags_tropical():
    for jd in JD_GRID[::5]:
        tropical = sun_tropical_longitude(jd)
        sidereal = to_sidereal(tropical, jd)
        tropical_idx = int(tropical // 30)
        assert (tropical_idx - sign_index(sign_of(sidereal))) % 12 in (0, 1)
        assert _angle_diff(tropical - sidereal, lahiri_ayanamsa(jd)) < 1e-9


# ---------------------------------------------------------------------------
# Sign / Nakshatra classifier
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("n", range(12))
def test_sign_boundaries_resolve_upwards(n):
    assert sign_of(30.0 * n) == SIGNS[n]
    assert sign_of(30.0 * n + 29.999) == SIGNS[n]


@pytest.mark.parametrize("lon", [0.0, 15.5, 123.456, 299.0, 359.9])
@pytest.mark.parametrize("k", [-2, -1, 1, 2])
def test_sign_is_periodic(lon, k):
    assert sign_of(lon + 360.0 * k) == sign_of(lon)
    assert nakshatra_of(lon + 360.0 * k) == nakshatra_of(lon)


@pytest.mark.parametrize("k", range(27))
def test_nakshatra_boundaries_resolve_upwards(k):
    assert nakshatra_of(k * NAKSHATRA_SPAN) == NAKSHATRAS[k]
    assert nakshatra_of(k * NAKSHATRA_SPAN + NAKSHATRA_SPAN / 2) == NAKSHATRAS[k]


@pytest.mark.parametrize("k", range(27))
def test_just_below_boundary_stays_in_lower_bucket(k):
    below = k * NAKSHATRA_SPAN - 1e-8
    assert nakshatra_of(below) == NAKSHATRAS[(k - 1) % 27]
    if k < 12:
        assert sign_of(30.0 * k - 1e-8) == SIGNS[(k - 1) % 12]
    assert sign_of(29.99999999) == "Aries"


def test_nakshatra_pada():
    assert nakshatra_pada(0.0) == 1
    assert nakshatra_pada(3.5) == 2
    assert nakshatra_pada(13.0) == 4
    assert nakshatra_pada(13.4) == 1
    assert nakshatra_pada(359.9) == 4


def test_sign_helpers():
    assert sign_index("Aries") == 0
    assert sign_index("Pisces") == 11
    with pytest.raises(ValueError):
        sign_index("Ophiuchus")
    assert degree_in_sign(95.5) == pytest.approx(5.5)
    assert format_dms(24.5) == "24°30'0.0\""


def test_whole_sign_houses():
    houses = whole_sign_houses("Sagittarius")
    assert houses[0] == "Sagittarius"
    assert houses[1] == "Capricorn"
    assert houses[11] == "Scorpio"
    assert len(set(houses)) == 12
    assert house_of("Leo", "Sagittarius") == 9
    assert house_of("Sagittarius", "Sagittarius") == 1
    assert house_of("Scorpio", "Sagittarius") == 12


def test_classifier_accepts_any_real():
    assert nakshatra_pada(-0.0) == 1
    assert sign_of(-0.1) == "Pisces"
    assert nakshatra_of(-0.1) == "Revati"
