"""
demo.py
=======
Demonstration of the Naksh Engine.
Run: python -m naksh_engine.demo

Computes the placements for a sample birth and today's transits, and prints
a formatted report.
"""

from datetime import date, datetime, timezone
from typing import Optional

from . import compute_chart, daily_transits, compose_daily_horoscope


def print_section(title: str):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def format_house_table(chart) -> str:
    lines = [f"{'House':<8} {'Sign':<14} {'Occupants':<12}"]
    lines.append("─" * 36)
    for i, sign in enumerate(chart.houses):
        house = i + 1
        occupants = []
        if house == 1:
            occupants.append("As")
        if house == chart.moon_house:
            occupants.append("Mo")
        if house == chart.sun_house:
            occupants.append("Su")
        lines.append(f"H{house:<7} {sign:<14} {' '.join(occupants)}")
    return "\n".join(lines)


def run_demo(today: Optional[datetime] = None):
    print("=" * 60)
    print("   NAKSH ENGINE — SAMPLE BIRTH CHART")
    print("=" * 60)

    # ── Sample birth data ──
    params = {
        "birth_date": date(1988, 7, 18),
        "birth_time": "13:16:00",      # UTC (18:46 IST)
        "latitude": 28.6139,           # Delhi
        "longitude": 77.2090,
    }

    print(f"\n  Birth Date  : {params['birth_date'].isoformat()}")
    print(f"  Birth Time  : {params['birth_time']} UTC")
    print(f"  Location    : Delhi, India ({params['latitude']}°N, {params['longitude']}°E)")

    chart = compute_chart(**params)
    wire = chart.to_dict()

    print_section("PLACEMENTS")
    print(f"  Lagna       : {chart.ascendant} {wire['degrees']['ascendant']}")
    print(f"  Moon (Rasi) : {chart.moon_sign} {wire['degrees']['moon']}")
    print(f"  Sun         : {chart.sun_sign} {wire['degrees']['sun']}")
    print(f"  Nakshatra   : {chart.nakshatra} (Pada {chart.nakshatra_pada})")

    print_section("WHOLE SIGN HOUSES")
    print(format_house_table(chart))

    print_section("TECHNICAL METADATA")
    print(f"  Julian Day    : {chart.julian_day:.6f}")
    print(f"  Ayanamsa      : {chart.ayanamsa:.6f}° (Lahiri)")

    today = today or datetime.now(timezone.utc)
    transits = daily_transits(today, chart.moon_sign)

    print_section(f"TRANSITS {today.date().isoformat()}")
    for t in (transits.sun, transits.moon):
        print(f"  {t.planet:<6}: {t.sign:<14} {t.aspect_degrees:>3}° from natal Moon")

    print_section("DAILY HOROSCOPE")
    print(compose_daily_horoscope(chart.moon_sign, chart.nakshatra, today))
    print()


if __name__ == "__main__":
    run_demo()
