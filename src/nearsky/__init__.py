"""Near-sky ephemeris engine for the Sun, Moon, planets, and Pluto.

This package computes geocentric or topocentric positions of solar system
bodies from truncated periodic-series theories:
- Planets: VSOP87-style series with light-time, aberration, FK5, and nutation
- Pluto: perturbation series keyed on Jupiter, Saturn, and Pluto longitudes
- Moon: truncated lunar theory with eccentricity correction
- Orbit views: Keplerian elements recovered from two position samples

Coefficient tables ship as JSON data under nearsky/data; numpy holds them in
memory and rms-julian parses calendar dates.
"""

__all__: list[str] = []
