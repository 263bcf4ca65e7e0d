"""Fixed constants: epochs, unit conversions, and physical reference values.

Values follow Meeus, "Astronomical Algorithms" (2nd ed.).
"""

import math

# Epochs and time scales
J2000 = 2451545.0  # Julian Ephemeris Day of J2000.0
DAYS_PER_CENTURY = 36525.0
DAYS_PER_MILLENNIUM = 365250.0
SECONDS_PER_DAY = 86400.0
JD_OF_DAY_ZERO = 2451544.5  # rms-julian day 0 (2000-01-01 00:00 UTC)

# Angle conversion
TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi
DEG2RAD = math.pi / 180.0
RAD2DEG = 180.0 / math.pi
ARCSEC2RAD = DEG2RAD / 3600.0
HOURS2RAD = math.pi / 12.0
DEGREES_PER_HOUR_RA = 15.0

# Distances
AU_KM = 149597870.691
EARTH_POLAR_TO_EQUATORIAL = 6356.755 / 6378.14  # b/a of the reference ellipsoid

# Light time per AU, in days and in Julian millennia
LIGHT_DAYS_PER_AU = 0.0057755183
LIGHT_MILLENNIA_PER_AU = 1.5812507324e-8

# Equatorial horizontal parallax of the Sun at 1 AU
SOLAR_PARALLAX = 8.794 * ARCSEC2RAD

# Constant of aberration
ABERRATION_CONSTANT = 20.49522 * ARCSEC2RAD

# Sine/cosine of the J2000 obliquity used for the Pluto rotation
SIN_OBLIQUITY_J2000 = 0.397777156
COS_OBLIQUITY_J2000 = 0.917482062

# Canonical units for orbit determination (mu = 1)
CANONICAL_TIME_UNIT_DAYS = 58.132821
CANONICAL_MU = 1.0

# Precession of the equinox, radians per day (360 degrees per 26000 years)
PRECESSION_RATE = TWO_PI / (26000.0 * 365.25)
