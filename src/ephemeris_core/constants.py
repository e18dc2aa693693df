"""Fixed constants: epochs, time and angle units, astronomical constants.

Values follow Meeus, *Astronomical Algorithms* (2nd ed.) and the IAU 1976
system used by VSOP87 and the IAU 1980 nutation theory.
"""

import math

# Epochs (Julian Days)
J2000 = 2451545.0  # 2000 January 1.5 TT
JD_MIN = 0.0  # -4712 January 1.5 (Julian calendar), -4713 November 24.5 (Gregorian)
MIN_YEAR = -4713

# Time: seconds per unit and days per period
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
DAYS_PER_JULIAN_YEAR = 365.25
DAYS_PER_JULIAN_CENTURY = 36525.0
DAYS_PER_JULIAN_MILLENNIUM = 365250.0

# Angle: degrees per circle and sexagesimal (DMS/arcmin/arcsec)
TWOPI = 2.0 * math.pi
DEGREES_PER_CIRCLE = 360.0
ARCMIN_PER_DEGREE = 60.0
ARCSEC_PER_DEGREE = 3600.0
DEGREES_PER_HOUR_RA = 15.0  # right ascension: 360° / 24 h
ARCSEC_TO_RAD = math.pi / (180.0 * 3600.0)

# Astronomical constants
GAUSSIAN_GRAVITATIONAL_CONSTANT = 0.01720209895  # k, AU^1.5 / day
LIGHT_TIME_DAYS_PER_AU = 0.0057755183  # light travel time for 1 AU, days
ABERRATION_CONSTANT_ARCSEC = 20.49552  # kappa
SUN_ABERRATION_ARCSEC = 20.4898  # for geometric -> apparent Sun longitude
J2000_OBLIQUITY_DEG = 23.4392911  # mean obliquity of the ecliptic at J2000 (IAU 1976)
AU_KM = 149597870.0  # astronomical unit, km

# Earth figure (IAU 1976) and the Moon
EARTH_EQUATORIAL_RADIUS_KM = 6378.14
EARTH_POLAR_AXIS_RATIO = 0.99664719  # b / a
MOON_MEAN_DISTANCE_KM = 385000.56

# Galactic frame (IAU 1958, referred to J2000 equatorial)
GALACTIC_POLE_RA_DEG = 192.85948
GALACTIC_POLE_DEC_DEG = 27.12825
GALACTIC_NCP_LONGITUDE_DEG = 122.93192  # galactic longitude of the north celestial pole

# Kepler solver defaults (configuration may override)
DEFAULT_KEPLER_TOLERANCE = 1e-12  # radians
DEFAULT_KEPLER_MAX_ITER = 100
DEFAULT_NEAR_PARABOLIC_BAND = 0.02  # |e - 1| below this uses the near-parabolic solver
NEAR_PARABOLIC_DIVERGENCE_LIMIT = 1.0e4  # series term size treated as divergence
DEFAULT_LIGHT_TIME_ITERATIONS = 2

# Pluto: mean Keplerian elements at J2000, ecliptic and equinox J2000
# (Standish, JPL "Keplerian Elements for Approximate Positions", 1800-2050 fit).
PLUTO_SEMIMAJOR_AXIS_AU = 39.48211675
PLUTO_ECCENTRICITY = 0.24882730
PLUTO_INCLINATION_DEG = 17.14001206
PLUTO_MEAN_LONGITUDE_DEG = 238.92903833
PLUTO_PERIHELION_LONGITUDE_DEG = 224.06891629
PLUTO_ASCENDING_NODE_DEG = 110.30393684
