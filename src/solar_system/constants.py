"""Fixed constants: physical units, catalogue conventions, body types, NAIF IDs.

Values follow the ssystem_*.ini catalogue format.
"""

# Distance: km per astronomical unit (catalogue radii and ell_orbit distances are km)
AU_KM = 149597870.691

# Time
J2000 = 2451545.0  # JDE of the J2000.0 epoch
SECONDS_PER_DAY = 86400.0
HOURS_PER_DAY = 24.0
DAYS_PER_JULIAN_CENTURY = 36525.0

# Gaussian gravitational constant k (rad/day); mean motion of a 1 AU orbit
GAUSS_GRAV_CONSTANT = 0.01720209895

# Sentinel for "element not given" when reading optional orbital elements
MISSING = -1e100

# Absolute magnitude value meaning "not set"
NO_MAGNITUDE = -99.0

# Apparent visual magnitude of the Sun at 1 AU
SUN_MAGNITUDE_1AU = -26.73

# Photometric slope defaults and valid ranges
HG_DEFAULT_SLOPE = 0.15  # H-G system (minor planets), valid 0..1
HG_SLOPE_RANGE = (0.0, 1.0)
GK_DEFAULT_SLOPE = 4.0  # g-k system (comets), valid 0..20
GK_SLOPE_RANGE = (0.0, 20.0)

# Default physical parameters for catalogue records
DEFAULT_ALBEDO = 0.25
DEFAULT_ROUGHNESS = 0.9
DEFAULT_COLOR = (1.0, 1.0, 1.0)
DEFAULT_ORBIT_GOOD_DAYS = 1000.0
DEFAULT_ROTATION_PERIOD_HOURS = 24.0

# Comet outgassing and dust defaults
DEFAULT_OUTGAS_INTENSITY = 0.1
DEFAULT_OUTGAS_FALLOFF = 0.1
DEFAULT_DUST_WIDTH_FACTOR = 1.5
DEFAULT_DUST_LENGTH_FACTOR = 0.4
DEFAULT_DUST_BRIGHTNESS_FACTOR = 1.5

# Parent name conventions
DEFAULT_PARENT = 'Sun'
NO_PARENT = 'none'

# Orbit function identifiers with element formats (all others are registry series)
ELL_ORBIT = 'ell_orbit'
COMET_ORBIT = 'comet_orbit'

# Body type strings
TYPE_COMET = 'comet'
MINOR_BODY_TYPES = frozenset(
    {
        'asteroid',
        'dwarf planet',
        'cubewano',
        'plutino',
        'scattered disc object',
        'Oort cloud object',
    }
)

# Pseudo-bodies dropped from the "all objects" listing
OBSERVER_PSEUDO_BODIES = ('Solar System Observer', 'Earth Observer')

# Catalogue sections whose bodies take a special global role
ROLE_SUN = 'sun'
ROLE_EARTH = 'earth'
ROLE_MOON = 'moon'
ROLE_SECTIONS = (ROLE_SUN, ROLE_EARTH, ROLE_MOON)

# Earth shadow geometry for the lunar eclipse proximity test (km)
SUN_RADIUS_KM = 696000.0
EARTH_SHADOW_PENUMBRA_KM = 702378.1
LUNAR_ECLIPSE_MARGIN_KM = 2000.0

# Body IDs (NAIF)
SUN_ID = 10
MERCURY_ID = 199
VENUS_ID = 299
EARTH_ID = 399
MOON_ID = 301
MARS_ID = 499
JUPITER_ID = 599
SATURN_ID = 699
URANUS_ID = 799
NEPTUNE_ID = 899
PLUTO_ID = 999

# Analytic-series identifier -> (target NAIF ID, center NAIF ID).
# Planets are heliocentric; satellites are relative to their planet.
SERIES_NAIF_IDS: dict[str, tuple[int, int]] = {
    'mercury_special': (MERCURY_ID, SUN_ID),
    'venus_special': (VENUS_ID, SUN_ID),
    'earth_special': (EARTH_ID, SUN_ID),
    'mars_special': (MARS_ID, SUN_ID),
    'jupiter_special': (JUPITER_ID, SUN_ID),
    'saturn_special': (SATURN_ID, SUN_ID),
    'uranus_special': (URANUS_ID, SUN_ID),
    'neptune_special': (NEPTUNE_ID, SUN_ID),
    'pluto_special': (PLUTO_ID, SUN_ID),
    'lunar_special': (MOON_ID, EARTH_ID),
    'phobos_special': (401, MARS_ID),
    'deimos_special': (402, MARS_ID),
    'io_special': (501, JUPITER_ID),
    'europa_special': (502, JUPITER_ID),
    'ganymede_special': (503, JUPITER_ID),
    'calisto_special': (504, JUPITER_ID),
    'mimas_special': (601, SATURN_ID),
    'enceladus_special': (602, SATURN_ID),
    'tethys_special': (603, SATURN_ID),
    'dione_special': (604, SATURN_ID),
    'rhea_special': (605, SATURN_ID),
    'titan_special': (606, SATURN_ID),
    'hyperion_special': (607, SATURN_ID),
    'iapetus_special': (608, SATURN_ID),
    'miranda_special': (705, URANUS_ID),
    'ariel_special': (701, URANUS_ID),
    'umbriel_special': (702, URANUS_ID),
    'titania_special': (703, URANUS_ID),
    'oberon_special': (704, URANUS_ID),
}

# Identifier of the series placing the central star at the origin
SUN_SERIES = 'sun_special'

# SPICE frame for series positions (ecliptic and equinox of J2000)
SERIES_FRAME = 'ECLIPJ2000'
