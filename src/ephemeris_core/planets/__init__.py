"""Body-specific data (VSOP87-D series, Pluto mean elements, lunar terms)."""

import logging
from pathlib import Path

from ephemeris_core import config
from ephemeris_core.errors import InvalidInputError
from ephemeris_core.planets.base import PlanetSeries
from ephemeris_core.planets.earth import EARTH_SERIES
from ephemeris_core.planets.jupiter import JUPITER_SERIES
from ephemeris_core.planets.mars import MARS_SERIES
from ephemeris_core.planets.mercury import MERCURY_SERIES
from ephemeris_core.planets.neptune import NEPTUNE_SERIES
from ephemeris_core.planets.pluto import PLUTO_ELEMENTS
from ephemeris_core.planets.saturn import SATURN_SERIES
from ephemeris_core.planets.uranus import URANUS_SERIES
from ephemeris_core.planets.venus import VENUS_SERIES
from ephemeris_core.planets.vsop87_file import VSOP87D_FILE_NAMES, read_vsop87_file

logger = logging.getLogger(__name__)

_PLANET_SERIES: dict[int, PlanetSeries] = {
    1: MERCURY_SERIES,
    2: VENUS_SERIES,
    3: EARTH_SERIES,
    4: MARS_SERIES,
    5: JUPITER_SERIES,
    6: SATURN_SERIES,
    7: URANUS_SERIES,
    8: NEPTUNE_SERIES,
}


_FILE_SERIES: dict[Path, PlanetSeries] = {}


def get_planet_series(planet_num: int) -> PlanetSeries:
    """Return the VSOP87-D series for a planet.

    When EPHEMERIS_VSOP87_PATH names a directory holding the planet's complete
    VSOP87D.* file, that file is read (once per path) and used; otherwise the
    bundled abridged series is returned.

    Parameters:
        planet_num: Planet number (1-8, Mercury through Neptune).

    Returns:
        The planet's PlanetSeries.

    Raises:
        InvalidInputError: No series exists for planet_num (Pluto included), or
            the configured file is malformed.
    """
    series = _PLANET_SERIES.get(planet_num)
    if series is None:
        logger.error('No VSOP87 series for planet number %r', planet_num)
        raise InvalidInputError(f'No VSOP87 series for planet number {planet_num!r}')
    data_dir = config.get_vsop87_path()
    if data_dir is None:
        return series
    path = Path(data_dir) / VSOP87D_FILE_NAMES[planet_num]
    if not path.exists():
        logger.warning('%s not found; using the abridged %s series', path, series.planet_name)
        return series
    if path not in _FILE_SERIES:
        _FILE_SERIES[path] = read_vsop87_file(path, planet_num)
    return _FILE_SERIES[path]


__all__ = [
    'EARTH_SERIES',
    'JUPITER_SERIES',
    'MARS_SERIES',
    'MERCURY_SERIES',
    'NEPTUNE_SERIES',
    'PLUTO_ELEMENTS',
    'SATURN_SERIES',
    'URANUS_SERIES',
    'VENUS_SERIES',
    'VSOP87D_FILE_NAMES',
    'PlanetSeries',
    'get_planet_series',
    'read_vsop87_file',
]
