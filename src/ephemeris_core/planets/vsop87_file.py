"""Reader for the complete VSOP87-D data files (Bretagnon & Francou 1988).

The files are the ones distributed with CDS catalogue VI/81, one per planet
(``VSOP87D.mer`` ... ``VSOP87D.nep``). Each block starts with a header line
naming the body, the variable (1 = L, 2 = B, 3 = R), the power of time and the
number of terms; every term line ends with the amplitude A (rad or AU), phase B
(rad) and frequency C (rad per Julian millennium).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ephemeris_core.errors import InvalidInputError
from ephemeris_core.planets.base import SERIES_UNIT, PlanetSeries, Series, SeriesTerm

logger = logging.getLogger(__name__)

VSOP87D_FILE_NAMES: dict[int, str] = {
    1: 'VSOP87D.mer',
    2: 'VSOP87D.ven',
    3: 'VSOP87D.ear',
    4: 'VSOP87D.mar',
    5: 'VSOP87D.jup',
    6: 'VSOP87D.sat',
    7: 'VSOP87D.ura',
    8: 'VSOP87D.nep',
}

_HEADER = re.compile(
    r'VSOP87\s+VERSION\s+D\d\s+(?P<body>\S+)\s+VARIABLE\s+(?P<variable>[123])\s+\(LBR\)'
    r'\s+\*T\*\*(?P<power>\d)\s+(?P<count>\d+)\s+TERMS'
)


def _as_series(groups: dict[int, list[SeriesTerm]]) -> Series:
    if not groups:
        return ()
    return tuple(tuple(groups.get(power, ())) for power in range(max(groups) + 1))


def read_vsop87_file(filepath: str | Path, planet_num: int) -> PlanetSeries:
    """Read one planet's VSOP87-D file into a PlanetSeries.

    Amplitudes are rescaled to SERIES_UNIT so the result evaluates exactly like
    the bundled series.

    Parameters:
        filepath: Path to the planet's VSOP87D.* file.
        planet_num: Planet number stored on the result (1-8).

    Returns:
        PlanetSeries holding every term of the file.

    Raises:
        InvalidInputError: A header is malformed, a term line precedes the first
            header or cannot be read, or a block has fewer or more terms than
            its header announces.
    """
    path = Path(filepath)
    coordinates: dict[int, dict[int, list[SeriesTerm]]] = {1: {}, 2: {}, 3: {}}
    body = ''
    block: list[SeriesTerm] | None = None
    expected = 0
    with path.open() as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            if 'VSOP87' in line:
                if block is not None and len(block) != expected:
                    raise InvalidInputError(
                        f'{path}:{lineno}: block has {len(block)} terms, header says {expected}'
                    )
                match = _HEADER.search(line)
                if match is None:
                    raise InvalidInputError(f'{path}:{lineno}: malformed VSOP87 header')
                body = match['body'].title()
                expected = int(match['count'])
                block = []
                coordinates[int(match['variable'])][int(match['power'])] = block
                continue
            if block is None:
                raise InvalidInputError(f'{path}:{lineno}: term line before the first header')
            fields = line.split()
            try:
                a, b, c = (float(x) for x in fields[-3:])
            except ValueError:
                raise InvalidInputError(f'{path}:{lineno}: unreadable term line') from None
            block.append((a / SERIES_UNIT, b, c))
    if block is not None and len(block) != expected:
        raise InvalidInputError(
            f'{path}: last block has {len(block)} terms, header says {expected}'
        )

    series = PlanetSeries(
        planet_num=planet_num,
        planet_name=body,
        longitude=_as_series(coordinates[1]),
        latitude=_as_series(coordinates[2]),
        radius=_as_series(coordinates[3]),
    )
    logger.info('Read %d VSOP87 terms for %s from %s', series.term_count(), body, path)
    return series
