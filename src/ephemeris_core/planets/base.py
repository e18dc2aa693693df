"""Base dataclass holding one planet's VSOP87-D series."""

from __future__ import annotations

from dataclasses import dataclass

# Series amplitudes are stored in units of 1e-8 rad (L, B) and 1e-8 AU (R).
SERIES_UNIT = 1.0e-8

# One periodic term: amplitude (SERIES_UNIT), phase (rad), frequency (rad per
# Julian millennium).
SeriesTerm = tuple[float, float, float]
Series = tuple[tuple[SeriesTerm, ...], ...]


@dataclass(frozen=True)
class PlanetSeries:
    """Heliocentric series for one planet, grouped by coordinate and power of time.

    ``longitude[k]`` holds the terms multiplied by tau**k (L0, L1, ...), and
    likewise for ``latitude`` (B) and ``radius`` (R).
    """

    planet_num: int
    planet_name: str
    longitude: Series
    latitude: Series
    radius: Series

    def term_count(self) -> int:
        """Total number of periodic terms over all three coordinates."""
        return sum(len(group) for series in (self.longitude, self.latitude, self.radius)
                   for group in series)
