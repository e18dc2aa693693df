"""Exception types raised by the position and transform routines."""

from __future__ import annotations


class EphemerisError(Exception):
    """Base class for all errors raised by ephemeris_core."""


class InvalidInputError(EphemerisError, ValueError):
    """Input outside the accepted domain (calendar fields, body selector, elements)."""


class ConvergenceError(EphemerisError, RuntimeError):
    """An iterative solver hit its iteration cap before converging.

    Attributes:
        last_iterate: Value of the unknown after the final iteration.
        residual: Size of the last correction (or equation residual) at that point.
        iterations: Number of iterations performed.
    """

    def __init__(self, message: str, last_iterate: float, residual: float, iterations: int) -> None:
        super().__init__(
            f'{message} (after {iterations} iterations, last iterate {last_iterate!r}, '
            f'residual {residual!r})'
        )
        self.last_iterate = last_iterate
        self.residual = residual
        self.iterations = iterations


class DomainDegeneracyError(EphemerisError, ArithmeticError):
    """Geometry with no defined limiting value (e.g. a zero-length direction)."""
