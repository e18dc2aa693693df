"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from ephemeris_core.errors import (
    ConvergenceError,
    DomainDegeneracyError,
    EphemerisError,
    InvalidInputError,
)


def test_hierarchy() -> None:
    """Every error is an EphemerisError and also a matching builtin."""
    assert issubclass(InvalidInputError, ValueError)
    assert issubclass(ConvergenceError, RuntimeError)
    assert issubclass(DomainDegeneracyError, ArithmeticError)
    for cls in (InvalidInputError, ConvergenceError, DomainDegeneracyError):
        assert issubclass(cls, EphemerisError)


def test_convergence_error_carries_state() -> None:
    """The last iterate, residual and iteration count are kept on the exception."""
    err = ConvergenceError('did not converge', 1.25, 3e-5, 40)
    assert err.last_iterate == 1.25
    assert err.residual == 3e-5
    assert err.iterations == 40
    assert 'after 40 iterations' in str(err)
    with pytest.raises(EphemerisError):
        raise err
