"""Unit tests for the families of quadrature rules."""

import pytest

import refquad


def test_values():
    assert refquad.QuadratureType.GAUSS_LEGENDRE == 0
    assert refquad.QuadratureType.GAUSS_JACOBI_N_0 == 3
    assert refquad.QuadratureType.GAUSS_RADAU_RIGHT == 6
    assert (
        refquad.QuadratureType.GAUSS_JACOBI_1_0 < refquad.QuadratureType.GAUSS_LOBATTO
    )


def test_from_string():
    assert (
        refquad.QuadratureType.from_string("gauss_lobatto")
        == refquad.QuadratureType.GAUSS_LOBATTO
    )
    assert (
        refquad.QuadratureType.from_string("Gauss-Radau-Left")
        == refquad.QuadratureType.GAUSS_RADAU_LEFT
    )
    with pytest.raises(ValueError):
        refquad.QuadratureType.from_string("simpson")


def test_constant_weight():
    assert refquad.QuadratureType.GAUSS_LEGENDRE.has_constant_weight()
    assert refquad.QuadratureType.GAUSS_LOBATTO.has_constant_weight()
    assert refquad.QuadratureType.GAUSS_JACOBI_N_0.has_constant_weight()
    assert not refquad.QuadratureType.GAUSS_JACOBI_1_0.has_constant_weight()
    assert not refquad.QuadratureType.GAUSS_JACOBI_2_0.has_constant_weight()
