"""Exactness of quadrature rules, tested by integrating monomials.

The exact integral of a monomial over a reference element follows recursively
from its construction: an extrusion multiplies the base integral by the integral
over the new axis, a cone over a base of dimension m contributes
int_0^1 (1-z)^(s+m) z^c dz = B(s+m+1, c+1), where s is the total degree of the
monomial on the base.

"""

import itertools
from math import factorial

import numpy as np
import pytest

import refquad

QT = refquad.QuadratureType


def _exact(geometry_type: refquad.GeometryType, exponents: tuple) -> float:
    if geometry_type.dim == 0:
        return 1.0
    base_exponents, c = exponents[:-1], exponents[-1]
    base_integral = _exact(geometry_type.base(), base_exponents)
    if geometry_type.is_prismatic_extrusion():
        return base_integral / (c + 1)
    s = sum(base_exponents) + geometry_type.dim - 1
    return base_integral * factorial(s) * factorial(c) / factorial(s + c + 1)


def _check_exactness(rule: refquad.QuadratureRule, order: int) -> None:
    dim = rule.dim
    for exponents in itertools.product(range(order + 1), repeat=dim):
        if sum(exponents) > order:
            continue
        integral = rule.integrate(lambda x: np.prod(x ** np.array(exponents)))
        assert np.isclose(
            integral, _exact(rule.type, exponents), rtol=1e-10, atol=1e-13
        ), exponents


def test_exact_integrals():
    assert np.isclose(_exact(refquad.GeometryTypes.triangle, (0, 0)), 0.5)
    assert np.isclose(_exact(refquad.GeometryTypes.triangle, (1, 1)), 1.0 / 24.0)
    assert np.isclose(_exact(refquad.GeometryTypes.tetrahedron, (0, 0, 0)), 1 / 6)
    assert np.isclose(_exact(refquad.GeometryTypes.pyramid, (0, 0, 0)), 1.0 / 3.0)
    assert np.isclose(_exact(refquad.GeometryTypes.pyramid, (0, 0, 1)), 1.0 / 12.0)
    assert np.isclose(_exact(refquad.GeometryTypes.prism, (1, 0, 1)), 1.0 / 12.0)


@pytest.mark.parametrize("order", range(0, 13))
def test_triangle(order):
    rule = refquad.rule(refquad.GeometryTypes.triangle, order)
    _check_exactness(rule, order)


@pytest.mark.parametrize("order", range(0, 8))
def test_tetrahedron(order):
    rule = refquad.rule(refquad.GeometryTypes.tetrahedron, order)
    _check_exactness(rule, order)


@pytest.mark.parametrize(
    "geometry_type",
    [
        refquad.GeometryTypes.quadrilateral,
        refquad.GeometryTypes.pyramid,
        refquad.GeometryTypes.prism,
        refquad.GeometryTypes.hexahedron,
        refquad.GeometryTypes.simplex(4),
        refquad.GeometryTypes.cube(4),
    ],
)
@pytest.mark.parametrize("order", [1, 2, 3, 5])
def test_composed_elements(geometry_type, order):
    rule = refquad.rule(geometry_type, order)
    _check_exactness(rule, order)


@pytest.mark.parametrize("quadrature_type", list(QT))
@pytest.mark.parametrize(
    "geometry_type",
    [
        refquad.GeometryTypes.triangle,
        refquad.GeometryTypes.quadrilateral,
        refquad.GeometryTypes.tetrahedron,
        refquad.GeometryTypes.pyramid,
        refquad.GeometryTypes.prism,
    ],
)
def test_families(geometry_type, quadrature_type):
    rule = refquad.rule(geometry_type, 4, quadrature_type)
    _check_exactness(rule, 4)


def test_high_order_triangle():
    rule = refquad.rule(refquad.GeometryTypes.triangle, 20, QT.GAUSS_JACOBI_N_0)
    assert rule.order >= 20
    _check_exactness(rule, 20)
