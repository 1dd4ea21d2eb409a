"""Unit tests for the access point to quadrature rules and the dispatch by dimension."""

import sys

import numpy as np
import pytest

import refquad

QT = refquad.QuadratureType

GEOMETRY_TYPES = [
    refquad.GeometryTypes.vertex,
    refquad.GeometryTypes.line,
    refquad.GeometryTypes.triangle,
    refquad.GeometryTypes.quadrilateral,
    refquad.GeometryTypes.tetrahedron,
    refquad.GeometryTypes.pyramid,
    refquad.GeometryTypes.prism,
    refquad.GeometryTypes.hexahedron,
]


# ! ---- Scenarios ----


def test_vertex():
    rule = refquad.rule(refquad.GeometryTypes.vertex, 5)
    assert len(rule) == 1
    assert rule[0].position.shape == (0,)
    assert rule[0].weight == 1.0
    assert rule.order == sys.maxsize


def test_midpoint_rule():
    rule_0 = refquad.rule(refquad.GeometryTypes.line, 0, QT.GAUSS_LEGENDRE)
    rule_1 = refquad.rule(refquad.GeometryTypes.line, 1, QT.GAUSS_LEGENDRE)
    assert rule_0 == rule_1
    assert len(rule_0) == 1
    assert np.allclose(rule_0.positions, [[0.5]])
    assert np.allclose(rule_0.weights, [1.0])
    assert rule_0.order == 1


def test_triangle_table_is_preferred():
    rule = refquad.rule(refquad.GeometryTypes.triangle, 2, QT.GAUSS_LEGENDRE)
    assert len(rule) == 3
    assert np.allclose(rule.weights, 1.0 / 6.0)
    assert rule.order == 2
    assert rule == refquad.ClosedFormTables().rule(refquad.GeometryTypes.triangle, 2)


def test_tetrahedron_fallback():
    rule = refquad.rule(refquad.GeometryTypes.tetrahedron, 6, QT.GAUSS_LEGENDRE)
    assert rule.order >= 6
    assert len(rule) > 15
    assert np.isclose(np.sum(rule.weights), 1.0 / 6.0)


def test_triangle_max_order():
    table_order = refquad.ClosedFormTables().highest_order(
        refquad.GeometryTypes.triangle, QT.GAUSS_LEGENDRE
    )
    rules = refquad.QuadratureRules()
    tensor_order = refquad.TensorProductQuadratureRule.max_order(
        refquad.GeometryTypes.triangle, QT.GAUSS_LEGENDRE, rules
    )
    assert refquad.max_order(refquad.GeometryTypes.triangle, QT.GAUSS_LEGENDRE) == max(
        table_order, tensor_order
    )


# ! ---- Properties ----


@pytest.mark.parametrize("geometry_type", GEOMETRY_TYPES)
@pytest.mark.parametrize("quadrature_type", list(QT))
@pytest.mark.parametrize("order", [0, 1, 4])
def test_identity_and_volume(geometry_type, quadrature_type, order):
    rule = refquad.rule(geometry_type, order, quadrature_type)
    assert rule.order >= order
    assert rule is refquad.rule(geometry_type, order, quadrature_type)
    assert rule.type == geometry_type
    assert rule.dim == geometry_type.dim

    volume = geometry_type.reference_volume()
    if geometry_type.is_line() and quadrature_type == QT.GAUSS_JACOBI_1_0:
        volume = 1.0 / 2.0
    elif geometry_type.is_line() and quadrature_type == QT.GAUSS_JACOBI_2_0:
        volume = 1.0 / 3.0
    assert np.isclose(np.sum(rule.weights), volume)


@pytest.mark.parametrize("geometry_type", GEOMETRY_TYPES)
@pytest.mark.parametrize("quadrature_type", list(QT))
def test_max_order_is_consistent(geometry_type, quadrature_type):
    max_order = refquad.max_order(geometry_type, quadrature_type)
    if max_order == sys.maxsize:
        return
    try:
        rule = refquad.rule(geometry_type, max_order + 1, quadrature_type)
    except refquad.QuadratureOrderOutOfRange:
        pass
    else:
        assert rule.order >= max_order + 1

    # Building at the highest order is cheap enough up to dimension 2
    if geometry_type.dim <= 2:
        rule = refquad.rule(geometry_type, max_order, quadrature_type)
        assert rule.order >= max_order


# ! ---- Caching ----


def test_base_rules_are_shared():
    rules = refquad.QuadratureRules()
    rules.rule(refquad.GeometryTypes.prism, 3)
    key = refquad.QuadratureKey(
        refquad.GeometryTypes.triangle.index, 3, QT.GAUSS_LEGENDRE
    )
    assert key in rules.cache(2)
    assert len(rules.cache(2)) == 1
    assert rules.cache(2).builds == 1

    # The base rule has been built from the table
    triangle = rules.rule(refquad.GeometryTypes.triangle, 3)
    assert len(triangle) == 4
    assert rules.cache(2).builds == 1


def test_caches_are_separated_by_dimension():
    rules = refquad.QuadratureRules()
    triangle = rules.rule(refquad.GeometryTypes.triangle, 2)
    tetrahedron = rules.rule(refquad.GeometryTypes.tetrahedron, 2)
    assert triangle is not tetrahedron
    assert triangle.type == refquad.GeometryTypes.triangle
    assert tetrahedron.type == refquad.GeometryTypes.tetrahedron


def test_instances_do_not_share_rules():
    rule = refquad.QuadratureRules().rule(refquad.GeometryTypes.quadrilateral, 3)
    other = refquad.QuadratureRules().rule(refquad.GeometryTypes.quadrilateral, 3)
    assert rule is not other
    assert rule == other


def test_process_wide_instance():
    assert refquad.quadrature_rules() is refquad.quadrature_rules()
    rule = refquad.rule(refquad.GeometryTypes.hexahedron, 2)
    assert rule is refquad.quadrature_rules().rule(refquad.GeometryTypes.hexahedron, 2)


# ! ---- Configuration ----


def test_default_type():
    config = refquad.QuadratureConfig(default_type="gauss_lobatto")
    rules = refquad.QuadratureRules(config)
    rule = rules.rule(refquad.GeometryTypes.line, 3)
    assert len(rule) == 3
    assert np.allclose(rule.positions[[0, -1], 0], [0.0, 1.0])
    assert rule is rules.rule(refquad.GeometryTypes.line, 3, QT.GAUSS_LOBATTO)
    assert rules.max_order(refquad.GeometryTypes.line) == 31


def test_family_by_name():
    rules = refquad.QuadratureRules()
    rule = rules.rule(refquad.GeometryTypes.line, 2, "gauss_radau_left")
    assert rule is rules.rule(refquad.GeometryTypes.line, 2, QT.GAUSS_RADAU_LEFT)


def test_jacobi_n_highest_order():
    config = refquad.QuadratureConfig(jacobi_n_highest_order=20)
    rules = refquad.QuadratureRules(config)
    assert rules.max_order(refquad.GeometryTypes.line, QT.GAUSS_JACOBI_N_0) == 20
    assert rules.max_order(refquad.GeometryTypes.triangle, QT.GAUSS_JACOBI_N_0) == 20
    with pytest.raises(refquad.QuadratureOrderOutOfRange):
        rules.rule(refquad.GeometryTypes.tetrahedron, 21, QT.GAUSS_JACOBI_N_0)


# ! ---- Errors ----


def test_negative_order():
    with pytest.raises(ValueError):
        refquad.rule(refquad.GeometryTypes.triangle, -1)


def test_unknown_geometry_type():
    with pytest.raises(refquad.UnknownGeometryType):
        refquad.rule(refquad.GeometryTypes.none(2), 1)
    with pytest.raises(refquad.UnknownGeometryType):
        refquad.max_order(refquad.GeometryTypes.none(3))

    rules = refquad.QuadratureRules()
    with pytest.raises(refquad.UnknownGeometryType):
        refquad.PointQuadratureFactory(rules).rule(
            refquad.GeometryTypes.line, 1, QT.GAUSS_LEGENDRE
        )
    with pytest.raises(refquad.UnknownGeometryType):
        refquad.LineQuadratureFactory(rules).max_order(
            refquad.GeometryTypes.triangle, QT.GAUSS_LEGENDRE
        )


def test_unknown_quadrature_type():
    with pytest.raises(refquad.UnknownQuadratureType):
        refquad.rule(refquad.GeometryTypes.triangle, 2, 42)
    with pytest.raises(refquad.UnknownQuadratureType):
        refquad.QuadratureRules().rule(refquad.GeometryTypes.line, 2, "simpson")


def test_order_out_of_range():
    with pytest.raises(refquad.QuadratureOrderOutOfRange):
        refquad.rule(refquad.GeometryTypes.line, 62)
    with pytest.raises(refquad.QuadratureOrderOutOfRange):
        refquad.rule(refquad.GeometryTypes.quadrilateral, 32, QT.GAUSS_LOBATTO)


def test_error_hierarchy():
    assert issubclass(refquad.UnknownGeometryType, ValueError)
    assert issubclass(refquad.UnknownQuadratureType, ValueError)
    assert issubclass(refquad.QuadratureOrderOutOfRange, NotImplementedError)
    assert not issubclass(
        refquad.QuadratureOrderOutOfRange, refquad.UnsupportedQuadratureConfiguration
    )


@pytest.mark.parametrize(
    "dim, factory",
    [
        (0, refquad.PointQuadratureFactory),
        (1, refquad.LineQuadratureFactory),
        (2, refquad.TriangleQuadratureFactory),
        (3, refquad.SolidQuadratureFactory),
        (4, refquad.TensorProductQuadratureFactory),
        (5, refquad.TensorProductQuadratureFactory),
    ],
)
def test_make_factory(dim, factory):
    assert type(refquad.make_factory(dim, refquad.QuadratureRules())) is factory
