"""One-dimensional quadrature rules on the reference interval [0, 1].

Nodes and weights are computed on [-1, 1] by the Golub-Welsch algorithm provided
by scipy and mapped affinely to [0, 1]. Each family has its own relation between
number of points and order of exactness:

    Gauss-Legendre, Gauss-Jacobi   n points, order 2n - 1
    Gauss-Radau (left/right)       n points, order 2n - 2
    Gauss-Lobatto                  n points, order 2n - 3

"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import scipy.special

import refquad

logger = logging.getLogger(__name__)

HIGHEST_ORDER: dict[refquad.QuadratureType, int] = {
    refquad.QuadratureType.GAUSS_LEGENDRE: 61,
    refquad.QuadratureType.GAUSS_JACOBI_1_0: 61,
    refquad.QuadratureType.GAUSS_JACOBI_2_0: 61,
    refquad.QuadratureType.GAUSS_JACOBI_N_0: 61,
    refquad.QuadratureType.GAUSS_LOBATTO: 31,
    refquad.QuadratureType.GAUSS_RADAU_LEFT: 30,
    refquad.QuadratureType.GAUSS_RADAU_RIGHT: 30,
}
"""Highest order available for each family on the line.

The Gauss-Jacobi-n entry is the default, the effective value is configurable.

"""


# ! ---- Number of points ----


def num_points(quadrature_type: refquad.QuadratureType, order: int) -> int:
    """Smallest number of points integrating the given order exactly.

    Args:
        quadrature_type (QuadratureType): family.
        order (int): requested order.

    Returns:
        int: number of points.

    """
    if quadrature_type == refquad.QuadratureType.GAUSS_LOBATTO:
        return max(2, (order + 4) // 2)
    elif quadrature_type in [
        refquad.QuadratureType.GAUSS_RADAU_LEFT,
        refquad.QuadratureType.GAUSS_RADAU_RIGHT,
    ]:
        return (order + 1) // 2 + 1
    else:
        return order // 2 + 1


def delivered_order(quadrature_type: refquad.QuadratureType, n: int) -> int:
    """Order of exactness of the rule of the given family with n points."""
    if quadrature_type == refquad.QuadratureType.GAUSS_LOBATTO:
        return 2 * n - 3
    elif quadrature_type in [
        refquad.QuadratureType.GAUSS_RADAU_LEFT,
        refquad.QuadratureType.GAUSS_RADAU_RIGHT,
    ]:
        return 2 * n - 2
    else:
        return 2 * n - 1


# ! ---- Nodes and weights on [0, 1] ----


def gauss_legendre(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Gauss-Legendre points and weights on [0, 1].

    Args:
        n (int): number of points.

    Returns:
        tuple[np.ndarray, np.ndarray]: points and weights.

    """
    pts, weights = scipy.special.roots_legendre(n)
    return (pts + 1.0) / 2.0, weights / 2.0


def gauss_jacobi(n: int, alpha: float) -> tuple[np.ndarray, np.ndarray]:
    """Gauss-Jacobi points and weights on [0, 1] for the weight (1-x)^alpha.

    The weights sum up to 1 / (alpha + 1), the integral of the weight function.

    Args:
        n (int): number of points.
        alpha (float): exponent of the weight function.

    Returns:
        tuple[np.ndarray, np.ndarray]: points and weights.

    """
    if alpha == 0:
        return gauss_legendre(n)
    pts, weights = scipy.special.roots_jacobi(n, alpha, 0.0)
    return (pts + 1.0) / 2.0, weights / 2.0 ** (alpha + 1)


def gauss_lobatto(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Gauss-Lobatto points and weights on [0, 1], including both endpoints.

    The interior points are the roots of the derivative of the Legendre polynomial
    of degree n-1, i.e., the roots of the Jacobi polynomial with alpha = beta = 1.

    Args:
        n (int): number of points, at least 2.

    Returns:
        tuple[np.ndarray, np.ndarray]: points and weights.

    """
    assert n >= 2, "Gauss-Lobatto rules require at least two points."
    if n == 2:
        interior = np.zeros(0)
    else:
        interior, _ = scipy.special.roots_jacobi(n - 2, 1.0, 1.0)
    pts = np.concatenate(([-1.0], interior, [1.0]))
    weights = 2.0 / (n * (n - 1) * scipy.special.eval_legendre(n - 1, pts) ** 2)
    return (pts + 1.0) / 2.0, weights / 2.0


def gauss_radau_left(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Gauss-Radau points and weights on [0, 1], including the left endpoint.

    The interior points and weights follow from the Gauss-Jacobi rule for the
    weight (1+t) on [-1, 1], divided by the weight.

    Args:
        n (int): number of points, at least 1.

    Returns:
        tuple[np.ndarray, np.ndarray]: points and weights.

    """
    assert n >= 1, "Gauss-Radau rules require at least one point."
    if n == 1:
        interior, interior_weights = np.zeros(0), np.zeros(0)
    else:
        interior, jacobi_weights = scipy.special.roots_jacobi(n - 1, 0.0, 1.0)
        interior_weights = jacobi_weights / (1.0 + interior)
    pts = np.concatenate(([-1.0], interior))
    weights = np.concatenate(([2.0 / n**2], interior_weights))
    return (pts + 1.0) / 2.0, weights / 2.0


def gauss_radau_right(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Gauss-Radau points and weights on [0, 1], including the right endpoint.

    Mirror image of :func:`gauss_radau_left`, sorted in ascending order.

    """
    pts, weights = gauss_radau_left(n)
    return (1.0 - pts)[::-1], weights[::-1]


# ! ---- Rules ----


def highest_order(
    quadrature_type: refquad.QuadratureType,
    jacobi_n_highest_order: Optional[int] = None,
) -> int:
    """Highest order available for a family on the line.

    Args:
        quadrature_type (QuadratureType): family.
        jacobi_n_highest_order (int, optional): overwrite for the run time computed
            Gauss-Jacobi-n family.

    Raises:
        UnknownQuadratureType: if the family is not known.

    """
    try:
        quadrature_type = refquad.QuadratureType(quadrature_type)
    except ValueError:
        raise refquad.UnknownQuadratureType(
            f"Unknown quadrature type {quadrature_type}."
        )
    if (
        quadrature_type == refquad.QuadratureType.GAUSS_JACOBI_N_0
        and jacobi_n_highest_order is not None
    ):
        return jacobi_n_highest_order
    return HIGHEST_ORDER[quadrature_type]


def line_rule(
    order: int,
    quadrature_type: refquad.QuadratureType = refquad.QuadratureType.GAUSS_LEGENDRE,
    alpha: int = 0,
    jacobi_n_highest_order: Optional[int] = None,
) -> refquad.QuadratureRule:
    """Quadrature rule on the reference line.

    Picks the cheapest rule of the family integrating the requested order exactly.
    The declared order of the rule is the order actually delivered, which may
    exceed the request.

    Args:
        order (int): requested order.
        quadrature_type (QuadratureType): family.
        alpha (int): exponent of the weight function (1-x)^alpha, only used by the
            Gauss-Jacobi-n family.
        jacobi_n_highest_order (int, optional): highest order of the Gauss-Jacobi-n
            family.

    Returns:
        QuadratureRule: rule on the line.

    Raises:
        UnknownQuadratureType: if the family is not known.
        QuadratureOrderOutOfRange: if the order exceeds the highest order of the
            family.

    """
    max_order = highest_order(quadrature_type, jacobi_n_highest_order)
    quadrature_type = refquad.QuadratureType(quadrature_type)
    if order > max_order:
        raise refquad.QuadratureOrderOutOfRange(
            f"QuadratureRule for order {order} and GeometryType "
            f"{refquad.GeometryTypes.line} not available for {quadrature_type.name}."
        )

    n = num_points(quadrature_type, order)
    if quadrature_type == refquad.QuadratureType.GAUSS_LEGENDRE:
        pts, weights = gauss_legendre(n)
    elif quadrature_type == refquad.QuadratureType.GAUSS_JACOBI_1_0:
        pts, weights = gauss_jacobi(n, 1)
    elif quadrature_type == refquad.QuadratureType.GAUSS_JACOBI_2_0:
        pts, weights = gauss_jacobi(n, 2)
    elif quadrature_type == refquad.QuadratureType.GAUSS_JACOBI_N_0:
        pts, weights = gauss_jacobi(n, alpha)
    elif quadrature_type == refquad.QuadratureType.GAUSS_LOBATTO:
        pts, weights = gauss_lobatto(n)
    elif quadrature_type == refquad.QuadratureType.GAUSS_RADAU_LEFT:
        pts, weights = gauss_radau_left(n)
    elif quadrature_type == refquad.QuadratureType.GAUSS_RADAU_RIGHT:
        pts, weights = gauss_radau_right(n)
    else:
        raise refquad.UnknownQuadratureType(
            f"Unknown quadrature type {quadrature_type}."
        )

    logger.debug(
        f"{quadrature_type.name} rule with {n} points (alpha={alpha}) for order "
        f"{order}."
    )
    return refquad.QuadratureRule(
        refquad.GeometryTypes.line,
        delivered_order(quadrature_type, n),
        pts,
        weights,
    )
