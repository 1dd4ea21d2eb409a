"""Generic tensor-product construction of quadrature rules.

Any reference element is built from its base by either extruding (prismatic
step) or collapsing (conical step) along one new axis. Accordingly, a quadrature
rule on the element is composed from a rule on the base and a one-dimensional
rule on the new axis:

    prismatic step:  x = (b, z),          w = w_b * w_z
    conical step:    x = ((1 - z) b, z),  w = w_b * w_z * (1 - z)^m

where m = dim - 1 is the dimension of the base. The Jacobian (1 - z)^m of the
conical step is either absorbed by a Gauss-Jacobi rule with matching exponent or
multiplied into the weights of a constant weight rule of raised order.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

import refquad

if TYPE_CHECKING:
    from refquad.quadrature.rules import QuadratureRules

logger = logging.getLogger(__name__)


class TensorProductQuadratureRule:
    """Tensor-product quadrature rules on arbitrary reference elements.

    The base rule is requested through a :class:`refquad.QuadratureRules`
    instance, which allows tabulated rules to be used for the base and shares the
    base rules through the cache.

    """

    # ! ---- Choice of one-dimensional families ----

    @staticmethod
    def flat_type(
        quadrature_type: refquad.QuadratureType,
    ) -> refquad.QuadratureType:
        """Family used on flat axes.

        Families with a non-constant weight function cannot be used on flat axes
        and are replaced by Gauss-Legendre.

        """
        if quadrature_type.has_constant_weight():
            return quadrature_type
        return refquad.QuadratureType.GAUSS_LEGENDRE

    @classmethod
    def collapsed_type(
        cls, quadrature_type: refquad.QuadratureType, exponent: int
    ) -> tuple[refquad.QuadratureType, int, bool]:
        """Family used on a collapsed axis.

        Args:
            quadrature_type (QuadratureType): requested family.
            exponent (int): exponent m of the Jacobian (1 - z)^m.

        Returns:
            QuadratureType: family of the one-dimensional rule.
            int: exponent of the Gauss-Jacobi weight function, 0 if no Jacobi
                rule is used.
            bool: flag whether the Jacobian is absorbed by the weight function.

        """
        if quadrature_type == refquad.QuadratureType.GAUSS_JACOBI_N_0:
            return quadrature_type, exponent, True
        elif (
            quadrature_type == refquad.QuadratureType.GAUSS_JACOBI_1_0
            and exponent == 1
        ) or (
            quadrature_type == refquad.QuadratureType.GAUSS_JACOBI_2_0
            and exponent == 2
        ):
            return quadrature_type, exponent, True
        else:
            return cls.flat_type(quadrature_type), 0, False

    @classmethod
    def base_type(
        cls,
        geometry_type: refquad.GeometryType,
        quadrature_type: refquad.QuadratureType,
    ) -> refquad.QuadratureType:
        """Family requested for the base of the element."""
        if geometry_type.dim - 1 == 1:
            return cls.flat_type(quadrature_type)
        return quadrature_type

    # ! ---- Highest order ----

    @classmethod
    def max_order(
        cls,
        geometry_type: refquad.GeometryType,
        quadrature_type: refquad.QuadratureType,
        rules: QuadratureRules,
    ) -> int:
        """Highest order the tensor-product construction can provide.

        Args:
            geometry_type (GeometryType): reference element, at least of dimension 1.
            quadrature_type (QuadratureType): family.
            rules (QuadratureRules): provider of the base rules.

        Returns:
            int: minimum of the highest order of the base and of the new axis.

        """
        quadrature_type = refquad.QuadratureType(quadrature_type)
        jacobi_n_highest_order = rules.config.jacobi_n_highest_order
        base = geometry_type.base()
        base_max = rules.max_order(base, cls.base_type(geometry_type, quadrature_type))

        if geometry_type.is_prismatic_extrusion():
            axis_max = refquad.gauss1d.highest_order(
                cls.flat_type(quadrature_type), jacobi_n_highest_order
            )
        else:
            exponent = geometry_type.dim - 1
            family, _, absorbed = cls.collapsed_type(quadrature_type, exponent)
            axis_max = refquad.gauss1d.highest_order(family, jacobi_n_highest_order)
            if not absorbed:
                axis_max -= exponent

        return min(base_max, axis_max)

    # ! ---- Construction ----

    @classmethod
    def build(
        cls,
        geometry_type: refquad.GeometryType,
        order: int,
        quadrature_type: refquad.QuadratureType,
        rules: QuadratureRules,
    ) -> refquad.QuadratureRule:
        """Compose the quadrature rule from the base rule and a line rule.

        Points are ordered with the base points as outer and the line points as
        inner index.

        Args:
            geometry_type (GeometryType): reference element, at least of dimension 1.
            order (int): requested order.
            quadrature_type (QuadratureType): family.
            rules (QuadratureRules): provider of the base rules.

        Returns:
            QuadratureRule: rule with the order actually achieved, which is at
                least the requested order.

        Raises:
            QuadratureOrderOutOfRange: if the order exceeds :meth:`max_order`.

        """
        if geometry_type.dim == 0:
            raise refquad.UnknownGeometryType(
                "The tensor-product construction requires an element of positive "
                "dimension."
            )
        quadrature_type = refquad.QuadratureType(quadrature_type)
        max_order = cls.max_order(geometry_type, quadrature_type, rules)
        if order > max_order:
            raise refquad.QuadratureOrderOutOfRange(
                f"QuadratureRule for order {order} and GeometryType {geometry_type} "
                f"not available for {quadrature_type.name} (highest order "
                f"{max_order})."
            )

        jacobi_n_highest_order = rules.config.jacobi_n_highest_order
        base_rule = rules.rule(
            geometry_type.base(), order, cls.base_type(geometry_type, quadrature_type)
        )

        if geometry_type.is_prismatic_extrusion():
            line_rule = refquad.gauss1d.line_rule(
                order,
                cls.flat_type(quadrature_type),
                jacobi_n_highest_order=jacobi_n_highest_order,
            )
            achieved_order = min(base_rule.order, line_rule.order)
        else:
            exponent = geometry_type.dim - 1
            family, alpha, absorbed = cls.collapsed_type(quadrature_type, exponent)
            if absorbed:
                line_rule = refquad.gauss1d.line_rule(
                    order, family, alpha, jacobi_n_highest_order
                )
                achieved_order = min(base_rule.order, line_rule.order)
            else:
                line_rule = refquad.gauss1d.line_rule(
                    order + exponent, family, 0, jacobi_n_highest_order
                )
                achieved_order = min(base_rule.order, line_rule.order - exponent)

        num_base_points = len(base_rule)
        num_line_points = len(line_rule)

        # Base points as outer, line points as inner index
        base_positions = np.repeat(base_rule.positions, num_line_points, axis=0)
        heights = np.tile(line_rule.positions[:, 0], num_base_points)
        weights = np.outer(base_rule.weights, line_rule.weights).ravel()

        if geometry_type.is_prismatic_extrusion():
            positions = np.hstack((base_positions, heights[:, np.newaxis]))
        else:
            scaling = (1.0 - heights)[:, np.newaxis]
            positions = np.hstack((scaling * base_positions, heights[:, np.newaxis]))
            if not absorbed:
                weights = weights * (1.0 - heights) ** exponent

        logger.debug(
            f"Tensor-product rule for {geometry_type} with {num_base_points} x "
            f"{num_line_points} points, requested order {order}, achieved order "
            f"{achieved_order}."
        )
        return refquad.QuadratureRule(
            geometry_type, achieved_order, positions, weights
        )
