"""Dimension specific strategies for the construction of quadrature rules.

Each strategy offers the same two operations: building a rule and answering the
highest order it can provide without building anything. The strategy is selected
by the dimension of the reference element:

    0       PointQuadratureFactory
    1       LineQuadratureFactory
    2       TriangleQuadratureFactory (tables for the triangle)
    3       SolidQuadratureFactory (tables for the tetrahedron and the prism)
    other   TensorProductQuadratureFactory

Whenever a table is applicable and covers the requested order, it is preferred
over the tensor-product construction.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import refquad

if TYPE_CHECKING:
    from refquad.quadrature.rules import QuadratureRules

logger = logging.getLogger(__name__)


class QuadratureFactory(ABC):
    """Abstract strategy, providing the template for dimension specific factories.

    Args:
        rules (QuadratureRules): access point used for the base rules of
            composed constructions, and provider of tables and configuration.

    """

    def __init__(self, rules: QuadratureRules) -> None:
        self.rules = rules
        """Access point the factory belongs to."""

    @abstractmethod
    def rule(
        self,
        geometry_type: refquad.GeometryType,
        order: int,
        quadrature_type: refquad.QuadratureType,
    ) -> refquad.QuadratureRule:
        """Build a quadrature rule.

        Args:
            geometry_type (GeometryType): reference element.
            order (int): requested order.
            quadrature_type (QuadratureType): family.

        Returns:
            QuadratureRule: rule of order at least the requested one.

        Raises:
            UnknownGeometryType: if the element is not served by the factory.
            QuadratureOrderOutOfRange: if the order exceeds :meth:`max_order`.

        """
        pass

    @abstractmethod
    def max_order(
        self,
        geometry_type: refquad.GeometryType,
        quadrature_type: refquad.QuadratureType,
    ) -> int:
        """Highest order available for the element and family."""
        pass


class PointQuadratureFactory(QuadratureFactory):
    """Rules for the vertex: a single point with weight 1, exact for any order."""

    def _check(self, geometry_type: refquad.GeometryType) -> None:
        if not geometry_type.is_vertex():
            raise refquad.UnknownGeometryType(
                f"GeometryType {geometry_type} is not a vertex."
            )

    def rule(self, geometry_type, order, quadrature_type):
        self._check(geometry_type)
        return self.rules.tables.point_rule()

    def max_order(self, geometry_type, quadrature_type):
        self._check(geometry_type)
        return self.rules.tables.POINT_HIGHEST_ORDER


class LineQuadratureFactory(QuadratureFactory):
    """Rules for the line, each family dispatched to its own generator."""

    def _check(self, geometry_type: refquad.GeometryType) -> None:
        if not geometry_type.is_line():
            raise refquad.UnknownGeometryType(
                f"GeometryType {geometry_type} is not a line."
            )

    def rule(self, geometry_type, order, quadrature_type):
        self._check(geometry_type)
        return refquad.gauss1d.line_rule(
            order,
            quadrature_type,
            jacobi_n_highest_order=self.rules.config.jacobi_n_highest_order,
        )

    def max_order(self, geometry_type, quadrature_type):
        self._check(geometry_type)
        return refquad.gauss1d.highest_order(
            quadrature_type, self.rules.config.jacobi_n_highest_order
        )


class TensorProductQuadratureFactory(QuadratureFactory):
    """Generic strategy using the tensor-product construction only."""

    def rule(self, geometry_type, order, quadrature_type):
        return refquad.TensorProductQuadratureRule.build(
            geometry_type, order, quadrature_type, self.rules
        )

    def max_order(self, geometry_type, quadrature_type):
        return refquad.TensorProductQuadratureRule.max_order(
            geometry_type, quadrature_type, self.rules
        )


class _TabulatedQuadratureFactory(TensorProductQuadratureFactory):
    """Strategy preferring tables over the tensor-product construction."""

    def _has_table(self, geometry_type: refquad.GeometryType) -> bool:
        return False

    def _table_order(self, geometry_type, quadrature_type):
        if not self._has_table(geometry_type):
            return None
        return self.rules.tables.highest_order(geometry_type, quadrature_type)

    def rule(self, geometry_type, order, quadrature_type):
        table_order = self._table_order(geometry_type, quadrature_type)
        if table_order is not None and order <= table_order:
            logger.debug(f"Tabulated rule for {geometry_type} and order {order}.")
            return self.rules.tables.rule(geometry_type, order)
        return super().rule(geometry_type, order, quadrature_type)

    def max_order(self, geometry_type, quadrature_type):
        tensor_order = super().max_order(geometry_type, quadrature_type)
        table_order = self._table_order(geometry_type, quadrature_type)
        if table_order is None:
            return tensor_order
        return max(tensor_order, table_order)


class TriangleQuadratureFactory(_TabulatedQuadratureFactory):
    """Strategy for two-dimensional elements, with tables for the triangle."""

    def _has_table(self, geometry_type):
        return geometry_type.is_triangle()


class SolidQuadratureFactory(_TabulatedQuadratureFactory):
    """Strategy for three-dimensional elements.

    Tables exist for the tetrahedron and the prism; pyramids and hexahedra are
    always composed.

    """

    def _has_table(self, geometry_type):
        return geometry_type.is_tetrahedron() or geometry_type.is_prism()


def make_factory(dim: int, rules: QuadratureRules) -> QuadratureFactory:
    """Select the strategy for reference elements of given dimension.

    Args:
        dim (int): dimension.
        rules (QuadratureRules): access point the factory belongs to.

    Returns:
        QuadratureFactory: strategy.

    """
    if dim == 0:
        return PointQuadratureFactory(rules)
    elif dim == 1:
        return LineQuadratureFactory(rules)
    elif dim == 2:
        return TriangleQuadratureFactory(rules)
    elif dim == 3:
        return SolidQuadratureFactory(rules)
    else:
        return TensorProductQuadratureFactory(rules)
