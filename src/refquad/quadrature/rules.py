"""Single access point for quadrature rules.

All rules are requested through a :class:`QuadratureRules` instance, which owns
one cache and one strategy per dimension. Topology ids are only unique among
reference elements of the same dimension, hence the caches are separated by
dimension.

The process-wide instance is created on first use by :func:`quadrature_rules` and
lives until the end of the process. The module level functions :func:`rule` and
:func:`max_order` delegate to it.

Example:

import refquad

rule = refquad.rule(refquad.GeometryTypes.triangle, 4)
for point in rule:
    print(point.position, point.weight)

"""

from __future__ import annotations

import logging
import threading
from typing import Optional, Union

import refquad

logger = logging.getLogger(__name__)


class QuadratureRules:
    """Cached quadrature rules for reference elements of all dimensions.

    Args:
        config (QuadratureConfig, optional): configuration; the default
            configuration is used if not provided.

    """

    def __init__(self, config: Optional[refquad.QuadratureConfig] = None) -> None:
        self.config = refquad.QuadratureConfig() if config is None else config
        """Configuration."""

        self.tables = refquad.ClosedFormTables()
        """Provider of tabulated rules."""

        self._caches: dict[int, refquad.QuadratureRuleCache] = {}
        self._factories: dict[int, refquad.QuadratureFactory] = {}
        self._lock = threading.Lock()

    # ! ---- Auxiliary methods ----

    def _quadrature_type(
        self, quadrature_type: Optional[Union[refquad.QuadratureType, int, str]]
    ) -> refquad.QuadratureType:
        """Convert to the enum, None denotes the configured default family."""
        if quadrature_type is None:
            quadrature_type = self.config.default_type
        try:
            if isinstance(quadrature_type, str):
                return refquad.QuadratureType.from_string(quadrature_type)
            return refquad.QuadratureType(quadrature_type)
        except ValueError:
            raise refquad.UnknownQuadratureType(
                f"Unknown quadrature type {quadrature_type}."
            )

    def _check(self, geometry_type: refquad.GeometryType) -> None:
        if geometry_type.is_none():
            raise refquad.UnknownGeometryType(
                f"No quadrature rules for the none type {geometry_type}."
            )

    def _dimension(
        self, dim: int
    ) -> tuple[refquad.QuadratureRuleCache, refquad.QuadratureFactory]:
        """Cache and strategy for a dimension, created on first use."""
        with self._lock:
            if dim not in self._caches:
                self._caches[dim] = refquad.QuadratureRuleCache(name=f"dim={dim}")
                self._factories[dim] = refquad.make_factory(dim, self)
            return self._caches[dim], self._factories[dim]

    def cache(self, dim: int) -> refquad.QuadratureRuleCache:
        """Cache of the rules for reference elements of given dimension."""
        return self._dimension(dim)[0]

    # ! ---- Main methods ----

    def rule(
        self,
        geometry_type: refquad.GeometryType,
        order: int,
        quadrature_type: Optional[Union[refquad.QuadratureType, int, str]] = None,
    ) -> refquad.QuadratureRule:
        """Quadrature rule for a reference element.

        Repeated requests with identical arguments return the identical object.

        Args:
            geometry_type (GeometryType): reference element.
            order (int): requested order, non-negative.
            quadrature_type (QuadratureType, optional): family; the configured
                default if not provided.

        Returns:
            QuadratureRule: shared rule of order at least the requested one.

        Raises:
            ValueError: if the order is negative.
            UnknownGeometryType: if no rules exist for the reference element.
            UnknownQuadratureType: if the family is not known.
            QuadratureOrderOutOfRange: if the order exceeds :meth:`max_order`.

        """
        quadrature_type = self._quadrature_type(quadrature_type)
        self._check(geometry_type)
        if order < 0:
            raise ValueError(f"Order {order} is negative.")

        cache, factory = self._dimension(geometry_type.dim)
        key = refquad.QuadratureKey(geometry_type.index, int(order), quadrature_type)
        return cache.get(
            key, lambda key: _build(factory, geometry_type, key.order, quadrature_type)
        )

    def max_order(
        self,
        geometry_type: refquad.GeometryType,
        quadrature_type: Optional[Union[refquad.QuadratureType, int, str]] = None,
    ) -> int:
        """Highest order available for a reference element and family.

        No rule is built. Requesting one order more either raises
        :class:`refquad.QuadratureOrderOutOfRange` or returns a rule.

        Args:
            geometry_type (GeometryType): reference element.
            quadrature_type (QuadratureType, optional): family; the configured
                default if not provided.

        Returns:
            int: highest order.

        """
        quadrature_type = self._quadrature_type(quadrature_type)
        self._check(geometry_type)
        _, factory = self._dimension(geometry_type.dim)
        return factory.max_order(geometry_type, quadrature_type)


@refquad.timing_decorator
def _build(
    factory: refquad.QuadratureFactory,
    geometry_type: refquad.GeometryType,
    order: int,
    quadrature_type: refquad.QuadratureType,
) -> refquad.QuadratureRule:
    """Construct a rule on a cache miss."""
    rule = factory.rule(geometry_type, order, quadrature_type)
    logger.info(
        f"New {quadrature_type.name} rule for {geometry_type} with {len(rule)} "
        f"points, requested order {order}, order {rule.order}."
    )
    return rule


# ! ---- Process-wide access point ----

_quadrature_rules: Optional[QuadratureRules] = None
_quadrature_rules_lock = threading.Lock()


def quadrature_rules() -> QuadratureRules:
    """Process-wide instance of :class:`QuadratureRules`, created on first use."""
    global _quadrature_rules
    if _quadrature_rules is None:
        with _quadrature_rules_lock:
            if _quadrature_rules is None:
                _quadrature_rules = QuadratureRules()
    return _quadrature_rules


def rule(
    geometry_type: refquad.GeometryType,
    order: int,
    quadrature_type: refquad.QuadratureType = refquad.QuadratureType.GAUSS_LEGENDRE,
) -> refquad.QuadratureRule:
    """Shared quadrature rule for a reference element.

    See :meth:`QuadratureRules.rule`.

    """
    return quadrature_rules().rule(geometry_type, order, quadrature_type)


def max_order(
    geometry_type: refquad.GeometryType,
    quadrature_type: refquad.QuadratureType = refquad.QuadratureType.GAUSS_LEGENDRE,
) -> int:
    """Highest order available, see :meth:`QuadratureRules.max_order`."""
    return quadrature_rules().max_order(geometry_type, quadrature_type)
