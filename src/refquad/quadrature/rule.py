"""Immutable value types for quadrature rules.

A quadrature rule is an ordered table of quadrature points, each consisting of a
position in the local coordinates of a reference element and a weight. Rules are
built once and shared afterwards, thus all numerical data is stored in read-only
arrays.

"""

from __future__ import annotations

from typing import Any, Callable, Iterator, NamedTuple, Optional, Union, overload

import numpy as np

import refquad


def _frozen(array: Union[list, np.ndarray], ndim: int) -> np.ndarray:
    """Copy to a read-only float64 array of given number of dimensions."""
    frozen = np.array(array, dtype=float)
    if frozen.ndim != ndim:
        raise ValueError(f"Expected array with {ndim} axes, got {frozen.ndim}.")
    frozen.flags.writeable = False
    return frozen


class QuadraturePoint:
    """Single evaluation point of a quadrature rule."""

    __slots__ = ("_position", "_weight")

    def __init__(self, position: Union[list, np.ndarray], weight: float) -> None:
        """Constructor.

        Args:
            position (array-like): local coordinates, of length dim.
            weight (float): quadrature weight.

        """
        position = np.asarray(position, dtype=float)
        if position.flags.writeable:
            position = _frozen(position, 1)
        object.__setattr__(self, "_position", position)
        object.__setattr__(self, "_weight", float(weight))

    def __setattr__(self, name, value):
        raise AttributeError("QuadraturePoint is immutable.")

    @property
    def position(self) -> np.ndarray:
        """Local coordinates of the point (read-only)."""
        return self._position

    @property
    def weight(self) -> float:
        """Weight associated with the point."""
        return self._weight

    @property
    def dim(self) -> int:
        return self._position.shape[0]

    def __eq__(self, other) -> bool:
        if not isinstance(other, QuadraturePoint):
            return NotImplemented
        return self._weight == other._weight and np.array_equal(
            self._position, other._position
        )

    def __hash__(self) -> int:
        return hash((self._position.tobytes(), self._weight))

    def __repr__(self) -> str:
        return (
            f"QuadraturePoint(position={self._position.tolist()}, "
            f"weight={self._weight})"
        )


class QuadratureRule:
    """Quadrature rule on a reference element.

    The rule owns its points, the geometry type it has been built for and the order
    up to which it integrates polynomials exactly. The default constructed rule has
    no points and the invalid order -1; it is a placeholder only and must not be
    used for integration.

    Example:

    rule = refquad.rule(refquad.GeometryTypes.triangle, 2)
    integral = rule.integrate(lambda x: x[0] * x[1])

    """

    def __init__(
        self,
        geometry_type: Optional[refquad.GeometryType] = None,
        order: int = -1,
        positions: Optional[Union[list, np.ndarray]] = None,
        weights: Optional[Union[list, np.ndarray]] = None,
    ) -> None:
        """Constructor.

        Args:
            geometry_type (GeometryType, optional): reference element.
            order (int): order of exactness, -1 marks an invalid rule.
            positions (array-like, optional): positions, one row per point.
            weights (array-like, optional): weights, one per point.

        Raises:
            ValueError: if positions and weights are incompatible with each other or
                with the dimension of the geometry type.

        """
        dim = 0 if geometry_type is None else geometry_type.dim
        if positions is None:
            positions = np.zeros((0, dim))
        if weights is None:
            weights = np.zeros(0)

        positions = np.asarray(positions, dtype=float)
        if positions.ndim == 1 and dim == 1:
            positions = positions[:, np.newaxis]

        self._positions = _frozen(positions, 2)
        """np.ndarray: positions of all points, one row per point."""

        self._weights = _frozen(weights, 1)
        """np.ndarray: weights of all points."""

        if self._positions.shape[1] != dim:
            raise ValueError(
                f"Positions of dimension {self._positions.shape[1]} provided for "
                f"element of dimension {dim}."
            )
        if self._positions.shape[0] != self._weights.shape[0]:
            raise ValueError(
                f"{self._positions.shape[0]} positions but "
                f"{self._weights.shape[0]} weights provided."
            )

        self._geometry_type = geometry_type
        """GeometryType: reference element."""

        self._order = int(order)
        """int: order of exactness."""

        self._points = tuple(
            QuadraturePoint(p, w) for p, w in zip(self._positions, self._weights)
        )
        """tuple: quadrature points."""

    # ! ---- Metadata ----

    @property
    def order(self) -> int:
        """Highest polynomial degree integrated exactly."""
        return self._order

    @property
    def type(self) -> Optional[refquad.GeometryType]:
        """Reference element the rule is built for."""
        return self._geometry_type

    @property
    def dim(self) -> int:
        return self._positions.shape[1]

    @property
    def positions(self) -> np.ndarray:
        """Read-only array of positions with shape (num_points, dim)."""
        return self._positions

    @property
    def weights(self) -> np.ndarray:
        """Read-only array of weights with shape (num_points,)."""
        return self._weights

    def is_valid(self) -> bool:
        return self._geometry_type is not None and self._order >= 0

    # ! ---- Sequence interface ----

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[QuadraturePoint]:
        return iter(self._points)

    @overload
    def __getitem__(self, key: int) -> QuadraturePoint:
        ...

    @overload
    def __getitem__(self, key: slice) -> tuple[QuadraturePoint, ...]:
        ...

    def __getitem__(self, key: Any) -> Any:
        return self._points[key]

    # ! ---- Integration ----

    def integrate(self, function: Callable[[np.ndarray], Any]) -> Any:
        """Apply the rule to a function defined on the reference element.

        Args:
            function (Callable): function of the local coordinates, returning a
                scalar or an array.

        Returns:
            float or np.ndarray: weighted sum of the function values.

        Raises:
            ValueError: if the rule is the invalid placeholder.

        """
        if not self.is_valid():
            raise ValueError("Cannot integrate with an invalid quadrature rule.")
        return sum(point.weight * function(point.position) for point in self._points)

    # ! ---- Comparison ----

    def __eq__(self, other) -> bool:
        if not isinstance(other, QuadratureRule):
            return NotImplemented
        return (
            self._geometry_type == other._geometry_type
            and self._order == other._order
            and np.array_equal(self._positions, other._positions)
            and np.array_equal(self._weights, other._weights)
        )

    __hash__ = None  # type: ignore [assignment]

    def __repr__(self) -> str:
        return (
            f"QuadratureRule(type={self._geometry_type}, order={self._order}, "
            f"size={len(self)})"
        )


class QuadratureKey(NamedTuple):
    """Identifier of a quadrature rule, used by the cache.

    Equality and ordering are lexicographic in (id, order, quadrature type).

    """

    id: int
    """Index of the reference element among those of the same dimension."""

    order: int
    """Requested order."""

    quadrature_type: refquad.QuadratureType
    """Family of the rule."""
