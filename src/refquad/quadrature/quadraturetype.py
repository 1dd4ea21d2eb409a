"""Families of quadrature rules."""

from __future__ import annotations

from enum import IntEnum


class QuadratureType(IntEnum):
    """Enum of the available families of one-dimensional quadrature rules.

    All families live on the reference interval [0, 1]. In higher dimensions the
    family determines which one-dimensional rules are composed, see
    :class:`refquad.TensorProductQuadratureRule`.

    """

    GAUSS_LEGENDRE = 0
    """Constant weight function, no endpoints. n points integrate order 2n-1."""

    GAUSS_JACOBI_1_0 = 1
    """Weight function (1-x), no endpoints. Collapsed axis of triangles."""

    GAUSS_JACOBI_2_0 = 2
    """Weight function (1-x)^2, no endpoints. Collapsed axis of tetrahedra."""

    GAUSS_JACOBI_N_0 = 3
    """Weight function (1-x)^n with n chosen at run time (n=0 on a line).

    Most efficient family for simplices of any dimension.

    """

    GAUSS_LOBATTO = 4
    """Constant weight, both endpoints included. n points integrate order 2n-3."""

    GAUSS_RADAU_LEFT = 5
    """Constant weight, left endpoint included. n points integrate order 2n-2."""

    GAUSS_RADAU_RIGHT = 6
    """Constant weight, right endpoint included. Mirrored left Radau rule."""

    @classmethod
    def from_string(cls, name: str) -> QuadratureType:
        """Convert a (case insensitive) name, e.g. "gauss_legendre", to the enum.

        Raises:
            ValueError: if the name does not denote a quadrature type.

        """
        try:
            return cls[name.strip().upper().replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown quadrature type {name}.")

    def has_constant_weight(self) -> bool:
        """Check whether the family integrates with constant weight on a line."""
        return self not in [
            QuadratureType.GAUSS_JACOBI_1_0,
            QuadratureType.GAUSS_JACOBI_2_0,
        ]
