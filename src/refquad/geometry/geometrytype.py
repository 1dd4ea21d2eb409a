"""Identification of reference elements by their topology.

A reference element of dimension ``dim`` is built recursively from a vertex: each
step either extrudes the current element along a new axis (prismatic step) or
collapses it towards a new apex (conical step). The sequence of steps is stored as
bits of the topology id, where bit ``k`` describes the step from dimension ``k`` to
dimension ``k+1``. Bit 0 carries no information since both steps turn a vertex into
a line.

Examples: simplices have id 0, cubes have all bits set, the prism (triangle
extruded) has id 0b101 and the pyramid (square collapsed) has id 0b011.

"""

from __future__ import annotations


class GeometryType:
    """Unique label for each type of reference element.

    Instances are immutable and hashable. The topology id is only unique among
    elements of the same dimension.

    """

    __slots__ = ("_topology_id", "_dim", "_none")

    def __init__(self, topology_id: int, dim: int, none: bool = False) -> None:
        """Constructor.

        Args:
            topology_id (int): topology id, see module documentation.
            dim (int): dimension of the element.
            none (bool): flag for the non-reference ("none") element.

        Raises:
            ValueError: if the dimension is negative or the id does not fit into
                ``dim`` bits.

        """
        if dim < 0:
            raise ValueError(f"Dimension {dim} is negative.")
        if topology_id < 0 or (dim > 0 and topology_id >= 1 << dim):
            raise ValueError(f"Topology id {topology_id} invalid in dimension {dim}.")
        if dim == 0 and topology_id != 0:
            raise ValueError("A vertex has topology id 0.")

        object.__setattr__(self, "_topology_id", int(topology_id))
        object.__setattr__(self, "_dim", int(dim))
        object.__setattr__(self, "_none", bool(none))

    def __setattr__(self, name, value):
        raise AttributeError("GeometryType is immutable.")

    # ! ---- Identification ----

    @property
    def id(self) -> int:
        """Topology id, stable among elements of the same dimension."""
        return self._topology_id

    @property
    def dim(self) -> int:
        """Dimension of the element."""
        return self._dim

    @property
    def index(self) -> int:
        """Index among the elements of the same dimension.

        The topology id without its uninformative bit 0; two geometry types of
        equal dimension describe the same element if and only if their indices agree.

        """
        return self._topology_id >> 1 if self._dim > 0 else 0

    def _masked_id(self) -> int:
        return self._topology_id | 1

    def is_none(self) -> bool:
        return self._none

    def is_vertex(self) -> bool:
        return not self._none and self._dim == 0

    def is_line(self) -> bool:
        return not self._none and self._dim == 1

    def is_triangle(self) -> bool:
        return not self._none and self._dim == 2 and self._masked_id() == 0b0001

    def is_quadrilateral(self) -> bool:
        return not self._none and self._dim == 2 and self._masked_id() == 0b0011

    def is_tetrahedron(self) -> bool:
        return not self._none and self._dim == 3 and self._masked_id() == 0b0001

    def is_pyramid(self) -> bool:
        return not self._none and self._dim == 3 and self._masked_id() == 0b0011

    def is_prism(self) -> bool:
        return not self._none and self._dim == 3 and self._masked_id() == 0b0101

    def is_hexahedron(self) -> bool:
        return not self._none and self._dim == 3 and self._masked_id() == 0b0111

    def is_simplex(self) -> bool:
        return not self._none and self._masked_id() == 0b0001

    def is_cube(self) -> bool:
        full = (1 << self._dim) - 1
        return not self._none and ((self._topology_id ^ full) >> 1) == 0

    # ! ---- Topological construction ----

    def is_prismatic_extrusion(self) -> bool:
        """Check whether the last construction step was an extrusion.

        Returns:
            bool: True if the element is the Cartesian product of its base and a
                line, False if it is the cone over its base.

        Raises:
            ValueError: for vertices, which have no base.

        """
        if self._dim == 0:
            raise ValueError("A vertex is not constructed from a base.")
        if self._dim == 1:
            return True
        return bool((self._topology_id >> (self._dim - 1)) & 1)

    def base(self) -> GeometryType:
        """Element of dimension ``dim - 1`` this element is constructed from."""
        if self._dim == 0:
            raise ValueError("A vertex is not constructed from a base.")
        mask = (1 << (self._dim - 1)) - 1
        return GeometryType(self._topology_id & mask, self._dim - 1)

    def reference_volume(self) -> float:
        """Volume of the reference element.

        The volume of an extrusion equals the volume of its base, the volume of a
        cone over a base of dimension ``dim - 1`` is the base volume divided by
        ``dim``.

        """
        if self._none:
            raise ValueError("The none element has no reference volume.")
        if self._dim == 0:
            return 1.0
        base_volume = self.base().reference_volume()
        if self.is_prismatic_extrusion():
            return base_volume
        else:
            return base_volume / self._dim

    # ! ---- Comparison and representation ----

    def _key(self) -> tuple:
        return (self._none, self._dim, self.index)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GeometryType):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"GeometryType(topology_id={self._topology_id}, dim={self._dim})"

    def __str__(self) -> str:
        for name in _NAMES:
            if getattr(self, f"is_{name}")():
                return f"({name})"
        if self.is_none():
            return f"(none, {self._dim})"
        if self.is_simplex():
            return f"(simplex, {self._dim})"
        if self.is_cube():
            return f"(cube, {self._dim})"
        return f"(other [{self._topology_id}], {self._dim})"


_NAMES = [
    "vertex",
    "line",
    "triangle",
    "quadrilateral",
    "tetrahedron",
    "pyramid",
    "prism",
    "hexahedron",
]


class GeometryTypes:
    """Predefined geometry types."""

    vertex = GeometryType(0, 0)
    line = GeometryType(1, 1)
    triangle = GeometryType(0, 2)
    quadrilateral = GeometryType(0b0011, 2)
    tetrahedron = GeometryType(0, 3)
    pyramid = GeometryType(0b0011, 3)
    prism = GeometryType(0b0101, 3)
    hexahedron = GeometryType(0b0111, 3)

    @staticmethod
    def simplex(dim: int) -> GeometryType:
        return GeometryType(0, dim)

    @staticmethod
    def cube(dim: int) -> GeometryType:
        return GeometryType((1 << dim) - 1, dim)

    @staticmethod
    def none(dim: int) -> GeometryType:
        return GeometryType(0, dim, none=True)

