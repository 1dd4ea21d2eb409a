"""Tabulated quadrature rules for vertices, simplices and prisms.

The tables are stored as symmetry orbits in barycentric coordinates. An orbit is
given by one representative and expanded to all distinct permutations (or cyclic
rotations for rules that are only rotationally symmetric); the local coordinates
of a point are the first ``dim`` barycentric coordinates.

References for the triangle and tetrahedron rules: the Encyclopaedia of Cubature
Formulas by R. Cools; A.H. Stroud, Approximate Calculation of Multiple Integrals;
D.A. Dunavant, High degree efficient symmetrical Gaussian quadrature rules for the
triangle; K. Gatermann, The construction of symmetric cubature formulas for the
square and the triangle; M.E. Laursen and M. Gellert, Some criteria for numerically
integrated matrices and quadrature formulas for triangles; J.N. Lyness and
D. Jespersen, Moderate degree symmetric quadrature rules for the triangle.

"""

from __future__ import annotations

import itertools
import logging
import sys
from typing import Optional

import numpy as np

import refquad

logger = logging.getLogger(__name__)


# ! ---- Orbits ----


def _orbit(representative: tuple, weight: float, cyclic: bool = False) -> list:
    """Expand a barycentric representative to its orbit.

    Args:
        representative (tuple): barycentric coordinates without the last one,
            which is the complement to 1.
        weight (float): weight shared by all points of the orbit.
        cyclic (bool): only use cyclic rotations instead of all permutations.

    Returns:
        list: list of (position, weight) pairs.

    """
    barycentric = tuple(representative) + (1.0 - sum(representative),)
    if cyclic:
        candidates = [
            barycentric[i:] + barycentric[:i] for i in range(len(barycentric))
        ]
    else:
        candidates = list(itertools.permutations(barycentric))
    # Remove duplicates while keeping the order, up to round-off in the complement
    unique: dict = {}
    for candidate in candidates:
        unique.setdefault(tuple(np.round(candidate, 14)), candidate)
    return [(point[:-1], weight) for point in unique.values()]


def _centroid(dim: int, weight: float) -> list:
    return _orbit((1.0 / (dim + 1),) * dim, weight)


# Triangle rules, weights normalized to an area of 1
_TRIANGLE = {
    1: [_centroid(2, 1.0)],
    2: [_orbit((1.0 / 6.0, 1.0 / 6.0), 1.0 / 3.0)],
    3: [
        _centroid(2, -27.0 / 48.0),
        _orbit((6.0 / 30.0, 6.0 / 30.0), 25.0 / 48.0),
    ],
    4: [
        _orbit(
            (0.091576213509770743459571463402202, 0.091576213509770743459571463402202),
            0.10995174365532186763832632490021,
        ),
        _orbit(
            (0.44594849091596488631832925388305, 0.44594849091596488631832925388305),
            0.22338158967801146569500700843312,
        ),
    ],
    5: [
        _centroid(2, 0.225),
        _orbit(
            (0.10128650732345633880098736191512, 0.10128650732345633880098736191512),
            0.12593918054482715259568394550018,
        ),
        _orbit(
            (0.47014206410511508977044120951345, 0.47014206410511508977044120951345),
            0.13239415278850618073764938783315,
        ),
    ],
    6: [
        _orbit(
            (0.063089014491502228340331602870819, 0.063089014491502228340331602870819),
            0.050844906370206816920936809106869,
        ),
        _orbit(
            (0.24928674517091042129163855310702, 0.24928674517091042129163855310702),
            0.11678627572637936602528961138558,
        ),
        _orbit(
            (0.053145049844816947353249671631398, 0.31035245103378440541660773395655),
            0.082851075618373575193553456420442,
        ),
    ],
    7: [
        _orbit(
            (0.062382265094402118173683000996350, 0.067517867073916085442557131050869),
            0.053034056314872502857508360921478,
            cyclic=True,
        ),
        _orbit(
            (0.0552254566569266117374791902756449, 0.321502493851981822666307849199202),
            0.087762817428892110073539806278575,
            cyclic=True,
        ),
        _orbit(
            (0.0343243029450971464696306424839376, 0.660949196186735657611980310197799),
            0.057550085569963171476890993800437,
            cyclic=True,
        ),
        _orbit(
            (0.515842334353591779257463386826430, 0.277716166976391782569581871393723),
            0.13498637401960554892539417233284,
            cyclic=True,
        ),
    ],
    8: [
        _centroid(2, 0.14431560767778716825109111048906),
        _orbit(
            (0.17056930775176020662229350149146, 0.17056930775176020662229350149146),
            0.10321737053471825028179155029213,
        ),
        _orbit(
            (0.050547228317030975458423550596599, 0.050547228317030975458423550596599),
            0.032458497623198080310925928341780,
        ),
        _orbit(
            (0.45929258829272315602881551449417, 0.45929258829272315602881551449417),
            0.095091634267284624793896104388584,
        ),
        _orbit(
            (0.72849239295540428124100037917606, 0.26311282963463811342178578628464),
            0.027230314174434994264844690073909,
        ),
    ],
    9: [
        _centroid(2, 0.097135796282798833819241982507289),
        _orbit(
            (0.48968251919873762778370692483619, 0.48968251919873762778370692483619),
            0.031334700227139070536854831287209,
        ),
        _orbit(
            (0.43708959149293663726993036443535, 0.43708959149293663726993036443535),
            0.077827541004774279316739356299404,
        ),
        _orbit(
            (0.18820353561903273024096128046733, 0.18820353561903273024096128046733),
            0.079647738927210253032891774264045,
        ),
        _orbit(
            (0.044729513394452709865106589966276, 0.044729513394452709865106589966276),
            0.025577675658698031261678798559000,
        ),
        _orbit(
            (0.74119859878449802069007987352342, 0.036838412054736283634817598783385),
            0.043283539377289377289377289377289,
        ),
    ],
    10: [
        _centroid(2, 0.079894504741239707831247045213386),
        _orbit(
            (0.42508621060209057296952951163804, 0.42508621060209057296952951163804),
            0.071123802232377334639291287398658,
        ),
        _orbit(
            (0.023308867510000190714466386895980, 0.023308867510000190714466386895980),
            0.0082238186904641955186466203624719,
        ),
        _orbit(
            (0.62830740021349255642083766607883, 0.22376697357697300622568649026820),
            0.045430592296170018007073629243933,
        ),
        _orbit(
            (0.61131382618139764891875500225390, 0.35874014186443146457815530072385),
            0.037359856234305276826236499001975,
        ),
        _orbit(
            (0.82107206998562937337354441347218, 0.14329537042686714530585663061732),
            0.030886656884563988782513077004629,
        ),
    ],
    11: [
        _orbit(
            (0.858870281282636704039173938058347, 0.141129718717363295960826061941652),
            0.0073623837833005542642588950473806,
        ),
        _centroid(2, 0.087977301162232238798093169321456),
        _orbit(
            (0.025989140928287395260032485498841, 0.025989140928287395260032485498841),
            0.0087443115537360230495164287998252,
        ),
        _orbit(
            (0.094287502647922495630569776275405, 0.094287502647922495630569776275405),
            0.038081571993934937515024339435614,
        ),
        _orbit(
            (0.49463677501721381374163260230644, 0.49463677501721381374163260230644),
            0.018855448056131292058476782591115,
        ),
        _orbit(
            (0.20734338261451133345293402411297, 0.20734338261451133345293402411297),
            0.072159697544739526124029988586463,
        ),
        _orbit(
            (0.43890780570049209506106538163613, 0.43890780570049209506106538163613),
            0.069329138705535899841765650903814,
        ),
        _orbit(
            (0.67793765488259040154212614118875, 0.044841677589130443309052391468801),
            0.041056315429288566641652314907294,
        ),
    ],
    12: [
        _orbit((0.488217389773805, 0.488217389773805), 0.025731066440455),
        _orbit((0.43972439229446, 0.43972439229446), 0.043692544538038),
        _orbit((0.271210385012116, 0.271210385012116), 0.062858224217885),
        _orbit((0.127576145541586, 0.127576145541586), 0.034796112930709),
        _orbit((0.02131735045321, 0.02131735045321), 0.006166261051559),
        _orbit((0.115343494534698, 0.275713269685514), 0.040371557766381),
        _orbit((0.022838332222257, 0.28132558098994), 0.022356773202303),
        _orbit((0.02573405054833, 0.116251915907597), 0.017316231108659),
    ],
}

# Tetrahedron rules, weights normalized to a volume of 1/6
_S_1 = 0.09197107805272303279  # (7 - sqrt(15)) / 34
_S_2 = 0.31979362782962990839  # (7 + sqrt(15)) / 34
_U = 0.05635083268962915574  # (10 - 2 sqrt(15)) / 40

_TETRAHEDRON = {
    1: [_centroid(3, 1.0 / 6.0)],
    2: [_orbit((0.138196601125010500,) * 3, 1.0 / 4.0 / 6.0)],
    3: [
        _orbit((0.0, 0.0, 0.0), 0.025 / 6.0),
        _orbit((1.0 / 3.0, 1.0 / 3.0, 1.0 / 3.0), 0.225 / 6.0),
    ],
    5: [
        # 16 / 135 / vol
        _centroid(3, 0.019753086419753086420),
        # (2665 + 14 sqrt(15)) / 37800 / vol
        _orbit((_S_1,) * 3, 0.011989513963169770001),
        # (2665 - 14 sqrt(15)) / 37800 / vol
        _orbit((_S_2,) * 3, 0.011511367871045397547),
        # 20 / 378 / vol
        _orbit((_U, _U, 0.5 - _U), 0.0088183421516754850088),
    ],
}


def _table_rule(
    geometry_type: refquad.GeometryType, table: dict, order: int, scaling: float
) -> refquad.QuadratureRule:
    """Assemble the rule of the lowest tabulated order not below ``order``."""
    available = sorted(table.keys())
    tabulated_order = next((p for p in available if p >= order), None)
    if tabulated_order is None:
        raise refquad.QuadratureOrderOutOfRange(
            f"QuadratureRule for order {order} and GeometryType {geometry_type} "
            "not available"
        )
    points = [point for orbit in table[tabulated_order] for point in orbit]
    positions = np.array([position for position, _ in points])
    weights = scaling * np.array([weight for _, weight in points])
    return refquad.QuadratureRule(geometry_type, tabulated_order, positions, weights)


# ! ---- Table provider ----


class ClosedFormTables:
    """Provider of tabulated quadrature rules.

    Tables exist for the vertex (any order), the triangle (up to order 12), the
    tetrahedron (up to order 5) and the prism (up to order 2). Simplex tables are
    valid for a constant weight function and thus only offered for the
    Gauss-Legendre and Gauss-Jacobi-n families, the prism table only for the
    Gauss-Legendre family.

    """

    TRIANGLE_HIGHEST_ORDER = max(_TRIANGLE.keys())
    TETRAHEDRON_HIGHEST_ORDER = max(_TETRAHEDRON.keys())
    PRISM_HIGHEST_ORDER = 2
    POINT_HIGHEST_ORDER = sys.maxsize

    def highest_order(
        self,
        geometry_type: refquad.GeometryType,
        quadrature_type: refquad.QuadratureType,
    ) -> Optional[int]:
        """Highest tabulated order for a reference element and family.

        Args:
            geometry_type (GeometryType): reference element.
            quadrature_type (QuadratureType): family.

        Returns:
            int or None: highest order, None if no table applies.

        """
        simplex_types = [
            refquad.QuadratureType.GAUSS_LEGENDRE,
            refquad.QuadratureType.GAUSS_JACOBI_N_0,
        ]
        if geometry_type.is_vertex():
            return self.POINT_HIGHEST_ORDER
        elif geometry_type.is_triangle() and quadrature_type in simplex_types:
            return self.TRIANGLE_HIGHEST_ORDER
        elif geometry_type.is_tetrahedron() and quadrature_type in simplex_types:
            return self.TETRAHEDRON_HIGHEST_ORDER
        elif (
            geometry_type.is_prism()
            and quadrature_type == refquad.QuadratureType.GAUSS_LEGENDRE
        ):
            return self.PRISM_HIGHEST_ORDER
        else:
            return None

    def rule(
        self, geometry_type: refquad.GeometryType, order: int
    ) -> refquad.QuadratureRule:
        """Tabulated rule for a reference element.

        Args:
            geometry_type (GeometryType): reference element.
            order (int): requested order.

        Returns:
            QuadratureRule: tabulated rule of the lowest tabulated order which is
                at least the requested order.

        Raises:
            UnknownGeometryType: if no table exists for the element.
            QuadratureOrderOutOfRange: if the order exceeds the table.

        """
        if geometry_type.is_vertex():
            return self.point_rule()
        elif geometry_type.is_triangle():
            return _table_rule(geometry_type, _TRIANGLE, order, 0.5)
        elif geometry_type.is_tetrahedron():
            return _table_rule(geometry_type, _TETRAHEDRON, order, 1.0)
        elif geometry_type.is_prism():
            return self.prism_rule(order)
        else:
            raise refquad.UnknownGeometryType(
                f"No tabulated quadrature rule for GeometryType {geometry_type}."
            )

    def point_rule(self) -> refquad.QuadratureRule:
        """Rule for the vertex: the origin with weight 1, exact for any order."""
        return refquad.QuadratureRule(
            refquad.GeometryTypes.vertex,
            self.POINT_HIGHEST_ORDER,
            np.zeros((1, 0)),
            np.ones(1),
        )

    def prism_rule(self, order: int) -> refquad.QuadratureRule:
        """Rule for the prism with 6 points, exact up to order 2.

        Product of the 3-point triangle rule and the 2-point Gauss rule.

        """
        if order > self.PRISM_HIGHEST_ORDER:
            raise refquad.QuadratureOrderOutOfRange(
                f"QuadratureRule for order {order} and GeometryType "
                f"{refquad.GeometryTypes.prism} not available"
            )
        triangle = [point for orbit in _TRIANGLE[2] for point in orbit]
        heights = [0.211324865405187117745, 0.788675134594812882255]
        positions = np.array(
            [[x, y, z] for z in heights for (x, y), _ in triangle],
        )
        weights = np.full(len(positions), 1.0 / 12.0)
        return refquad.QuadratureRule(
            refquad.GeometryTypes.prism, self.PRISM_HIGHEST_ORDER, positions, weights
        )
