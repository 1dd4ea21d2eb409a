"""Exceptions raised when a quadrature rule cannot be provided.

Two kinds are distinguished. Configuration errors (unknown element or family)
indicate a structurally impossible request. Order errors indicate that the request
is valid but the order exceeds what any construction supports; callers may lower
the order and retry.

"""


class QuadratureError(Exception):
    """Base class for all errors raised by refquad."""


class UnsupportedQuadratureConfiguration(QuadratureError, ValueError):
    """Request for an element or family that cannot be served at all."""


class UnknownGeometryType(UnsupportedQuadratureConfiguration):
    """The element is not supported in the requested dimension."""


class UnknownQuadratureType(UnsupportedQuadratureConfiguration):
    """The quadrature family is not known."""


class QuadratureOrderOutOfRange(QuadratureError, NotImplementedError):
    """The requested order exceeds the highest available order."""
