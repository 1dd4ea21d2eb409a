"""Root directory for refquad.

isort:skip_file

"""

# Reference elements
from refquad.geometry.geometrytype import *

# Value types
from refquad.quadrature.quadraturetype import *
from refquad.quadrature.errors import *
from refquad.quadrature.rule import *

# Utilities
from refquad.utils.logging import *
from refquad.utils.timings import *
from refquad.utils.config import *

# Constructions
from refquad.quadrature import gauss1d
from refquad.quadrature.tables import *
from refquad.quadrature.tensorproduct import *
from refquad.quadrature.factory import *

# Access point
from refquad.quadrature.cache import *
from refquad.quadrature.rules import *
