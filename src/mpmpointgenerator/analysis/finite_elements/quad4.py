from __future__ import annotations

import numpy as np

from mpmpointgenerator.analysis.finite_elements.finite_element import FiniteElement


class Quad4(FiniteElement):
    """
    Represents a four-node bilinear quadrilateral element (Quad4).
    """
    topology_code = 3
    dimension = 2

    # (xi, eta) corner of each node, counter-clockwise
    node_signs = np.array([
        [-1.0, -1.0],
        [+1.0, -1.0],
        [+1.0, +1.0],
        [-1.0, +1.0],
    ])
