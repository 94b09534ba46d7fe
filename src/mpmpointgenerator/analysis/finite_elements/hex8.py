from __future__ import annotations

import numpy as np

from mpmpointgenerator.analysis.finite_elements.finite_element import FiniteElement


class Hex8(FiniteElement):
    """
    Represents an eight-node trilinear hexahedral element (Hex8).

    Node ordering follows the legacy mesh format:

               7----------6
              /|         /|
             4----------5 |
             | |        | |
             | 3--------|-2
             |/         |/
             0----------1
    """
    topology_code = 5
    dimension = 3

    # (xi, eta, zeta) corner of each node
    node_signs = np.array([
        [-1.0, -1.0, -1.0],
        [+1.0, -1.0, -1.0],
        [+1.0, +1.0, -1.0],
        [-1.0, +1.0, -1.0],
        [-1.0, -1.0, +1.0],
        [+1.0, -1.0, +1.0],
        [+1.0, +1.0, +1.0],
        [-1.0, +1.0, +1.0],
    ])
