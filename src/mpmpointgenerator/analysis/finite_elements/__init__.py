"""
Isoparametric element topologies supported by the point generator.
"""
from mpmpointgenerator.analysis.finite_elements.finite_element import FiniteElement
from mpmpointgenerator.analysis.finite_elements.quad4 import Quad4
from mpmpointgenerator.analysis.finite_elements.hex8 import Hex8

ELEMENT_TYPE_MAP: dict[int, type[FiniteElement]] = {
    Quad4.topology_code: Quad4,  # 4-node quadrangle
    Hex8.topology_code: Hex8,  # 8-node hexahedron
}

__all__ = ["ELEMENT_TYPE_MAP", "FiniteElement", "Quad4", "Hex8"]
