"""
Configuration & Constants
=========================
This module serves as the central registry for the mesh-format constants and the
per-run settings of the point generator.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    SAMPLE_MESH_PATH (str): Absolute path to the bundled two-hexahedra mesh.
    MeshSettings: Dimension, topology and format options of a single run.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from mpmpointgenerator.analysis.finite_elements import ELEMENT_TYPE_MAP, FiniteElement


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to a resource shipped next to the source tree.
    """
    # config.py is in src/mpmpointgenerator/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
SAMPLE_MESH_PATH: str = os.path.join(ASSETS_PATH, "two_hexahedra.msh")

NODES_KEYWORD: str = "$Nodes"
ELEMENTS_KEYWORD: str = "$Elements"
COMMENT_MARKER: str = "!"
NUMBER_OF_TAGS: int = 2  # physical tag, elementary tag
DEFAULT_GAUSS_ORDER: int = 2

# Topology seeded when only the dimension is given
DEFAULT_TOPOLOGY_CODES: dict[int, int] = {
    2: 3,  # Quad4
    3: 5,  # Hex8
}


@dataclass(frozen=True)
class MeshSettings:
    """
    Format and topology options for reading one mesh.

    Exactly one element topology is retained per run; records of any other
    topology code are discarded by the reader.
    """
    dimension: int = 3
    topology_code: int = DEFAULT_TOPOLOGY_CODES[3]
    number_of_tags: int = NUMBER_OF_TAGS
    nodes_keyword: str = NODES_KEYWORD
    elements_keyword: str = ELEMENTS_KEYWORD
    comment_marker: str = COMMENT_MARKER

    def __post_init__(self) -> None:
        if self.dimension not in DEFAULT_TOPOLOGY_CODES:
            raise ValueError(f"Unsupported dimension: {self.dimension}. 'dimension' must be 2 or 3.")
        if self.topology_code not in ELEMENT_TYPE_MAP:
            raise ValueError(
                f"Unsupported topology code: {self.topology_code}. "
                f"Supported codes are {sorted(ELEMENT_TYPE_MAP)}."
            )
        if self.element_class.dimension != self.dimension:
            raise ValueError(
                f"Topology code {self.topology_code} ({self.element_class.__name__}) is "
                f"{self.element_class.dimension}D, but the mesh dimension is {self.dimension}."
            )
        if self.number_of_tags < 0:
            raise ValueError(f"'number_of_tags' must be non-negative, got {self.number_of_tags}.")

    @classmethod
    def for_dimension(cls, dimension: int, **kwargs) -> MeshSettings:
        """Settings with the default topology of the given dimension."""
        if dimension not in DEFAULT_TOPOLOGY_CODES:
            raise ValueError(f"Unsupported dimension: {dimension}. 'dimension' must be 2 or 3.")
        return cls(dimension=dimension, topology_code=DEFAULT_TOPOLOGY_CODES[dimension], **kwargs)

    @property
    def element_class(self) -> type[FiniteElement]:
        return ELEMENT_TYPE_MAP[self.topology_code]

    @property
    def number_of_vertices(self) -> int:
        """Vertices per element of the configured topology."""
        return self.element_class.number_of_vertices()
