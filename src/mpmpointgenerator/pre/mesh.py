from __future__ import annotations

from datetime import datetime

import logging

import numpy as np
import matplotlib.pyplot as plt

from mpmpointgenerator.analysis.node import VertexTable
from mpmpointgenerator.config import MeshSettings
from mpmpointgenerator.pre.reader import read_elements, read_vertices

from typing import TYPE_CHECKING, TextIO


if TYPE_CHECKING:
    from mpmpointgenerator.analysis.finite_elements import FiniteElement
    from mpmpointgenerator.analysis.material_points import MaterialPointGroup

logger = logging.getLogger(__name__)


class Mesh:
    def __init__(
        self,
        vertices: VertexTable,
        elements: list[FiniteElement],
        settings: MeshSettings,
        filename: str | None = None,
    ) -> None:
        """
        Initialize the Mesh class.

        Args:
            vertices: Vertex table (id -> coordinates).
            elements: Retained elements of the configured topology, in file order.
            settings: Settings the mesh was read with.
            filename: Path of the source file, if any.
        """
        self.vertices = vertices
        self.elements = elements
        self.settings = settings
        self.filename = filename

    @classmethod
    def from_file(cls, filename: str, settings: MeshSettings, resolve: bool = True) -> Mesh:
        """
        Load mesh data from a legacy ASCII mesh file.

        Args:
            filename: Path to the mesh file.
            settings: Dimension, topology and format options.
            resolve: Bind element vertex ids to coordinates after reading.

        Raises:
            OSError: If the file cannot be opened.
            UnresolvedVertexError: If `resolve` is set and an element references a missing vertex.
        """
        logger.info(f"Loading mesh from: {filename}")
        with open(filename, "r", encoding="utf-8") as stream:
            mesh = cls.from_stream(stream, settings, resolve=resolve)
        mesh.filename = filename
        return mesh

    @classmethod
    def from_stream(cls, stream: TextIO, settings: MeshSettings, resolve: bool = True) -> Mesh:
        """Load mesh data from an open, seekable text stream."""
        vertices = read_vertices(
            stream,
            dimension=settings.dimension,
            keyword=settings.nodes_keyword,
            comment_marker=settings.comment_marker,
        )
        elements = read_elements(stream, settings)
        mesh = cls(vertices=vertices, elements=elements, settings=settings)
        if resolve:
            mesh.resolve()
        return mesh

    @property
    def dimension(self) -> int:
        return self.settings.dimension

    @property
    def number_of_vertices(self) -> int:
        """Return the number of vertices in the mesh."""
        return len(self.vertices)

    @property
    def number_of_elements(self) -> int:
        """Return the number of retained elements in the mesh."""
        return len(self.elements)

    @property
    def is_resolved(self) -> bool:
        return all(element.is_resolved for element in self.elements)

    def resolve(self) -> None:
        """
        Attach vertex coordinates to every element, in vertex-id order.

        Raises:
            UnresolvedVertexError: If an element references a vertex id absent from the mesh.
        """
        for element in self.elements:
            element.resolve(self.vertices)
        logger.debug(f"Resolved vertex coordinates of {self.number_of_elements} elements.")

    def plot(self, material_points: list[MaterialPointGroup] | None = None) -> None:
        """Plot the element outlines and, optionally, the material points."""
        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure()
        ax = fig.add_subplot(projection="3d" if self.dimension == 3 else None)

        for element in self.elements:
            if not element.is_resolved:
                continue
            coords = element.vertex_coordinates
            # Bottom face (first four corners) closed; for Hex8 also the top face and the vertical edges
            outlines = [[0, 1, 2, 3, 0]]
            if self.dimension == 3:
                outlines += [[4, 5, 6, 7, 4], [0, 4], [1, 5], [2, 6], [3, 7]]
            for outline in outlines:
                ax.plot(*coords[outline].T, color='black', lw=1)

        if material_points:
            cmap = plt.get_cmap("gist_rainbow", max(len(material_points), 1))
            for i, group in enumerate(material_points):
                if len(group) == 0:
                    continue
                coords = group.coordinates()
                ax.scatter(*coords.T, color=cmap(i % cmap.N), s=8, label=f"Material points {group.index}")
            ax.legend(loc='best')

        if self.dimension == 2:
            ax.set_aspect('equal')
            ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)

        ax.set_title(f"Mesh plotted at {datetime.now().strftime('%d.%m.%Y %H:%M:%S')}")
        ax.set_xlabel("X Coordinate")
        ax.set_ylabel("Y Coordinate")
        plt.show()
