from __future__ import annotations

from abc import ABC

from typing import TYPE_CHECKING, ClassVar, Sequence

import numpy as np
import numba as nb

from mpmpointgenerator.analysis.node import UnresolvedVertexError

if TYPE_CHECKING:
    import numpy.typing as npt
    from mpmpointgenerator.analysis.node import VertexTable


@nb.jit(cache=True, nopython=True)
def _multilinear_shape_functions(
    node_signs: npt.NDArray[np.float64],
    iso_coords: npt.NDArray[np.float64]
) -> npt.NDArray[np.float64]:
    """
    Evaluate the multilinear (bilinear/trilinear) Lagrange shape functions.

    N_k = prod_j (1 + s_kj * xi_j) / 2^D

    Args:
        node_signs: (V, D) array with the reference corner of every node (entries +-1).
        iso_coords: (D, ) reference coordinates in [-1, 1]^D.

    Returns:
        (V, ) array of shape function values.
    """
    n_nodes, dimension = node_signs.shape
    values = np.empty(n_nodes, dtype=np.float64)
    scale = 0.5 ** dimension
    for k in range(n_nodes):
        value = scale
        for j in range(dimension):
            value *= 1.0 + node_signs[k, j] * iso_coords[j]
        values[k] = value
    return values


class FiniteElement(ABC):
    """
    Abstract base class for the isoparametric elements used to seed material points.

    Subclasses describe one topology: its topology code in the mesh file, the spatial
    dimension and the reference corner of each node, listed in the node order of the
    mesh file.
    """
    topology_code: ClassVar[int]
    dimension: ClassVar[int]
    node_signs: ClassVar[npt.NDArray[np.float64]]

    def __init__(
        self,
        index: int,
        vertex_ids: Sequence[int] | npt.NDArray[np.int64],
        tags: Sequence[int] = (),
    ) -> None:
        """
        Initialize the finite element with its id and vertex references.

        Args:
            index: Element id as written in the mesh file.
            vertex_ids: Ids of the element vertices, in topology order.
            tags: Region tags of the element (physical tag first).
        """
        vertex_ids = np.array(vertex_ids, dtype=np.int64)
        if vertex_ids.shape != (self.number_of_vertices(),):
            raise ValueError(
                f"{self.__class__.__name__} element {index} requires exactly "
                f"{self.number_of_vertices()} vertex ids, got {vertex_ids.size}."
            )
        self.id = index
        self.vertex_ids = vertex_ids
        self.tags = tuple(tags)
        self.vertex_coordinates: npt.NDArray[np.float64] | None = None

    def __repr__(self) -> str:
        """String representation of the finite element."""
        return f"{self.__class__.__name__}(id={self.id}, vertex_ids={self.vertex_ids.tolist()})"

    @classmethod
    def number_of_vertices(cls) -> int:
        """Number of vertices of the topology."""
        return cls.node_signs.shape[0]

    @property
    def physical_tag(self) -> int | None:
        """First region tag of the element, if any."""
        return self.tags[0] if self.tags else None

    @property
    def is_resolved(self) -> bool:
        return self.vertex_coordinates is not None

    def resolve(self, vertices: VertexTable) -> None:
        """
        Bind the vertex ids of the element to coordinates.

        Args:
            vertices: Vertex table of the mesh.

        Raises:
            UnresolvedVertexError: If a vertex id is not present in the table.
        """
        coordinates = []
        for vertex_id in self.vertex_ids:
            if int(vertex_id) not in vertices:
                raise UnresolvedVertexError(vertex_id=int(vertex_id), element_id=self.id)
            coordinates.append(vertices.coordinates_of(int(vertex_id)))
        self.vertex_coordinates = np.array(coordinates, dtype=np.float64)

    @classmethod
    def shape_functions(cls, iso_coords: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """
        Calculate the shape functions at given reference coordinates.

        Args:
            iso_coords: Reference coordinates in [-1, 1]^D.

        Returns:
            Shape function values ``[N1, ..., NV]`` in node order.
        """
        iso_coords = np.array(iso_coords, dtype=np.float64)
        if iso_coords.shape != (cls.dimension,):
            raise ValueError(
                f"{cls.__name__} expects {cls.dimension} reference coordinates, got shape {iso_coords.shape}."
            )
        return _multilinear_shape_functions(cls.node_signs, iso_coords)

    def map_to_physical(self, iso_coords: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """
        Map reference coordinates to the physical space of the element.

        Args:
            iso_coords: Reference coordinates in [-1, 1]^D.

        Returns:
            Physical coordinates ``sum(N_k * x_k)``.
        """
        if self.vertex_coordinates is None:
            raise RuntimeError(f"Element {self.id} has not been resolved against the vertex table.")
        return self.shape_functions(iso_coords) @ self.vertex_coordinates
