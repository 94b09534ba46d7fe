from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


class UnresolvedVertexError(KeyError):
    """Raised when an element references a vertex id that is not in the mesh."""

    def __init__(self, vertex_id: int, element_id: int | None = None) -> None:
        super().__init__(vertex_id)
        self.vertex_id = vertex_id
        self.element_id = element_id

    def __str__(self) -> str:
        if self.element_id is None:
            return f"Unresolved vertex reference: vertex {self.vertex_id} does not exist."
        return (
            f"Unresolved vertex reference: element {self.element_id} "
            f"references vertex {self.vertex_id}, which does not exist."
        )


class Vertex:
    """
    Represents a mesh vertex.
    """
    def __init__(
        self,
        index: int,
        coords: list[float] | npt.NDArray[np.float64],
    ) -> None:
        """
        Initialize the vertex with coordinates.

        Args:
            index: Vertex id as written in the mesh file.
            coords: Coordinates of the vertex in the global system [X, Y] or [X, Y, Z].
        """
        self.coords = np.array(coords, dtype=np.float64)
        self.coords.setflags(write=False)
        self.uid = index

    def __repr__(self) -> str:
        """String representation of the vertex."""
        return f"{self.__class__.__name__}(id={self.uid}, coords={self.coords})"

    @property
    def dimension(self) -> int:
        return self.coords.shape[0]

    @property
    def x(self) -> float:
        """X-coordinate of the vertex."""
        return self.coords[0]

    @property
    def y(self) -> float:
        """Y-coordinate of the vertex."""
        return self.coords[1]

    @property
    def z(self) -> float:
        """Z-coordinate of the vertex (3D only)."""
        return self.coords[2]


class VertexTable:
    """
    Append-only store of vertices with an id -> position lookup.

    Elements reference vertices by id only; coordinates are fetched through this
    table when the mesh is resolved. Inserting a vertex whose id is already present
    replaces the stored vertex in place.
    """
    def __init__(self) -> None:
        self._vertices: list[Vertex] = []
        self._lookup: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self._lookup

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices)

    def __getitem__(self, vertex_id: int) -> Vertex:
        try:
            return self._vertices[self._lookup[vertex_id]]
        except KeyError:
            raise UnresolvedVertexError(vertex_id) from None

    def insert(self, vertex: Vertex) -> None:
        """Add a vertex, overwriting any vertex stored under the same id."""
        position = self._lookup.get(vertex.uid)
        if position is None:
            self._lookup[vertex.uid] = len(self._vertices)
            self._vertices.append(vertex)
        else:
            self._vertices[position] = vertex

    def coordinates_of(self, vertex_id: int) -> npt.NDArray[np.float64]:
        """Coordinates of the vertex with the given id."""
        return self[vertex_id].coords

    @property
    def ids(self) -> list[int]:
        """Vertex ids in insertion order."""
        return [vertex.uid for vertex in self._vertices]

    @property
    def coordinates(self) -> npt.NDArray[np.float64]:
        """All vertex coordinates stacked in insertion order."""
        if not self._vertices:
            return np.empty((0, 0), dtype=np.float64)
        return np.vstack([vertex.coords for vertex in self._vertices])
