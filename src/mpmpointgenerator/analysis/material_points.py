"""
Material Points
===============
Generation of the material points that seed a particle-based simulation.

Each resolved element of the mesh is sampled at the tensor-product Gauss points of
the reference cell; the samples are mapped to physical space through the element
shape functions. Points are emitted in element order, and within an element in
quadrature order, so repeated runs produce identical point lists.

Classes:
    MaterialPoint: One sample location and its (optional) stress.
    MaterialPointGroup: Ordered points of one material region.
    MaterialPointFactory: Builds the groups from a mesh.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Callable, Iterator, Optional

import numpy as np

import mpmpointgenerator.analysis.gauss as gauss

if TYPE_CHECKING:
    import numpy.typing as npt
    from mpmpointgenerator.analysis.finite_elements import FiniteElement
    from mpmpointgenerator.pre.mesh import Mesh

logger = logging.getLogger(__name__)


@dataclass
class MaterialPoint:
    """
    A sample location inside an element.

    `global_id` is unique and dense over all groups of a run; `element_id` is the
    id of the element the point was generated in. Stress uses Voigt ordering with
    ``2 * dimension`` components and is filled by the stress model, not here.
    """
    element_id: int
    global_id: int
    coordinates: npt.NDArray[np.float64]
    stress: Optional[npt.NDArray[np.float64]] = None

    @property
    def dimension(self) -> int:
        return self.coordinates.shape[0]

    def set_stress(self, stress: list[float] | npt.NDArray[np.float64]) -> None:
        stress = np.array(stress, dtype=np.float64)
        if stress.shape != (2 * self.dimension,):
            raise ValueError(
                f"Stress of a {self.dimension}D material point needs {2 * self.dimension} "
                f"components, got shape {stress.shape}."
            )
        self.stress = stress


@dataclass
class MaterialPointGroup:
    """Ordered collection of the material points of one material region."""
    index: int
    points: list[MaterialPoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[MaterialPoint]:
        return iter(self.points)

    def add_point(self, point: MaterialPoint) -> None:
        self.points.append(point)

    def coordinates(self) -> npt.NDArray[np.float64]:
        """(N, D) array of point coordinates in generation order."""
        if not self.points:
            return np.empty((0, 0), dtype=np.float64)
        return np.vstack([point.coordinates for point in self.points])

    def stresses(self) -> npt.NDArray[np.float64]:
        """(N, 2D) array of point stresses; points without a stress report zeros."""
        if not self.points:
            return np.empty((0, 0), dtype=np.float64)
        return np.vstack([
            point.stress if point.stress is not None else np.zeros(2 * point.dimension, dtype=np.float64)
            for point in self.points
        ])


def single_group(element: FiniteElement) -> int:
    """Every element belongs to material group 0."""
    return 0


def by_physical_tag(element: FiniteElement) -> int:
    """Group elements by their physical tag (first region tag)."""
    tag = element.physical_tag
    return 0 if tag is None else tag


class MaterialPointFactory:
    """
    Generates material points at the Gauss points of every element of a mesh.
    """
    def __init__(
        self,
        gauss_order: int,
        group_key: Callable[[FiniteElement], int] = single_group,
    ) -> None:
        """
        Initialize the factory.

        Args:
            gauss_order: Number of Gauss points per axis of the reference cell.
            group_key: Maps an element to the index of its material group.

        Raises:
            ValueError: If no Gauss rule exists for `gauss_order`.
        """
        # Fail early on an unsupported order
        gauss.gauss_points_weights_edge(gauss_order)
        self.gauss_order = gauss_order
        self.group_key = group_key

    def points_per_element(self, dimension: int) -> int:
        return self.gauss_order ** dimension

    def element_points(self, element: FiniteElement) -> npt.NDArray[np.float64]:
        """
        Physical coordinates of the Gauss points of one element.

        Returns:
            (gauss_order ** D, D) array in quadrature order.
        """
        if not element.is_resolved:
            raise RuntimeError(f"Element {element.id} has not been resolved against the vertex table.")
        reference_points, _ = gauss.gauss_points_weights_tensor(self.gauss_order, element.dimension)
        return np.array([element.map_to_physical(iso_coords) for iso_coords in reference_points])

    def generate(self, mesh: Mesh) -> list[MaterialPointGroup]:
        """
        Generate the material points of the mesh.

        Args:
            mesh: A resolved mesh.

        Returns:
            Material point groups sorted by index. With the default `group_key` this is
            a single group with index 0.
        """
        elements_by_group: dict[int, list[FiniteElement]] = defaultdict(list)
        for element in mesh.elements:
            elements_by_group[self.group_key(element)].append(element)
        if not elements_by_group:
            elements_by_group[0] = []

        groups: list[MaterialPointGroup] = []
        offset = 0
        for index in sorted(elements_by_group):
            group = self._generate_group(index, elements_by_group[index], offset)
            offset += len(group)
            groups.append(group)

        logger.info(
            f"Generated {offset} material points in {len(groups)} group(s) "
            f"from {mesh.number_of_elements} elements (gauss order {self.gauss_order})."
        )
        return groups

    def _generate_group(self, index: int, elements: list[FiniteElement], offset: int) -> MaterialPointGroup:
        group = MaterialPointGroup(index=index)
        global_id = offset
        for element in elements:
            for coords in self.element_points(element):
                group.add_point(MaterialPoint(element_id=element.id, global_id=global_id, coordinates=coords))
                global_id += 1
        return group
