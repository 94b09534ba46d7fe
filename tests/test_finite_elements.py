import numpy as np
import pytest

from mpmpointgenerator.analysis.finite_elements import ELEMENT_TYPE_MAP, Hex8, Quad4
from mpmpointgenerator.analysis.node import UnresolvedVertexError, Vertex, VertexTable

TOL = 1e-12


def make_table(coords_by_id: dict[int, list[float]]) -> VertexTable:
    table = VertexTable()
    for vertex_id, coords in coords_by_id.items():
        table.insert(Vertex(index=vertex_id, coords=coords))
    return table


def test_element_type_map():
    assert ELEMENT_TYPE_MAP[3] is Quad4
    assert ELEMENT_TYPE_MAP[5] is Hex8
    assert Quad4.number_of_vertices() == 4
    assert Hex8.number_of_vertices() == 8


@pytest.mark.parametrize("element_class", [Quad4, Hex8])
def test_partition_of_unity(element_class):
    rng = np.random.default_rng(seed=42)
    for iso_coords in rng.uniform(-1.0, 1.0, size=(50, element_class.dimension)):
        values = element_class.shape_functions(iso_coords)
        assert values.shape == (element_class.number_of_vertices(),)
        assert abs(values.sum() - 1.0) < TOL


@pytest.mark.parametrize("element_class", [Quad4, Hex8])
def test_corner_reproduces_unit_vector(element_class):
    n_vertices = element_class.number_of_vertices()
    for k, corner in enumerate(element_class.node_signs):
        values = element_class.shape_functions(corner)
        np.testing.assert_array_equal(values, np.eye(n_vertices)[k])


def test_hex8_centre_weights_are_equal():
    values = Hex8.shape_functions(np.zeros(3))
    np.testing.assert_allclose(values, np.full(8, 0.125), atol=TOL)


def test_shape_functions_reject_wrong_dimension():
    with pytest.raises(ValueError, match="expects 3 reference coordinates"):
        Hex8.shape_functions(np.zeros(2))


def test_element_requires_exact_vertex_count():
    with pytest.raises(ValueError, match="requires exactly 8 vertex ids"):
        Hex8(index=1, vertex_ids=[1, 2, 3, 4])


def test_resolve_keeps_vertex_id_order():
    table = make_table({10: [0.0, 0.0], 20: [2.0, 0.0], 30: [2.0, 1.0], 40: [0.0, 1.0]})
    element = Quad4(index=7, vertex_ids=[30, 10, 40, 20])

    element.resolve(table)

    assert element.is_resolved
    np.testing.assert_array_equal(
        element.vertex_coordinates,
        [[2.0, 1.0], [0.0, 0.0], [0.0, 1.0], [2.0, 0.0]],
    )


def test_resolve_missing_vertex_raises():
    table = make_table({1: [0.0, 0.0], 2: [1.0, 0.0], 3: [1.0, 1.0]})
    element = Quad4(index=5, vertex_ids=[1, 2, 3, 99])

    with pytest.raises(UnresolvedVertexError) as excinfo:
        element.resolve(table)

    assert excinfo.value.vertex_id == 99
    assert excinfo.value.element_id == 5
    assert "Unresolved vertex reference" in str(excinfo.value)
    assert not element.is_resolved


def test_map_to_physical_requires_resolution():
    element = Quad4(index=1, vertex_ids=[1, 2, 3, 4])
    with pytest.raises(RuntimeError, match="has not been resolved"):
        element.map_to_physical(np.zeros(2))


def test_map_to_physical_on_distorted_quad():
    table = make_table({1: [0.0, 0.0], 2: [4.0, 0.0], 3: [5.0, 3.0], 4: [1.0, 2.0]})
    element = Quad4(index=1, vertex_ids=[1, 2, 3, 4])
    element.resolve(table)

    np.testing.assert_allclose(element.map_to_physical(np.zeros(2)), [2.5, 1.25], atol=TOL)
    for corner, expected in zip(Quad4.node_signs, element.vertex_coordinates):
        np.testing.assert_allclose(element.map_to_physical(corner), expected, atol=TOL)


def test_map_to_physical_on_scaled_hexahedron():
    signs = Hex8.node_signs
    coords = {i + 1: list((s + 1.0) * np.array([1.0, 2.0, 3.0])) for i, s in enumerate(signs)}
    element = Hex8(index=1, vertex_ids=list(coords))
    element.resolve(make_table(coords))

    np.testing.assert_allclose(element.map_to_physical(np.array([0.0, 0.0, 0.0])), [1.0, 2.0, 3.0], atol=TOL)
    np.testing.assert_allclose(element.map_to_physical(np.array([0.5, -0.5, 1.0])), [1.5, 1.0, 6.0], atol=TOL)
