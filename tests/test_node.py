import numpy as np
import pytest

from mpmpointgenerator.analysis.node import UnresolvedVertexError, Vertex, VertexTable


def test_vertex_coordinates_are_read_only():
    vertex = Vertex(index=3, coords=[1.0, 2.0, 3.0])

    assert vertex.uid == 3
    assert vertex.dimension == 3
    assert (vertex.x, vertex.y, vertex.z) == (1.0, 2.0, 3.0)
    with pytest.raises(ValueError):
        vertex.coords[0] = 5.0


def test_table_insert_and_lookup():
    table = VertexTable()
    table.insert(Vertex(index=5, coords=[0.0, 1.0]))
    table.insert(Vertex(index=2, coords=[2.0, 3.0]))

    assert len(table) == 2
    assert 5 in table and 2 in table and 7 not in table
    assert table.ids == [5, 2]
    np.testing.assert_array_equal(table.coordinates_of(2), [2.0, 3.0])
    np.testing.assert_array_equal(table.coordinates, [[0.0, 1.0], [2.0, 3.0]])


def test_table_overwrites_duplicate_id_in_place():
    table = VertexTable()
    table.insert(Vertex(index=1, coords=[0.0, 0.0]))
    table.insert(Vertex(index=2, coords=[1.0, 0.0]))
    table.insert(Vertex(index=1, coords=[9.0, 9.0]))

    assert len(table) == 2
    assert table.ids == [1, 2]
    np.testing.assert_array_equal(table[1].coords, [9.0, 9.0])


def test_table_missing_id_raises():
    table = VertexTable()
    with pytest.raises(UnresolvedVertexError, match="vertex 4 does not exist"):
        table[4]
    with pytest.raises(KeyError):
        table.coordinates_of(4)
