from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest


UNIT_CUBE_MESH = """\
$MeshFormat
2.2 0 8
$EndMeshFormat
$Nodes
8
1 0.0 0.0 0.0
2 1.0 0.0 0.0
3 1.0 1.0 0.0
4 0.0 1.0 0.0
5 0.0 0.0 1.0
6 1.0 0.0 1.0
7 1.0 1.0 1.0
8 0.0 1.0 1.0
$EndNodes
$Elements
3
1 15 1 1 1
2 3 1 1 1 2 3 4
3 5 1 1 1 2 3 4 5 6 7 8
$EndElements
"""

UNIT_SQUARE_MESH = """\
$Nodes
6
1 0.0 0.0 0.0
2 1.0 0.0 0.0
3 1.0 1.0 0.0
4 0.0 1.0 0.0
5 2.0 0.0 0.0
6 2.0 1.0 0.0
$EndNodes
$Elements
3
1 1 1 1 1 2
2 3 1 1 1 2 3 4
3 3 2 1 2 5 6 3
$EndElements
"""


@pytest.fixture
def write_mesh(tmp_path):
    """Write mesh text to a temporary file and return its path."""
    def _write(text: str, name: str = "mesh.msh") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def unit_cube_file(write_mesh) -> str:
    return write_mesh(UNIT_CUBE_MESH)


@pytest.fixture
def unit_square_file(write_mesh) -> str:
    return write_mesh(UNIT_SQUARE_MESH)
