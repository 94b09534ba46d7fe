"""
Legacy ASCII Mesh Reader
========================
Keyword-driven parsing of the ``$Nodes`` and ``$Elements`` sections of a legacy
(version 2 style) ASCII mesh file.

Every section is read the same way: locate the section keyword, read the declared
record count and then read that many records. Blank lines and lines containing the
comment marker are skipped wherever they occur and do not count as records.

Parsing is best-effort: a missing keyword, a missing count, malformed records and
count mismatches are logged as warnings and the reader carries on with the data it
has. Structural errors (unresolved vertices) are raised later, during resolution.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TextIO

from mpmpointgenerator.analysis.node import Vertex, VertexTable
from mpmpointgenerator.config import COMMENT_MARKER, NODES_KEYWORD

if TYPE_CHECKING:
    from mpmpointgenerator.analysis.finite_elements import FiniteElement
    from mpmpointgenerator.config import MeshSettings

logger = logging.getLogger(__name__)

SECTION_PREFIX = "$"


def find_keyword(stream: TextIO, keyword: str) -> bool:
    """
    Move the stream to the line following the section keyword.

    The stream is scanned from its start. A line matches when it equals the keyword
    or, failing that, when it contains the keyword; the scan stops at the first match.

    Args:
        stream: Readable, seekable text stream.
        keyword: Section marker, e.g. ``$Nodes``.

    Returns:
        True if the keyword was found. Otherwise a warning is logged, the stream is
        left at its end and False is returned.
    """
    stream.seek(0)
    while True:
        line = stream.readline()
        if not line:
            break
        stripped = line.strip()
        if stripped == keyword:
            return True
        if keyword in stripped:
            logger.debug(f"Keyword '{keyword}' matched as a substring of line '{stripped}'.")
            return True

    logger.warning(f"Keyword '{keyword}' not found in the mesh file, the section is treated as empty.")
    return False


def _is_data_line(line: str, comment_marker: str) -> bool:
    """A non-blank line without the comment marker."""
    return bool(line.strip()) and comment_marker not in line


def _next_data_line(stream: TextIO, comment_marker: str) -> str | None:
    """Next data line of the stream (stripped), or None at the end of the stream."""
    while True:
        line = stream.readline()
        if not line:
            return None
        if _is_data_line(line, comment_marker):
            return line.strip()


def read_record_count(stream: TextIO, comment_marker: str = COMMENT_MARKER) -> int:
    """
    Read the declared number of records of the current section.

    Returns:
        The declared count, or 0 (with a warning) if it is missing or not an integer.
    """
    line = _next_data_line(stream, comment_marker)
    if line is None:
        logger.warning("Record count missing at the end of the mesh file.")
        return 0
    try:
        count = int(line.split()[0])
    except ValueError:
        logger.warning(f"Invalid record count '{line}', the section is treated as empty.")
        return 0
    if count < 0:
        logger.warning(f"Negative record count {count}, the section is treated as empty.")
        return 0
    return count


def _read_records(stream: TextIO, count: int, comment_marker: str) -> list[list[str]]:
    """
    Read up to `count` records, stopping early at a section terminator or the end of the stream.
    """
    records: list[list[str]] = []
    while len(records) < count:
        line = _next_data_line(stream, comment_marker)
        if line is None or line.startswith(SECTION_PREFIX):
            break
        records.append(line.split())
    return records


def read_vertices(
    stream: TextIO,
    dimension: int,
    keyword: str = NODES_KEYWORD,
    comment_marker: str = COMMENT_MARKER,
) -> VertexTable:
    """
    Read the vertex section.

    Records are ``id x y [z]``; only the first `dimension` coordinates are kept.
    A repeated id overwrites the previous vertex.

    Args:
        stream: Readable, seekable text stream.
        dimension: Number of coordinates per vertex (2 or 3).
        keyword: Section marker.
        comment_marker: Lines containing this marker are ignored.

    Returns:
        The vertex table.
    """
    vertices = VertexTable()
    if not find_keyword(stream, keyword):
        return vertices

    declared = read_record_count(stream, comment_marker)
    parsed = 0
    for fields in _read_records(stream, declared, comment_marker):
        if len(fields) < 1 + dimension:
            logger.warning(f"Skipping vertex record '{' '.join(fields)}': expected an id and {dimension} coordinates.")
            continue
        try:
            vertex_id = int(fields[0])
            coords = [float(value) for value in fields[1:1 + dimension]]
        except ValueError:
            logger.warning(f"Skipping malformed vertex record '{' '.join(fields)}'.")
            continue
        vertices.insert(Vertex(index=vertex_id, coords=coords))
        parsed += 1

    if parsed != declared:
        logger.warning(f"Declared {declared} vertices but parsed {parsed}.")
    logger.info(f"Read {len(vertices)} vertices.")
    return vertices


def read_elements(stream: TextIO, settings: MeshSettings) -> list[FiniteElement]:
    """
    Read the element section, keeping only elements of the configured topology.

    Records are ``id topology_code tag_1 .. tag_T vertex_id_1 .. vertex_id_V`` with
    ``T = settings.number_of_tags``. Records of another topology are discarded
    without reading their vertex ids.

    Args:
        stream: Readable, seekable text stream.
        settings: Mesh settings of the run.

    Returns:
        The retained elements, in file order, with unresolved vertex references.
    """
    element_class = settings.element_class
    n_vertices = settings.number_of_vertices
    n_tags = settings.number_of_tags

    elements: list[FiniteElement] = []
    if not find_keyword(stream, settings.elements_keyword):
        return elements

    declared = read_record_count(stream, settings.comment_marker)
    parsed = 0
    discarded = 0
    for fields in _read_records(stream, declared, settings.comment_marker):
        try:
            element_id = int(fields[0])
            topology_code = int(fields[1])
        except (ValueError, IndexError):
            logger.warning(f"Skipping malformed element record '{' '.join(fields)}'.")
            continue
        parsed += 1

        if topology_code != settings.topology_code:
            discarded += 1
            continue

        first_vertex = 2 + n_tags
        try:
            tags = [int(value) for value in fields[2:first_vertex]]
            vertex_ids = [int(value) for value in fields[first_vertex:first_vertex + n_vertices]]
        except ValueError:
            logger.warning(f"Skipping malformed element record '{' '.join(fields)}'.")
            continue
        if len(tags) != n_tags or len(vertex_ids) != n_vertices:
            logger.warning(
                f"Skipping element {element_id}: expected {n_tags} tags and {n_vertices} vertex ids, "
                f"got '{' '.join(fields[2:])}'."
            )
            continue

        elements.append(element_class(index=element_id, vertex_ids=vertex_ids, tags=tags))

    if parsed != declared:
        logger.warning(f"Declared {declared} elements but parsed {parsed}.")
    logger.info(
        f"Read {len(elements)} {element_class.__name__} elements "
        f"({discarded} elements of other topologies discarded)."
    )
    return elements
