"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from mpmpointgenerator.analysis.material_points import MaterialPointFactory, by_physical_tag, single_group
from mpmpointgenerator.analysis.node import UnresolvedVertexError
from mpmpointgenerator.config import DEFAULT_GAUSS_ORDER, MeshSettings
from mpmpointgenerator.logging_config import setup_logging
from mpmpointgenerator.pre.mesh import Mesh

logger = logging.getLogger("mpmpointgenerator")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mpm-point-generator",
        description="Generate material points at the Gauss points of a legacy ASCII mesh.",
    )
    parser.add_argument("mesh_file", help="Path to the mesh file (.msh)")
    parser.add_argument("dimension", type=int, choices=(2, 3), help="Spatial dimension, 2 or 3")
    parser.add_argument(
        "--gauss-order",
        type=int,
        default=DEFAULT_GAUSS_ORDER,
        help=f"Gauss points per axis of each element (default: {DEFAULT_GAUSS_ORDER})",
    )
    parser.add_argument(
        "--by-physical",
        action="store_true",
        help="Create one material point group per physical tag",
    )
    parser.add_argument("--plot", action="store_true", help="Plot the mesh and the material points")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    try:
        settings = MeshSettings.for_dimension(args.dimension)
        factory = MaterialPointFactory(
            gauss_order=args.gauss_order,
            group_key=by_physical_tag if args.by_physical else single_group,
        )
        mesh = Mesh.from_file(args.mesh_file, settings)
        groups = factory.generate(mesh)
    except OSError as e:
        logger.error(f"Could not open mesh file '{args.mesh_file}': {e}")
        return 1
    except (ValueError, UnresolvedVertexError) as e:
        logger.error(str(e))
        return 1

    for group in groups:
        logger.info(f"Material point group {group.index}: {len(group)} points.")

    if args.plot:
        mesh.plot(material_points=groups)

    return 0


if __name__ == "__main__":
    sys.exit(main())
