"""
Import an MPSGE-style model description into a RunSpec.

Usage:
    mpsge-runspec model.yaml
    mpsge-runspec model.yaml --output output/runspec.json
    mpsge-runspec model.yaml --data calibration.yaml --name CAMCGE
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from mpsge_runspec.data import load_import_data
from mpsge_runspec.errors import MPSGEImportError, RunSpecValidationError
from mpsge_runspec.importers import import_mpsge
from mpsge_runspec.source.simple import load_model

logger = logging.getLogger("mpsge_runspec.cli")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mpsge-runspec",
        description="Convert an MPSGE-style model description into a RunSpec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Minimal import, print a summary
  mpsge-runspec model.yaml

  # Data-assisted import, write the full spec
  mpsge-runspec model.yaml --data calibration.yaml --output runspec.json
        """,
    )
    parser.add_argument("model", type=Path, help="Model description (YAML or JSON)")
    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help="Calibration tables (YAML or JSON) for the data-assisted import",
    )
    parser.add_argument("--name", default="MPSGEImport", help="RunSpec name")
    parser.add_argument(
        "--sort-labels",
        action="store_true",
        help="Order labels lexicographically instead of by model enumeration",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the full RunSpec as JSON to this path",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        model = load_model(args.model)
        data = load_import_data(args.data) if args.data is not None else None
        spec = import_mpsge(model, name=args.name, data=data, sort_labels=args.sort_labels)
    except (MPSGEImportError, RunSpecValidationError) as exc:
        logger.error(f"Import failed: {exc}")
        return 1
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error(f"Could not read input: {exc}")
        return 1

    if args.output is not None:
        spec.to_json(args.output)
    else:
        print(json.dumps(spec.summary(), indent=2))
    logger.info(f"✓ {spec!r}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
