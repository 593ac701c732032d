#!/usr/bin/env python3
"""
infinite-region: Run reboot instructions and print how many cubes are on.
"""

import logging
import sys
from pathlib import Path

from infinite_region.exceptions import ParseError, RegionLimitError
from infinite_region.instruction import parse_instructions
from infinite_region.region import RegionEngine

logger = logging.getLogger(__name__)


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="infinite-region",
        description="Run reboot instructions and print how many cubes are on"
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="Instruction file, one instruction per line (default: stdin)"
    )
    parser.add_argument(
        "--init-region",
        action="store_true",
        help="Only count cubes inside the initialization region x,y,z in [-50, 50]"
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Check disjointness and volume conservation after every instruction"
    )
    parser.add_argument(
        "--max-cuboids",
        type=int,
        default=None,
        help="Abort if the region needs more than this many cuboids"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )
    return parser


def run(lines, init_region: bool = False, validate: bool = False, max_cuboids=None) -> int:
    """Apply instruction lines to a fresh region and return the requested volume."""
    engine = RegionEngine(validate=validate, max_cuboids=max_cuboids)
    engine.run(parse_instructions(lines))
    logger.info(f"Region holds {len(engine)} disjoint cuboids")
    if init_region:
        return engine.initialization_volume()
    return engine.total_volume()


def main(argv=None):
    """Main entry point for infinite-region."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.max_cuboids is not None and args.max_cuboids <= 0:
        print(f"Error: --max-cuboids must be positive, got {args.max_cuboids}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.file == "-":
            volume = run(sys.stdin, args.init_region, args.validate, args.max_cuboids)
        else:
            path = Path(args.file)
            if not path.exists():
                print(f"Error: File not found: {path}", file=sys.stderr)
                sys.exit(1)
            with path.open(encoding="utf-8") as f:
                volume = run(f, args.init_region, args.validate, args.max_cuboids)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except RegionLimitError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except UnicodeDecodeError as e:
        print(f"Error: {args.file} is not valid UTF-8 text: {e.reason}", file=sys.stderr)
        sys.exit(1)

    print(volume)


if __name__ == "__main__":
    main()
