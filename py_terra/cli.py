"""Command-line world generation."""

import argparse
import json
import sys
from typing import List, Optional

import structlog
from pydantic import ValidationError

from .config import GenerationSettings, settings
from .core.world import generate_world
from .utils.log_config import configure_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a hex terrain world")
    parser.add_argument("--radius", type=int, help="Number of tile rings around the centre")
    parser.add_argument("--seed", help="World seed (integer or any string)")
    parser.add_argument("--pipeline", choices=["canonical", "terrain"], help="Stage list to run")
    parser.add_argument("--output", help="Write every tile as JSON to this file")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    parser.add_argument(
        "--log-format",
        choices=["json", "plain"],
        default=settings.log_format,
        help="Logging format",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_format)

    overrides = {
        key: value
        for key, value in (("radius", args.radius), ("seed", args.seed), ("pipeline", args.pipeline))
        if value is not None
    }
    try:
        generation = GenerationSettings(**{**settings.generation.model_dump(), **overrides})
    except ValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2

    world = generate_world(generation)
    summary = world.summary()

    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(f"Seed:       {summary['seed']}")
        print(f"Radius:     {summary['radius']} ({summary['tile_count']} tiles)")
        print(f"Stages:     {', '.join(summary['stages'])}")
        print(f"Continents: {summary['continents']}  Lakes: {summary['lakes']}  Rivers: {summary['rivers']}")
        for name, count in sorted(summary["biomes"].items()):
            print(f"  {name:<10} {count}")

    if args.output:
        with open(args.output, "w") as f:
            json.dump([tile.to_dict() for tile in world.all_tiles()], f)
        logger.info("Tiles written", path=args.output, tiles=len(world))

    return 0


if __name__ == "__main__":
    sys.exit(main())
