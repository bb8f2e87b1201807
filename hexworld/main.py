import argparse
import json
import random


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a hexagonal terrain map")
    parser.add_argument("--seed", type=int, default=None, help="generation seed (default: config file, else 0)")
    parser.add_argument("--radius", type=int, default=None, help="map radius in hex rings")
    parser.add_argument("--road-method", default=None,
                        choices=["highways", "organic", "organic+highways"])
    parser.add_argument("--config", default=None, help="JSON file with MapConfig fields")
    parser.add_argument("--preview", action="store_true", help="print an ASCII preview")
    parser.add_argument("--no-log-files", action="store_true",
                        help="log to stdout only (no log_dump directory)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def build_config(args):
    from hexworld.maps.config import MapConfig

    data = {}
    if args.config:
        with open(args.config, encoding="utf-8") as f:
            data = json.load(f)
    if args.seed is not None:
        data["seed"] = args.seed
    if args.radius is not None:
        data["map_radius"] = args.radius
    if args.road_method is not None:
        data["road_method"] = args.road_method
    return MapConfig.from_dict(data)


# ------------------------ # ENTRY POINT # ------------------------

def main(argv=None):
    from hexworld.config import setup_logging
    from hexworld.maps.mapGen import MapGenerator
    from hexworld.maps.render import ascii_preview, assign_building_types

    args = parse_args(argv)

    # Initialize logging first
    logger = setup_logging(level=args.log_level, write_files=not args.no_log_files)

    logger.info("=" * 60)
    logger.info("Map generation started")

    try:
        config = build_config(args)
        generator = MapGenerator(config)
        grid = generator.generate()

        stats = generator.get_statistics()
        for key, value in stats.items():
            logger.info(f"{key}: {value}")

        if args.preview:
            # renderer draws use their own RNG, separate from generation
            assign_building_types(grid, random.Random(config.seed), generator.settlement_table)
            print(ascii_preview(grid))

    except Exception as e:
        logger.critical(f"Critical error in main: {e}", exc_info=True)
        raise
    finally:
        logger.info("Map generation terminated")
        logger.info("=" * 60)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
