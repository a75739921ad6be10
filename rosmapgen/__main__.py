"""
ROS Map Generator - CLI Entry Point

Commands:
    generate  - Generate a single occupancy grid map
    batch     - Generate several maps with consecutive seeds
"""

import argparse
import logging
import sys
from pathlib import Path

from .environment import DEFAULT_MAX_PASSES
from .params import ConfigurationError, MapParameters, load_parameters_file
from .pipeline import PipelineConfig, generate_batch, generate_map

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def build_parameters(args) -> MapParameters:
    """
    Merge YAML defaults (``--config``) with command line options.

    Options given on the command line win over the file.
    """
    values = {}
    if args.config:
        values.update(load_parameters_file(Path(args.config)))

    overrides = {
        'room_count': args.complexity,
        'resolution': args.resolution,
        'robot_size': args.robot_size,
        'min_size': args.min_size,
        'max_size': args.max_size,
        'corridor_width': args.corridor_width,
        'seed': args.random_seed,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    if args.obstacles:
        values['obstacles'] = True

    if 'room_count' not in values:
        raise ConfigurationError("complexity (number of rooms) is required")

    return MapParameters(**values)


def build_config(args) -> PipelineConfig:
    return PipelineConfig(
        output_dir=Path(args.output_dir),
        name=args.name,
        export_layout=args.layout,
        max_separation_passes=args.max_passes,
    )


def print_result(result):
    print(f"\nResult: {'SUCCESS' if result.success else 'FAILED'}")
    if result.environment is not None:
        env = result.environment
        print(f"Canvas: {env.width}x{env.height} px")
        print(f"Halls: {len(env.halls)}, corridor segments: {len(env.corridors)}")
    if result.output_paths:
        for kind, path in result.output_paths.items():
            print(f"  {kind}: {path}")
    for error in result.errors:
        print(f"  Error: {error}")


def cmd_generate(args):
    """Generate a single map."""
    params = build_parameters(args)
    result = generate_map(params, build_config(args))
    print_result(result)
    return 0 if result.success else 1


def cmd_batch(args):
    """Generate several maps."""
    params = build_parameters(args)
    results = generate_batch(params, args.count, build_config(args))

    success = len([r for r in results if r.success])
    print(f"\nGenerated: {success}/{len(results)} successful")
    for result in results:
        if not result.success:
            print(f"  {result.name}: {'; '.join(result.errors)}")

    return 0 if success == len(results) else 1


def _add_map_arguments(parser):
    """Options shared by all generation commands."""
    parser.add_argument('--complexity', '-c', type=int,
                        help='Complexity of the environment (number of rooms)')
    parser.add_argument('--resolution', '-r', type=float,
                        help='Map resolution in meters per pixel (default: 0.05)')
    parser.add_argument('--robot-size', '-s', type=float,
                        help='Robot size in meters (default: 0.5)')
    parser.add_argument('--min-size', type=float,
                        help='Minimal room size in meters (requires --max-size)')
    parser.add_argument('--max-size', type=float,
                        help='Maximal room size in meters (requires --min-size)')
    parser.add_argument('--corridor-width', type=float,
                        help='Corridor width in meters (at least the robot size)')
    parser.add_argument('--obstacles', '-o', action='store_true',
                        help='Generate obstacles inside rooms')
    parser.add_argument('--random-seed', type=int,
                        help='Seed for pseudo-random number generation')
    parser.add_argument('--config',
                        help='YAML file with default map parameters')
    parser.add_argument('--output-dir', '-d', default='./out',
                        help='Output directory')
    parser.add_argument('--name', '-n', default='occupancy_grid',
                        help='Output file name (without extension)')
    parser.add_argument('--layout', action='store_true',
                        help='Also export the rectangle layout as JSON')
    parser.add_argument('--max-passes', type=int, default=DEFAULT_MAX_PASSES,
                        help=f'Separation pass ceiling (default: {DEFAULT_MAX_PASSES})')


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="ROS Map Generator - synthetic occupancy grids for robot navigation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 30 rooms at 5 cm/px
  python -m rosmapgen generate -c 30 -d ./out -n office

  # Custom room sizes with obstacles
  python -m rosmapgen generate -c 10 -s 0.4 --min-size 3 --max-size 6 -o

  # Ten maps with seeds 42..51
  python -m rosmapgen batch -c 15 --count 10 --random-seed 42
        """
    )

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Generate command
    gen_parser = subparsers.add_parser('generate', help='Generate a single map')
    _add_map_arguments(gen_parser)
    gen_parser.set_defaults(func=cmd_generate)

    # Batch command
    batch_parser = subparsers.add_parser('batch', help='Generate several maps')
    _add_map_arguments(batch_parser)
    batch_parser.add_argument('--count', type=int, default=10,
                              help='Number of maps (default: 10)')
    batch_parser.set_defaults(func=cmd_batch)

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except ConfigurationError as e:
        logger.error(f"Argument error: {e}")
        return 1
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
