#!/usr/bin/env python3
"""
FLARE Visualization Script

Usage:
    python scripts/visualize.py [OPTIONS]

Examples:
    # Bundle direct flights between airports
    python scripts/visualize.py --mode routes --output routes.html

    # Bundle walks over the monthly airport grid
    python scripts/visualize.py --mode walks --output walks.html

    # Use other data files
    python scripts/visualize.py --airports airports.csv --flights flights.csv
"""

import sys
import argparse
import traceback
import webbrowser
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from flare.config import Config
from flare.visualization import RoutePlotter, WalkPlotter
from flare.visualization.constants import MAP_TILE_URLS


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        description="FLARE Route Visualizer - Create edge-bundled route maps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Bundle direct flights:
    python3 scripts/visualize.py --mode routes

  Bundle walks over the monthly grid:
    python3 scripts/visualize.py --mode walks --open
        """,
    )

    # Data options
    parser.add_argument(
        "--config",
        type=str,
        default="data/config.yaml",
        help="Path to config file (default: data/config.yaml)",
    )
    parser.add_argument(
        "--mode",
        choices=["routes", "walks"],
        default="routes",
        help="Bundling mode (default: routes)",
    )
    parser.add_argument("--airports", type=str, help="Airport CSV (default: from config)")
    parser.add_argument("--flights", type=str, help="Flight CSV (default: from config)")
    parser.add_argument("--walks", type=str, help="Walk CSV (default: from config)")

    # Output options
    parser.add_argument(
        "--output", type=str, help="Output filename (default: <mode>.html)"
    )
    parser.add_argument(
        "--open", action="store_true", help="Open the map in a browser when done"
    )

    # Map options
    parser.add_argument(
        "--style",
        type=str,
        choices=sorted(MAP_TILE_URLS),
        help="Map style (default: from config)",
    )
    parser.add_argument("--zoom", type=int, help="Initial zoom level (default: from config)")
    parser.add_argument(
        "--max-ticks", type=int, help="Cap on layout ticks (default: from config)"
    )

    return parser


def main(argv=None):
    """Main entry point for visualization."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load configuration
    config = Config(args.config)

    options = {
        "airports_path": args.airports,
        "flights_path": args.flights,
        "style": args.style,
        "zoom": args.zoom,
        "max_ticks": args.max_ticks,
    }
    output = args.output or f"{args.mode}.html"

    try:
        if args.mode == "walks":
            plotter = WalkPlotter(config, walks_path=args.walks, **options)
        else:
            plotter = RoutePlotter(config, **options)

        plotter.plot(output)

        if args.open:
            webbrowser.open(Path(output).resolve().as_uri())

    except FileNotFoundError as e:
        print(f"❌ {e}")
        print("   Check the data section of your config or pass --airports/--flights")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
