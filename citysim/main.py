"""
Command line entry point.

Loads the config and region, runs the simulation printing the region on
the refresh cadence, then prints the final summary and runs the
interactive area analysis.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .loader import load_simulation_inputs, DataLoadError
from .simulation import CitySimulation
from .display import (
    format_area_analysis,
    format_run_outcome,
    print_step_report,
    print_summary,
    prompt_for_area,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Zoned city growth simulation')
    parser.add_argument('config', nargs='?', default='config.txt',
                        help='Config file (.yaml/.yml or legacy text, default: config.txt)')
    parser.add_argument('--schema-dir', type=Path, default=None,
                        help='Directory holding config.schema.json')
    parser.add_argument('--steps', type=int, default=None,
                        help='Override the configured time limit')
    parser.add_argument('--refresh-rate', type=int, default=None,
                        help='Override the configured refresh rate')
    parser.add_argument('--no-prompt', action='store_true',
                        help='Skip the interactive area analysis')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        data = load_simulation_inputs(Path(args.config), args.schema_dir)
    except DataLoadError as e:
        print(f"[FAIL] {e}")
        return 1

    config = data['config']
    if args.steps is not None:
        config.time_limit = args.steps
    if args.refresh_rate is not None:
        config.refresh_rate = args.refresh_rate
    if config.time_limit < 0 or config.refresh_rate < 1:
        print(f"[FAIL] Invalid run settings: steps={config.time_limit}, "
              f"refresh rate={config.refresh_rate}")
        return 1

    sim = CitySimulation(data['grid'], config)
    print(f"[OK] Region loaded: {sim.grid.width}x{sim.grid.height}, "
          f"time limit={config.time_limit}, refresh rate={config.refresh_rate}")
    print()
    print_step_report(0, sim.grid)

    def report(simulation: CitySimulation, result):
        if result.step_number % config.refresh_rate == 0 or result.converged:
            print_step_report(result.step_number, simulation.grid)

    outcome = sim.run(on_step=report)
    print(format_run_outcome(outcome, sim.step_count))
    print_summary(sim.get_summary())

    if args.no_prompt:
        return 0

    print()
    try:
        x1, y1, x2, y2 = prompt_for_area(sim.grid.width, sim.grid.height)
    except EOFError:
        print("\nNo area entered, skipping analysis.")
        return 0

    print(format_area_analysis(sim.analyze_area(x1, y1, x2, y2)))
    return 0


if __name__ == '__main__':
    sys.exit(main())
