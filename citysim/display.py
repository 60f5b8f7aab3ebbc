"""
Console rendering and interactive prompts.

Formatting functions return strings so they can be tested and reused; the
print_* helpers and the area prompt are the only places that touch the
console.
"""

from typing import Callable, Optional, Tuple

from .grid import Grid
from .data_types import AreaAnalysis, RunResult, TerminalReason


def render_region(grid: Grid) -> str:
    """
    Render the grid, one text row per grid row.

    Cells with population show the number, others show their zone symbol.
    """
    lines = []
    for y in range(grid.height):
        cells = []
        for x in range(grid.width):
            population = int(grid.population[y, x])
            cells.append(str(population) if population > 0 else str(grid.zones[y, x]))
        lines.append(" ".join(cells))
    return "\n".join(lines)


def format_resources(grid: Grid) -> str:
    return (f"Available Workers: {grid.available_workers}\n"
            f"Available Goods: {grid.available_goods}")


def format_step_report(step_number: int, grid: Grid) -> str:
    """Header, resources and region for one refresh"""
    title = "Initial Region State (Time Step 0):" if step_number == 0 else f"Time Step {step_number}:"
    return f"{title}\n{format_resources(grid)}\n{render_region(grid)}\n"


def format_summary(summary: dict) -> str:
    """Final summary block from CitySimulation.get_summary()"""
    return ("--- Final Simulation Summary ---\n"
            f"Total Population: {summary['total_population']}\n"
            f"Total Pollution: {summary['total_pollution']}\n"
            f"Total Available Workers: {summary['available_workers']}\n"
            f"Total Available Goods: {summary['available_goods']}")


def format_run_outcome(result: RunResult, step_count: int) -> str:
    if result.reason is TerminalReason.CONVERGED:
        return (f"Simulation halted at time step {step_count}: "
                f"no visible or functional changes detected.")
    return f"Simulation completed after {step_count} time steps."


def format_area_analysis(analysis: AreaAnalysis) -> str:
    return (f"Area Analysis from ({analysis.x1}, {analysis.y1}) "
            f"to ({analysis.x2}, {analysis.y2}):\n"
            f"Total Population: {analysis.population}\n"
            f"Total Pollution: {analysis.pollution}")


def parse_coordinate_pair(text: str) -> Tuple[int, int]:
    """
    Parse "x, y" or "x y" into two integers.

    Raises:
        ValueError: If the text does not hold exactly two integers
    """
    parts = text.replace(',', ' ').split()
    if len(parts) != 2:
        raise ValueError(f"Expected two integers, got {text!r}")
    return int(parts[0]), int(parts[1])


def is_valid_area(x1: int, y1: int, x2: int, y2: int, width: int, height: int) -> bool:
    return 0 <= x1 <= x2 < width and 0 <= y1 <= y2 < height


def prompt_for_area(
    width: int,
    height: int,
    input_fn: Optional[Callable[[str], str]] = None,
    output_fn: Optional[Callable[[str], None]] = None
) -> Tuple[int, int, int, int]:
    """
    Ask for an analysis rectangle until a valid one is entered.

    Args:
        width, height: Grid dimensions used for validation
        input_fn: Line reader (default: builtin input)
        output_fn: Message writer (default: print)

    Returns:
        (x1, y1, x2, y2) within bounds with x1 <= x2 and y1 <= y2

    Raises:
        EOFError: If input runs out before a valid rectangle is read
    """
    if input_fn is None:
        input_fn = input
    if output_fn is None:
        output_fn = print

    output_fn("Enter the coordinates for area analysis (x1, y1) to (x2, y2):")

    while True:
        first = input_fn("x1, y1: ")
        second = input_fn("x2, y2: ")
        try:
            x1, y1 = parse_coordinate_pair(first)
            x2, y2 = parse_coordinate_pair(second)
        except ValueError:
            output_fn("Invalid input. Please enter valid coordinates within the grid dimensions.")
            continue

        if is_valid_area(x1, y1, x2, y2, width, height):
            return x1, y1, x2, y2

        output_fn("Invalid input. Please enter valid coordinates within the grid dimensions.")


def print_step_report(step_number: int, grid: Grid):
    print(format_step_report(step_number, grid))


def print_summary(summary: dict):
    print()
    print(format_summary(summary))
