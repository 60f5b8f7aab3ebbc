"""
City simulation step controller.

Owns the grid for the lifetime of a run, executes steps (growth, then
pollution), detects convergence and reports structured results. The
controller never prints; display.py and main.py consume its results.
"""

import time
from typing import Callable, List, Optional

from .grid import Grid
from .data_types import AreaAnalysis, RunResult, SimulationConfig, StepResult, TerminalReason
from .growth import resolve_growth_report
from .pollution import spread_pollution
from .constants import TICK_TIME_WINDOW


class CitySimulation:
    """
    Main simulation class for the zoned city.

    STEP CONTRACT:

    1. Snapshot the grid (kept only for this step).
    2. Growth: candidates collected from the pre-step grid, ordered, applied
       under the worker/goods budget.
    3. Pollution: field recomputed from the post-growth grid.
    4. Compare with the snapshot. If nothing changed, or neither phase
       reported activity, the simulation has converged and halts.
    """

    def __init__(self, grid: Grid, config: Optional[SimulationConfig] = None):
        """
        Args:
            grid: Fully populated grid (every cell has a zone). Owned by the
                simulation from here on.
            config: Run configuration (defaults used if omitted)
        """
        self.grid: Grid = grid
        self.config: SimulationConfig = config if config is not None else SimulationConfig()

        self.step_count: int = 0
        self.converged: bool = False
        self.last_result: Optional[StepResult] = None

        # Performance metrics
        self._tick_times: List[float] = []
        self._tick_time_sum: float = 0.0
        self._tick_time_window: int = TICK_TIME_WINDOW

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self) -> StepResult:
        """
        Advance the simulation by one step.

        Returns:
            StepResult describing what changed. ``converged`` is True when
            this step was a fixed point.
        """
        start_time = time.perf_counter()

        previous = self.grid.snapshot()

        growth_report = resolve_growth_report(self.grid)
        pollution_spread = spread_pollution(self.grid)

        grid_changed = not previous.same_cells(self.grid.snapshot())
        converged = (not grid_changed) or (not growth_report.changed and not pollution_spread)

        self.step_count += 1
        if converged:
            self.converged = True

        result = StepResult(
            step_number=self.step_count,
            growth_changed=growth_report.changed,
            pollution_spread=pollution_spread,
            grid_changed=grid_changed,
            converged=converged,
            applied_growth=[(c.x, c.y) for c in growth_report.applied],
        )
        self.last_result = result

        self._record_tick_time(time.perf_counter() - start_time)
        return result

    def run(
        self,
        steps: Optional[int] = None,
        on_step: Optional[Callable[['CitySimulation', StepResult], None]] = None
    ) -> RunResult:
        """
        Run until convergence or until the step budget is spent.

        Args:
            steps: Step budget (defaults to config.time_limit)
            on_step: Optional callback invoked after every step, e.g. to
                print the region on the refresh cadence

        Returns:
            RunResult with the terminal reason
        """
        budget = self.config.time_limit if steps is None else steps
        if budget < 0:
            raise ValueError(f"Step budget must be >= 0, got {budget}")

        if self.converged:
            return RunResult(
                reason=TerminalReason.CONVERGED,
                steps_executed=0,
                steps_with_change=0,
                final_step=self.last_result,
            )

        executed = 0
        with_change = 0
        result = None

        for _ in range(budget):
            result = self.step()
            executed += 1
            if result.grid_changed:
                with_change += 1

            if on_step is not None:
                on_step(self, result)

            if result.converged:
                return RunResult(
                    reason=TerminalReason.CONVERGED,
                    steps_executed=executed,
                    steps_with_change=with_change,
                    final_step=result,
                )

        return RunResult(
            reason=TerminalReason.BUDGET_EXHAUSTED,
            steps_executed=executed,
            steps_with_change=with_change,
            final_step=result,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def analyze_area(self, x1: int, y1: int, x2: int, y2: int) -> AreaAnalysis:
        """Population/pollution totals over an inclusive rectangle (BoundsError if invalid)"""
        return self.grid.analyze_area(x1, y1, x2, y2)

    def get_summary(self) -> dict:
        """Totals for the end-of-run report"""
        return {
            'step_count': self.step_count,
            'converged': self.converged,
            'total_population': self.grid.total_population(),
            'total_pollution': self.grid.total_pollution(),
            'available_workers': self.grid.available_workers,
            'available_goods': self.grid.available_goods,
        }

    def get_snapshot(self) -> dict:
        """
        Get complete simulation state snapshot.

        Returns:
            Dict with step_count, grid state, resources, timing
        """
        return {
            'step_count': self.step_count,
            'converged': self.converged,
            'grid': self.grid.snapshot().to_dict(),
            'timing': self.get_tick_stats(),
        }

    def get_tick_stats(self) -> dict:
        """
        Get current step timing statistics.

        Returns:
            Dict with step_count, avg_tick_time_ms, last_tick_time_ms
        """
        if not self._tick_times:
            return {
                'step_count': self.step_count,
                'avg_tick_time_ms': 0.0,
                'last_tick_time_ms': 0.0
            }

        avg_time = self._tick_time_sum / len(self._tick_times)
        last_time = self._tick_times[-1]

        return {
            'step_count': self.step_count,
            'avg_tick_time_ms': avg_time * 1000.0,
            'last_tick_time_ms': last_time * 1000.0
        }

    def _record_tick_time(self, elapsed: float):
        """
        Record step timing for rolling average.

        Args:
            elapsed: Step time in seconds
        """
        self._tick_times.append(elapsed)
        self._tick_time_sum += elapsed

        # Maintain rolling window
        if len(self._tick_times) > self._tick_time_window:
            removed = self._tick_times.pop(0)
            self._tick_time_sum -= removed
