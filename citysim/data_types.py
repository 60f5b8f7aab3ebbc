"""
Data types shared by the simulation core and its consumers.

Zone enum, per-cell views, step/run results and the run configuration
populated by loader.py.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Tuple
from enum import Enum

from .constants import (
    SYMBOL_RESIDENTIAL,
    SYMBOL_INDUSTRIAL,
    SYMBOL_COMMERCIAL,
    SYMBOL_TRANSMISSION,
    SYMBOL_PLANT,
    SYMBOL_EMPTY,
    SYMBOL_BLOCKED,
    DEFAULT_TIME_LIMIT,
    DEFAULT_REFRESH_RATE,
)


# ============================================================================
# Zones and Cells
# ============================================================================

class ZoneType(Enum):
    """Zone category of a grid cell. Values are the layout symbols."""
    RESIDENTIAL = SYMBOL_RESIDENTIAL
    INDUSTRIAL = SYMBOL_INDUSTRIAL
    COMMERCIAL = SYMBOL_COMMERCIAL
    TRANSMISSION = SYMBOL_TRANSMISSION
    PLANT = SYMBOL_PLANT
    EMPTY = SYMBOL_EMPTY
    BLOCKED = SYMBOL_BLOCKED  # Unbuildable land, behaves like EMPTY

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> 'ZoneType':
        """
        Map a layout field to a zone.

        Only the first non-blank character is significant; anything
        unrecognised (including an empty field) is EMPTY.
        """
        symbol = symbol.strip()
        if not symbol:
            return cls.EMPTY
        try:
            return cls(symbol[0])
        except ValueError:
            return cls.EMPTY


@dataclass(frozen=True)
class Cell:
    """Read-only view of one grid cell"""
    zone_type: ZoneType
    population: int = 0
    pollution: int = 0


@dataclass(frozen=True)
class AreaAnalysis:
    """Population and pollution totals over an inclusive rectangle"""
    x1: int
    y1: int
    x2: int
    y2: int
    population: int
    pollution: int


# ============================================================================
# Step Results
# ============================================================================

class TerminalReason(Enum):
    """Why a run stopped"""
    BUDGET_EXHAUSTED = "budget_exhausted"
    CONVERGED = "converged"


@dataclass
class StepResult:
    """
    Outcome of one simulation step.

    Attributes:
        step_number: 1-based step index within the simulation lifetime
        growth_changed: Growth resolver applied at least one growth
        pollution_spread: At least one industrial source was active
        grid_changed: Any cell's zone, population or pollution differs from
            the pre-step snapshot
        converged: Step was a fixed point (simulation halts)
        applied_growth: (x, y) of every cell that grew, in application order
    """
    step_number: int
    growth_changed: bool
    pollution_spread: bool
    grid_changed: bool
    converged: bool
    applied_growth: List[Tuple[int, int]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'step_number': self.step_number,
            'growth_changed': self.growth_changed,
            'pollution_spread': self.pollution_spread,
            'grid_changed': self.grid_changed,
            'converged': self.converged,
            'applied_growth': [list(pos) for pos in self.applied_growth],
        }


@dataclass
class RunResult:
    """
    Outcome of a multi-step run.

    Attributes:
        reason: Terminal reason (budget exhausted vs. converged)
        steps_executed: Steps run by this call, including a converging step
        steps_with_change: Steps that changed the grid
        final_step: Last StepResult (None if no step ran)
    """
    reason: TerminalReason
    steps_executed: int
    steps_with_change: int
    final_step: Optional[StepResult] = None

    @property
    def converged(self) -> bool:
        return self.reason is TerminalReason.CONVERGED


# ============================================================================
# Run Configuration
# ============================================================================

@dataclass
class SimulationConfig:
    """Run configuration (layout file, step budget, display cadence)"""
    region_layout: Optional[str] = None
    time_limit: int = DEFAULT_TIME_LIMIT
    refresh_rate: int = DEFAULT_REFRESH_RATE
    width: Optional[int] = None  # None = infer from layout
    height: Optional[int] = None  # None = infer from layout
