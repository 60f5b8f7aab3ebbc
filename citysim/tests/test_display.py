"""
Tests for console rendering, the area prompt and the command line entry point.
"""

import pytest

from citysim.display import (
    render_region,
    format_step_report,
    format_summary,
    format_area_analysis,
    format_run_outcome,
    parse_coordinate_pair,
    prompt_for_area,
)
from citysim.data_types import AreaAnalysis, RunResult, TerminalReason
from citysim.main import main
from citysim.tests.helpers import make_grid, DATA_ROOT


def test_render_region_shows_population_or_symbol():
    grid = make_grid(["PRI", "#-C"], population=[[0, 3, 0], [0, 0, 1]])

    assert render_region(grid) == "P 3 I\n# - 1"


def test_step_report_header():
    grid = make_grid(["RT"], workers=4, goods=2)

    initial = format_step_report(0, grid)
    assert initial.startswith("Initial Region State (Time Step 0):")
    assert "Available Workers: 4" in initial
    assert "Available Goods: 2" in initial
    assert format_step_report(3, grid).startswith("Time Step 3:")


def test_summary_and_area_text():
    summary = {
        'total_population': 15,
        'total_pollution': 4,
        'available_workers': 9,
        'available_goods': 1,
    }
    text = format_summary(summary)
    assert "Total Population: 15" in text
    assert "Total Available Goods: 1" in text

    area = AreaAnalysis(x1=0, y1=1, x2=2, y2=3, population=7, pollution=2)
    assert format_area_analysis(area) == (
        "Area Analysis from (0, 1) to (2, 3):\n"
        "Total Population: 7\n"
        "Total Pollution: 2"
    )


def test_run_outcome_text():
    converged = RunResult(reason=TerminalReason.CONVERGED, steps_executed=6, steps_with_change=5)
    exhausted = RunResult(reason=TerminalReason.BUDGET_EXHAUSTED, steps_executed=20, steps_with_change=20)

    assert "halted at time step 6" in format_run_outcome(converged, 6)
    assert format_run_outcome(exhausted, 20) == "Simulation completed after 20 time steps."


@pytest.mark.parametrize("text,expected", [
    ("1, 2", (1, 2)),
    ("3 4", (3, 4)),
    (" 0,0 ", (0, 0)),
])
def test_parse_coordinate_pair(text, expected):
    assert parse_coordinate_pair(text) == expected


@pytest.mark.parametrize("text", ["", "1", "1, 2, 3", "a, b"])
def test_parse_coordinate_pair_rejects(text):
    with pytest.raises(ValueError):
        parse_coordinate_pair(text)


def test_prompt_retries_until_valid():
    answers = iter([
        "x, y", "1, 1",   # not numbers
        "2, 2", "1, 1",   # inverted
        "0, 0", "8, 2",   # x2 outside width 8
        "1, 2", "3, 4",
    ])
    messages = []

    area = prompt_for_area(8, 9, input_fn=lambda prompt: next(answers), output_fn=messages.append)

    assert area == (1, 2, 3, 4)
    assert sum("Invalid input" in m for m in messages) == 3


def test_prompt_propagates_eof():
    def closed(prompt):
        raise EOFError

    with pytest.raises(EOFError):
        prompt_for_area(3, 3, input_fn=closed, output_fn=lambda m: None)


def test_main_runs_yaml_config(capsys):
    code = main([str(DATA_ROOT / "config.yaml"), "--schema-dir", str(DATA_ROOT / "schemas"), "--no-prompt"])
    out = capsys.readouterr().out

    assert code == 0
    assert "[OK] Region loaded: 8x9" in out
    assert "Initial Region State (Time Step 0):" in out
    assert "Simulation halted" in out
    assert "--- Final Simulation Summary ---" in out


def test_main_step_override(capsys):
    code = main([str(DATA_ROOT / "config.txt"), "--steps", "2", "--refresh-rate", "2", "--no-prompt"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Time Step 1:" not in out
    assert "Time Step 2:" in out
    assert "Simulation completed after 2 time steps." in out


def test_main_reports_missing_config(tmp_path, capsys):
    code = main([str(tmp_path / "nope.yaml"), "--no-prompt"])

    assert code == 1
    assert "[FAIL]" in capsys.readouterr().out


def test_main_area_prompt(monkeypatch, capsys):
    answers = iter(["0, 0", "1, 1"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    code = main([str(DATA_ROOT / "config.txt")])
    out = capsys.readouterr().out

    assert code == 0
    assert "Area Analysis from (0, 0) to (1, 1):" in out
    # P + T + T + R at the cap
    assert "Total Population: 5" in out
