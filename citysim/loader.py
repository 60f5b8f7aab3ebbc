"""
Region layout and run configuration loader.

Loads the comma-delimited region layout into a Grid and the run
configuration from YAML (validated against a JSON schema) or from the
legacy "Key: value" text format.
"""

import csv
import json
import yaml
import jsonschema
from pathlib import Path
from typing import List, Optional

from .grid import Grid
from .data_types import SimulationConfig, ZoneType
from .constants import (
    DEFAULT_GRID_WIDTH,
    DEFAULT_GRID_HEIGHT,
    LEGACY_KEY_LAYOUT,
    LEGACY_KEY_TIME_LIMIT,
    LEGACY_KEY_REFRESH_RATE,
    CONFIG_SCHEMA_FILE,
)


class DataLoadError(Exception):
    """Raised when data loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Load YAML file and return parsed dict"""
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataLoadError(f"YAML parse error in {file_path}: {e}")

    if not isinstance(data, dict):
        raise DataLoadError(f"Expected a mapping at top level of {file_path}")
    return data


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Validate data dict against JSON schema"""
    if not schema_path.exists():
        # Schema validation optional
        return

    try:
        with open(schema_path, 'r') as f:
            schema = json.load(f)
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise DataLoadError(f"Validation error in {data_path}: {e.message}")
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}")


# ============================================================================
# Run Configuration
# ============================================================================

def _parse_positive_int(value, key: str, file_path: Path) -> int:
    try:
        number = int(str(value).strip())
    except ValueError:
        raise DataLoadError(f"{key} must be an integer in {file_path}, got {value!r}")
    if number < 1:
        raise DataLoadError(f"{key} must be >= 1 in {file_path}, got {number}")
    return number


def _resolve_layout_path(layout: Optional[str], config_path: Path) -> Optional[str]:
    if not layout:
        return None
    layout_path = Path(layout)
    if not layout_path.is_absolute():
        layout_path = config_path.parent / layout_path
    return str(layout_path)


def load_legacy_config(file_path: Path) -> SimulationConfig:
    """
    Load the legacy text config.

    Recognised lines (whitespace in values is ignored, unknown keys skipped):
        Region Layout: region1.csv
        Time Limit: 20
        Refresh Rate: 1
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    config = SimulationConfig(width=DEFAULT_GRID_WIDTH, height=DEFAULT_GRID_HEIGHT)

    with open(file_path, 'r') as f:
        for line in f:
            key, sep, value = line.partition(':')
            if not sep:
                continue
            key = key.strip()
            value = value.replace(' ', '').strip()

            if key == LEGACY_KEY_LAYOUT:
                config.region_layout = _resolve_layout_path(value, file_path)
            elif key == LEGACY_KEY_TIME_LIMIT:
                config.time_limit = _parse_positive_int(value, key, file_path)
            elif key == LEGACY_KEY_REFRESH_RATE:
                config.refresh_rate = _parse_positive_int(value, key, file_path)

    return config


def load_yaml_config(file_path: Path, schema_dir: Optional[Path] = None) -> SimulationConfig:
    """Load run configuration from YAML"""
    file_path = Path(file_path)
    data = load_yaml(file_path)

    # Validate if schema available
    if schema_dir:
        schema_path = Path(schema_dir) / CONFIG_SCHEMA_FILE
        validate_against_schema(data, schema_path, file_path)

    config = SimulationConfig(region_layout=_resolve_layout_path(data.get('region_layout'), file_path))

    if 'time_limit' in data:
        config.time_limit = _parse_positive_int(data['time_limit'], 'time_limit', file_path)
    if 'refresh_rate' in data:
        config.refresh_rate = _parse_positive_int(data['refresh_rate'], 'refresh_rate', file_path)
    if data.get('width') is not None:
        config.width = _parse_positive_int(data['width'], 'width', file_path)
    if data.get('height') is not None:
        config.height = _parse_positive_int(data['height'], 'height', file_path)

    return config


def load_config(file_path: Path, schema_dir: Optional[Path] = None) -> SimulationConfig:
    """Load run configuration, picking the format from the file suffix"""
    file_path = Path(file_path)
    if file_path.suffix.lower() in ('.yaml', '.yml'):
        return load_yaml_config(file_path, schema_dir)
    return load_legacy_config(file_path)


# ============================================================================
# Region Layout
# ============================================================================

def read_layout_rows(file_path: Path) -> List[List[ZoneType]]:
    """
    Read a comma-delimited layout into rows of zones.

    Blank lines are skipped. Each field maps through ZoneType.from_symbol,
    so unknown symbols and empty fields become EMPTY.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    rows = []
    with open(file_path, 'r', newline='') as f:
        for fields in csv.reader(f):
            if not fields or all(not value.strip() for value in fields):
                continue
            rows.append([ZoneType.from_symbol(value) for value in fields])

    if not rows:
        raise DataLoadError(f"Region layout is empty: {file_path}")

    return rows


def load_region_layout(
    file_path: Path,
    width: Optional[int] = None,
    height: Optional[int] = None
) -> Grid:
    """
    Build a Grid from a layout file.

    Args:
        file_path: Comma-delimited layout (one row per line)
        width: Grid width (None = widest row)
        height: Grid height (None = number of rows)

    Returns:
        Grid with zones assigned, population/pollution/resources at 0.
        Rows or columns beyond the given size are ignored; missing ones stay EMPTY.
    """
    rows = read_layout_rows(file_path)

    if width is None:
        width = max(len(row) for row in rows)
    if height is None:
        height = len(rows)

    grid = Grid(width, height)
    for y, row in enumerate(rows[:height]):
        for x, zone in enumerate(row[:width]):
            grid.set_zone(x, y, zone)

    return grid


def load_simulation_inputs(config_path: Path, schema_dir: Optional[Path] = None) -> dict:
    """
    Load config and the region it names.

    Returns dict with keys: config, grid
    """
    config = load_config(config_path, schema_dir)
    if not config.region_layout:
        raise DataLoadError(f"No region layout given in {config_path}")

    grid = load_region_layout(Path(config.region_layout), config.width, config.height)

    return {
        'config': config,
        'grid': grid,
    }
