"""
Central configuration constants for city simulation.

Defines growth thresholds, resource costs, ordering priorities and
run defaults used across multiple modules.
"""

# ============================================================================
# Zone Symbols
# ============================================================================

# Layout / display symbols (one character per cell)
SYMBOL_RESIDENTIAL = 'R'
SYMBOL_INDUSTRIAL = 'I'
SYMBOL_COMMERCIAL = 'C'
SYMBOL_TRANSMISSION = 'T'
SYMBOL_PLANT = 'P'
SYMBOL_EMPTY = '-'
SYMBOL_BLOCKED = '#'

# Zone symbols that count as a power source for adjacency checks
POWER_SOURCE_SYMBOLS = (SYMBOL_TRANSMISSION, SYMBOL_PLANT)


# ============================================================================
# Growth Rules
# ============================================================================

# Residential cells stop growing at this population
RESIDENTIAL_MAX_POPULATION = 5

# Industrial and commercial cells grow once (0 -> 1) and stay there
SINGLE_GROWTH_MAX_POPULATION = 1

# Resources consumed per industrial growth (goods produced = new population)
INDUSTRIAL_WORKER_COST = 2

# Resources consumed per commercial growth
COMMERCIAL_WORKER_COST = 1
COMMERCIAL_GOODS_COST = 1

# Workers released per residential growth
RESIDENTIAL_WORKER_YIELD = 1

# Candidate ordering: higher value is applied first (Commercial > Industrial > Residential)
ZONE_GROWTH_PRIORITY = {
    SYMBOL_COMMERCIAL: 3,
    SYMBOL_INDUSTRIAL: 2,
    SYMBOL_RESIDENTIAL: 1,
}


# ============================================================================
# Pollution
# ============================================================================

# Pollution lost per ring away from an industrial source (floored at 0)
POLLUTION_DECAY_PER_RING = 1


# ============================================================================
# Run Configuration Defaults
# ============================================================================

# Region size used by the legacy text config (no size keys in that format)
DEFAULT_GRID_WIDTH = 8
DEFAULT_GRID_HEIGHT = 9

# Step budget when the config does not name one
DEFAULT_TIME_LIMIT = 20

# Print the region every N steps
DEFAULT_REFRESH_RATE = 1

# Legacy text config keys ("Key: value" lines)
LEGACY_KEY_LAYOUT = 'Region Layout'
LEGACY_KEY_TIME_LIMIT = 'Time Limit'
LEGACY_KEY_REFRESH_RATE = 'Refresh Rate'

# Schema file name looked up in the schema directory
CONFIG_SCHEMA_FILE = 'config.schema.json'


# ============================================================================
# Performance Configuration
# ============================================================================

# Step timing window for rolling average
TICK_TIME_WINDOW = 100  # Number of steps to average
