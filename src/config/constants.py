"""Wash station rules, decay rates, and run defaults."""

# =============================================================================
# Washing Stations
# =============================================================================

# Every station starts a run with this much cleaning capacity
INITIAL_CLEANING_LEVEL = 100.0

SEQUENTIAL_RULE = "sequential"
RANDOMIZED_RULE = "randomized"

# Cleaning level lost per wash, by rule
DECAY_PER_WASH = {
    SEQUENTIAL_RULE: 20.0,
    RANDOMIZED_RULE: 10.0,
}

# Rule names accepted in input files -> canonical rule
# "ordered" / "random" are the names used by existing input.json files
RULE_ALIASES = {
    "sequential": SEQUENTIAL_RULE,
    "ordered": SEQUENTIAL_RULE,
    "randomized": RANDOMIZED_RULE,
    "random": RANDOMIZED_RULE,
}

# =============================================================================
# Run Defaults
# =============================================================================

DEFAULT_INPUT_FILE = "input.json"
DEFAULT_OUTPUT_FILE = "output.json"
WASH_LOG_FILE = "wash_log.parquet"

# Safety valve for the CLI; the engine itself runs unbounded unless asked
DEFAULT_MAX_ROUNDS = 10_000

# Most recent round summaries kept by the engine
ROUND_SUMMARY_HISTORY = 1_000
