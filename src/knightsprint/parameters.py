"""Game parameters for KnightSprint.

This module is the SINGLE SOURCE OF TRUTH for tunable engine constants.

Parameter Categories:
- Board: Sizing and start placement
- Roster: Player counts
- Obstacles: Rejection sampling budget
- Strategies: Heuristic weights and defaults
- Pacing: Orchestrator delays

Usage:
    from knightsprint.parameters import OBSTACLE_DRAW_BUDGET, DEFAULT_STRATEGY
"""

# =============================================================================
# BOARD PARAMETERS
# =============================================================================

MIN_BOARD_SIZE = 3
"""Smallest playable board edge.

Below 3x3 no knight move stays on the board.
"""

DEFAULT_BOARD_SIZE = 8

START_PAD_DIVISOR = 5
"""Start corners are inset by floor(board_size / START_PAD_DIVISOR).

Examples:
    - 8x8:   pad 1, starts (1,1), (6,6), (1,6), (6,1)
    - 10x10: pad 2, starts (2,2), (7,7), (2,7), (7,2)
    - 4x4:   pad 0, starts on the corners
"""


# =============================================================================
# ROSTER PARAMETERS
# =============================================================================

MIN_PLAYERS = 2
MAX_PLAYERS = 4
DEFAULT_PLAYER_COUNT = 2
DEFAULT_CPU_COUNT = 1


# =============================================================================
# OBSTACLE PARAMETERS
# =============================================================================

OBSTACLE_DRAW_BUDGET = 2000
"""Maximum number of random cell draws when placing obstacles.

If the requested obstacle count cannot be reached within this many draws the
engine accepts fewer obstacles instead of failing.
"""


# =============================================================================
# STRATEGY PARAMETERS
# =============================================================================

DEFAULT_STRATEGY = "mobility"
"""Strategy used when a configured name is unknown."""

MAX_KNIGHT_MOBILITY = 8
"""Number of knight offsets; an opponent reduced to zero moves scores 8."""

AGGRESSOR_REDUCTION_WEIGHT = 2
"""Multiplier on summed opponent mobility reduction in the aggressor score."""

BALANCED_AGGRESS_SLOPE = 2.0
"""aggress_weight = BALANCED_AGGRESS_SLOPE * density."""

BALANCED_MOBILITY_SLOPE = 0.5
"""mobility_weight = 1 - BALANCED_MOBILITY_SLOPE * density."""

BALANCED_NOISE_SCALE = 0.2
"""Seeded noise added to each balanced score to break ties."""

TIE_BREAK_THRESHOLD = 0.5
"""A tie replaces the current best when the generator draw exceeds this."""


# =============================================================================
# PACING PARAMETERS
# =============================================================================

AI_THINK_SECONDS = 0.32
"""Delay before AI intents are computed. Pacing only, never affects outcomes."""

SEED_UPPER_BOUND = 99999
"""Exclusive bound for seeds picked when the caller supplies none."""
