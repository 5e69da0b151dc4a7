"""KnightSprint: a deterministic simultaneous-turn knight territory game.

Every round all knights choose a destination in secret, then all moves
resolve at once. Visited squares stay blocked for the rest of the game; a
knight with nowhere to go is eliminated. One seed fixes every random outcome.
"""

__version__ = "0.1.0"
