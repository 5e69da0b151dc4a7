"""Engine exceptions for KnightSprint.

Player-input problems are never raised: bad intents are dropped and
rejected submissions return False. Only driving the engine in a way the
state machine does not allow is an error.
"""


class GameOverError(RuntimeError):
    """Raised when a round is requested after the game has ended."""
