"""Game phase classification shared by every detector.

Keeping a single classifier means the CS, vision and objective benchmarks all
agree on where early game ends.
"""

from rift_coach.contracts.common import GamePhase

EARLY_GAME_END_MS = 14 * 60_000
MID_GAME_END_MS = 25 * 60_000


def classify_phase(timestamp_ms: int | float) -> GamePhase:
    """Map an in-game timestamp (ms) to early (<14 min), mid (14-25) or late (>=25)."""
    if timestamp_ms < EARLY_GAME_END_MS:
        return GamePhase.EARLY
    if timestamp_ms < MID_GAME_END_MS:
        return GamePhase.MID
    return GamePhase.LATE


def format_game_time(seconds: int) -> str:
    """Format seconds as ``m:ss``."""
    return f"{seconds // 60}:{seconds % 60:02d}"
