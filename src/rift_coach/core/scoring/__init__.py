"""Performance scoring - composite 0-100 score per participant and match ranking."""

from rift_coach.core.scoring.calculator import (
    calculate_kda,
    calculate_scoreboard,
    calculate_sub_scores,
    composite_score,
    score_label,
    score_match,
)
from rift_coach.core.scoring.models import DEFAULT_WEIGHTS, ScoreWeights

__all__ = [
    "ScoreWeights",
    "DEFAULT_WEIGHTS",
    "calculate_kda",
    "calculate_sub_scores",
    "composite_score",
    "calculate_scoreboard",
    "score_match",
    "score_label",
]
