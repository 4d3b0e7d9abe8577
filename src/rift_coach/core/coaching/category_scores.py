"""Derive the five coaching category scores for the tip aggregator."""

from collections.abc import Iterable

from rift_coach.contracts.analysis_results import CategoryScores, DetectedError, SubScores
from rift_coach.contracts.common import ErrorType, Severity
from rift_coach.contracts.match import MatchParticipant

SEVERITY_PENALTIES: dict[str, float] = {
    Severity.CRITICAL.value: 20,
    Severity.HIGH.value: 12,
    Severity.MEDIUM.value: 6,
    Severity.LOW.value: 3,
}
DEATH_PENALTY = 10
NEUTRAL_SCORE = 100.0


def clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


def severity_penalty(errors: Iterable[DetectedError], error_type: ErrorType) -> float:
    """Sum of severity penalties of the errors of one type."""
    return sum(SEVERITY_PENALTIES[e.severity] for e in errors if e.type == error_type)


def derive_category_scores(
    participant: MatchParticipant,
    errors: list[DetectedError],
    sub_scores: SubScores | None,
) -> CategoryScores:
    """Category scores from the player's sub-scores, deaths and objective errors.

    * cs, vision: the scorer's sub-scores
    * positioning: 100 minus 10 per death
    * objective: 100 minus the severity penalties of objective errors
    * trading: the KDA sub-score

    Without sub-scores (scorer failed) cs, vision and trading stay neutral at 100
    so they never pull in tips on their own.
    """
    return CategoryScores(
        cs=sub_scores.cs if sub_scores else NEUTRAL_SCORE,
        vision=sub_scores.vision if sub_scores else NEUTRAL_SCORE,
        positioning=clamp_score(NEUTRAL_SCORE - DEATH_PENALTY * participant.deaths),
        objective=clamp_score(NEUTRAL_SCORE - severity_penalty(errors, ErrorType.OBJECTIVE)),
        trading=sub_scores.kda if sub_scores else NEUTRAL_SCORE,
    )
