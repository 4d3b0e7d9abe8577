"""Coaching tip aggregator.

Joins detector errors with category scores and picks a short, deduplicated,
priority-ordered tip list from the static catalog.
"""

from collections import Counter

import structlog

from rift_coach.contracts.analysis_results import CategoryScores, CoachingTip, DetectedError
from rift_coach.contracts.common import ErrorType
from rift_coach.core.coaching.catalog import CatalogTip, tips_for

logger = structlog.get_logger(__name__)

DEFAULT_MAX_TIPS = 5
DEFAULT_LOW_SCORE_THRESHOLD = 60.0
MAX_RELATED_ERRORS = 3

# Category score field -> catalog key
CATEGORY_ERROR_TYPES: dict[str, str] = {
    "cs": ErrorType.CS_MISSING.value,
    "vision": ErrorType.VISION.value,
    "positioning": ErrorType.POSITIONING.value,
    "objective": ErrorType.OBJECTIVE.value,
    "trading": ErrorType.TRADING.value,
}


def generate_tips(
    errors: list[DetectedError],
    scores: CategoryScores,
    max_tips: int = DEFAULT_MAX_TIPS,
    low_score_threshold: float = DEFAULT_LOW_SCORE_THRESHOLD,
) -> list[CoachingTip]:
    """Select up to ``max_tips`` tips.

    Error types are taken by descending frequency (ties keep first-seen order)
    and contribute all their catalog tips, each linked to up to three of the
    type's errors. Remaining slots are filled from the weakest categories, lowest
    score first, considering only scores below ``low_score_threshold``.
    Priorities are renumbered 1..N in selection order.
    """
    counts = Counter(error.type for error in errors)
    error_ids: dict[str, list[str]] = {}
    for error in errors:
        error_ids.setdefault(error.type, []).append(error.id)

    selected: list[tuple[CatalogTip, list[str]]] = []
    used: set[str] = set()

    def take(candidates: tuple[CatalogTip, ...], related: list[str]) -> None:
        for tip in candidates:
            if len(selected) >= max_tips:
                return
            if tip.id in used:
                continue
            selected.append((tip, related))
            used.add(tip.id)

    # most_common() orders equal counts by first occurrence
    for error_type, _ in counts.most_common():
        take(tips_for(error_type), error_ids[error_type][:MAX_RELATED_ERRORS])

    category_scores = sorted(
        (
            (getattr(scores, field), error_type)
            for field, error_type in CATEGORY_ERROR_TYPES.items()
        ),
        key=lambda item: item[0],
    )
    for score, error_type in category_scores:
        if len(selected) >= max_tips:
            break
        if score < low_score_threshold:
            take(tips_for(error_type), [])

    logger.debug("tips_selected", tips=[tip.id for tip, _ in selected], error_types=len(counts))

    return [
        CoachingTip(
            id=tip.id,
            category=tip.category,
            title=tip.title,
            description=tip.description,
            priority=priority,
            related_errors=related,
        )
        for priority, (tip, related) in enumerate(selected, start=1)
    ]
