"""Per-match analysis pipeline and async batch runner.

Normalization is the only fatal step. Every later component runs in isolation:
if one raises, its result is replaced by an empty one, its name is recorded in
``failed_components`` and the rest of the report is still produced.
"""

import asyncio
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

import structlog

from rift_coach.config.settings import EngineSettings, get_settings
from rift_coach.contracts.analysis_results import (
    AnalysisStats,
    BatchItem,
    CategoryScores,
    CoachingTip,
    DetectedError,
    DetectorResult,
    HighlightReport,
    MatchAnalysis,
    MatchRequest,
    MatchScoreboard,
)
from rift_coach.contracts.match import MatchDetails
from rift_coach.contracts.timeline import NormalizedMatch, TimelinePayload
from rift_coach.core.coaching import derive_category_scores, generate_tips
from rift_coach.core.detectors import analyze_cs, analyze_objectives, analyze_vision
from rift_coach.core.errors import RiftCoachError
from rift_coach.core.highlights import extract_highlights
from rift_coach.core.normalizer import normalize_match
from rift_coach.core.observability import trace_component
from rift_coach.core.scoring import score_label, score_match
from rift_coach.core.utils.rounding import round_half_up

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Merge order of detector errors in the report
DETECTORS: dict[str, Callable[[NormalizedMatch], DetectorResult]] = {
    "cs": trace_component("cs")(analyze_cs),
    "vision": trace_component("vision")(analyze_vision),
    "objectives": trace_component("objectives")(analyze_objectives),
}

_extract_highlights = trace_component("highlights")(extract_highlights)
_score_match = trace_component("scoring")(score_match)
_generate_tips = trace_component("tips")(generate_tips)


def _isolated(
    name: str,
    func: Callable[..., T],
    fallback: Callable[[], T],
    failed: list[str],
    *args: Any,
) -> T:
    """Run one component; on failure record it and return ``fallback()``."""
    try:
        return func(*args)
    except Exception as e:
        logger.warning(
            "component_isolated",
            component=name,
            error_type=type(e).__name__,
            error_message=str(e),
        )
        failed.append(name)
        return fallback()


def analyze_match(
    timeline: TimelinePayload | Mapping[str, Any],
    details: MatchDetails | Mapping[str, Any],
    puuid: str,
    duration_seconds: int | None = None,
    *,
    settings: EngineSettings | None = None,
) -> MatchAnalysis:
    """Analyse one match for one player.

    Args:
        timeline: Provider timeline payload (model or camelCase dict)
        details: Provider match-detail payload (model or camelCase dict)
        puuid: Target player
        duration_seconds: Game duration; defaults to the details' ``gameDuration``
        settings: Engine settings; defaults to ``get_settings()``

    Returns:
        MatchAnalysis with errors merged in detector order (cs, vision,
        objectives); callers sort by timestamp if they need a timeline.

    Raises:
        MalformedTimelineError: the match cannot be analysed at all.
    """
    settings = settings or get_settings()
    match = normalize_match(timeline, details, puuid, duration_seconds)
    player = match.player
    failed: list[str] = []

    detector_results = {
        name: _isolated(name, detector, DetectorResult, failed, match)
        for name, detector in DETECTORS.items()
    }
    report = _isolated(
        "highlights",
        _extract_highlights,
        lambda: HighlightReport(player_champion=player.champion_name),
        failed,
        match,
    )
    scoreboard = _isolated("scoring", _score_match, MatchScoreboard, failed, match)

    errors: list[DetectedError] = [
        error for result in detector_results.values() for error in result.errors
    ]

    target_score = scoreboard.score_for(puuid)
    category_scores = derive_category_scores(
        player, errors, target_score.sub_scores if target_score else None
    )
    tips: list[CoachingTip] = _isolated(
        "tips",
        _generate_tips,
        list,
        failed,
        errors,
        category_scores,
        settings.max_tips,
        settings.low_score_threshold,
    )

    overall = min(target_score.total_score, 100.0) if target_score else 0.0
    summary = _summarize(overall, category_scores, report, errors)

    logger.info(
        "match_analyzed",
        match_id=match.match_id,
        participant_id=player.participant_id,
        errors=len(errors),
        tips=len(tips),
        clips=len(report.clips),
        failed_components=failed,
    )

    return MatchAnalysis(
        match_id=match.match_id,
        puuid=puuid,
        participant_id=player.participant_id,
        champion_name=player.champion_name,
        duration_seconds=match.duration_seconds,
        errors=errors,
        stats={name: result.stats for name, result in detector_results.items()},
        tips=tips,
        highlights=report.events,
        clips=report.clips,
        ranking=scoreboard.ranking,
        scores=scoreboard.scores,
        summary=summary,
        failed_components=failed,
    )


def _summarize(
    overall: float,
    category_scores: CategoryScores,
    report: HighlightReport,
    errors: list[DetectedError],
) -> AnalysisStats:
    overall = round_half_up(overall, 1)
    return AnalysisStats(
        overall_score=overall,
        score_label=score_label(overall),
        cs_score=round_half_up(category_scores.cs, 1),
        vision_score=round_half_up(category_scores.vision, 1),
        positioning_score=round_half_up(category_scores.positioning, 1),
        objective_score=round_half_up(category_scores.objective, 1),
        trading_score=round_half_up(category_scores.trading, 1),
        deaths_analyzed=report.total_deaths,
        errors_found=len(errors),
    )


async def analyze_matches(
    requests: Iterable[MatchRequest], *, settings: EngineSettings | None = None
) -> dict[str, BatchItem]:
    """Analyse many matches concurrently, one worker thread per match.

    At most ``settings.batch_concurrency`` matches run at once. A match the
    engine rejects yields a ``BatchItem`` with ``error`` set; the other matches
    are unaffected. Results are keyed by match id in request order.
    """
    settings = settings or get_settings()
    semaphore = asyncio.Semaphore(settings.batch_concurrency)

    async def run(request: MatchRequest) -> BatchItem:
        async with semaphore:
            try:
                analysis = await asyncio.to_thread(
                    analyze_match,
                    request.timeline,
                    request.details,
                    request.puuid,
                    request.duration_seconds,
                    settings=settings,
                )
            except RiftCoachError as e:
                logger.warning("batch_match_rejected", match_id=request.match_id, error=str(e))
                return BatchItem(match_id=request.match_id, error=str(e))
            return BatchItem(match_id=request.match_id, analysis=analysis)

    request_list = list(requests)
    items = await asyncio.gather(*(run(request) for request in request_list))
    logger.info(
        "batch_analyzed",
        matches=len(items),
        rejected=sum(1 for item in items if not item.ok),
    )
    return {item.match_id: item for item in items}
