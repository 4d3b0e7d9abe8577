"""CS detector - tracks farm against the lane opponent or phase benchmarks."""

from typing import NamedTuple

import structlog

from rift_coach.contracts.analysis_results import (
    CsState,
    DetectedError,
    DetectorResult,
    ErrorContext,
)
from rift_coach.contracts.common import ErrorType, GamePhase, Severity
from rift_coach.contracts.timeline import NormalizedMatch
from rift_coach.core.normalizer import OpponentSource, find_lane_opponent
from rift_coach.core.phase import classify_phase
from rift_coach.core.utils.rounding import round_half_up, round_int

logger = structlog.get_logger(__name__)


class CsBenchmark(NamedTuple):
    """Expected CS per minute."""

    good: float
    average: float
    poor: float


CS_BENCHMARKS: dict[GamePhase, CsBenchmark] = {
    GamePhase.EARLY: CsBenchmark(good=7, average=6, poor=5),
    GamePhase.MID: CsBenchmark(good=7.5, average=6.5, poor=5.5),
    GamePhase.LATE: CsBenchmark(good=8, average=7, poor=6),
}

CHECKPOINT_MINUTES = (5, 10, 15, 20, 25, 30)
DEFICIT_THRESHOLD = -15
HIGH_SEVERITY_DEFICIT = -30
# A persistent deficit is only re-reported once it grows by this much
REPORT_STEP = 10
GOLD_PER_MINION = 21
BENCHMARK_MIN_CHECKPOINT = 10


def analyze_cs(match: NormalizedMatch, participant_id: int | None = None) -> DetectorResult:
    """Detect CS deficits at the 5-minute checkpoints.

    With a lane opponent, a deficit below -15 is reported once and then only
    again when it has grown by at least 10 more. Without an opponent, or for
    junglers, CS/min is compared against the phase's ``poor`` benchmark from
    minute 10 onwards.

    Returns:
        DetectorResult with stats ``avgCSPerMin``, ``totalCS``, ``maxCSDiff``,
        ``csBehindMinutes`` and ``opponentSource``.
    """
    player_id = participant_id if participant_id is not None else match.player_id
    player = match.participants[player_id]
    opponent, opponent_source = find_lane_opponent(match, player_id)
    is_jungler = player.is_jungler

    errors: list[DetectedError] = []
    max_cs_diff = 0
    cs_behind_reports = 0
    last_reported_diff = 0

    for checkpoint in CHECKPOINT_MINUTES:
        if checkpoint >= match.frame_count:
            break

        player_frame = match.participant_frame(checkpoint, player_id)
        if player_frame is None:
            continue

        player_cs = player_frame.cs
        game_phase = classify_phase(checkpoint * 60_000)
        benchmark = CS_BENCHMARKS[game_phase]

        opponent_frame = (
            match.participant_frame(checkpoint, opponent.participant_id) if opponent else None
        )
        if opponent_frame is not None:
            opponent_cs = opponent_frame.cs
            cs_diff = player_cs - opponent_cs

            if abs(cs_diff) > abs(max_cs_diff):
                max_cs_diff = cs_diff

            if cs_diff < DEFICIT_THRESHOLD and cs_diff < last_reported_diff - REPORT_STEP:
                last_reported_diff = cs_diff
                cs_behind_reports += 1
                errors.append(
                    _deficit_error(checkpoint, player_cs, opponent_cs, game_phase, is_jungler)
                )

        if opponent is None or is_jungler:
            cs_per_min = player_cs / checkpoint
            if cs_per_min < benchmark.poor and checkpoint >= BENCHMARK_MIN_CHECKPOINT:
                errors.append(
                    _benchmark_error(
                        checkpoint, player_cs, cs_per_min, benchmark, game_phase, is_jungler
                    )
                )

    stats: dict[str, float | int | str] = {
        "avgCSPerMin": 0.0,
        "maxCSDiff": max_cs_diff,
        "csBehindMinutes": cs_behind_reports,
        "totalCS": 0,
        "opponentSource": opponent_source.value,
    }

    last_player_frame = match.participant_frame(match.frame_count - 1, player_id)
    if last_player_frame is not None:
        stats["totalCS"] = last_player_frame.cs
        stats["avgCSPerMin"] = round_half_up(last_player_frame.cs / match.frame_count, 1)

    logger.debug(
        "cs_analyzed",
        match_id=match.match_id,
        participant_id=player_id,
        errors=len(errors),
        opponent_source=opponent_source.value,
    )
    return DetectorResult(errors=errors, stats=stats)


def _deficit_error(
    checkpoint: int, player_cs: int, opponent_cs: int, game_phase: GamePhase, is_jungler: bool
) -> DetectedError:
    cs_diff = player_cs - opponent_cs
    gold_lost = abs(cs_diff) * GOLD_PER_MINION
    severe = cs_diff < HIGH_SEVERITY_DEFICIT

    if is_jungler:
        suggestion = "Optimize your jungle clears. Don't miss camps and time your respawns well."
    else:
        suggestion = (
            "Focus on last hitting. If the lane is difficult, use your abilities "
            "to secure CS under tower."
        )

    if severe:
        coaching_note = (
            f"{abs(cs_diff)} CS behind is significant. Your opponent has almost an "
            "item advantage just from CS."
        )
    else:
        coaching_note = "Even 15 CS behind represents ~300 gold. It adds up quickly over the game."

    return DetectedError(
        type=ErrorType.CS_MISSING,
        severity=Severity.HIGH if severe else Severity.MEDIUM,
        timestamp=checkpoint * 60,
        title=f"CS deficit at {checkpoint} min",
        description=(
            f"You have {player_cs} CS vs {opponent_cs} for your opponent "
            f"({cs_diff} CS, ~{gold_lost} gold behind)."
        ),
        suggestion=suggestion,
        coaching_note=coaching_note,
        context=ErrorContext(
            game_phase=game_phase,
            cs_state=CsState(player=player_cs, opponent=opponent_cs, differential=cs_diff),
        ),
    )


def _benchmark_error(
    checkpoint: int,
    player_cs: int,
    cs_per_min: float,
    benchmark: CsBenchmark,
    game_phase: GamePhase,
    is_jungler: bool,
) -> DetectedError:
    expected_cs = checkpoint * benchmark.average

    if is_jungler:
        suggestion = (
            "Make sure to clear all your camps efficiently and don't waste time between ganks."
        )
    else:
        suggestion = "Practice last hitting in Practice Tool. Every minion counts."

    return DetectedError(
        type=ErrorType.CS_MISSING,
        severity=Severity.MEDIUM,
        timestamp=checkpoint * 60,
        title=f"CS below average at {checkpoint} min",
        description=(
            f"You have {player_cs} CS ({cs_per_min:.1f} CS/min). "
            f"Target is {benchmark.average:g} CS/min minimum."
        ),
        suggestion=suggestion,
        coaching_note=(
            f"At {checkpoint} min, you should aim for {round_int(expected_cs)} CS. "
            f"You missed {round_int(expected_cs - player_cs)}."
        ),
        context=ErrorContext(
            game_phase=game_phase,
            cs_state=CsState(
                player=player_cs,
                opponent=round_int(expected_cs),
                differential=round_int(player_cs - expected_cs),
            ),
        ),
    )
