"""Vision detector - ward placement per 5-minute window."""

from dataclasses import dataclass
from typing import NamedTuple

import structlog

from rift_coach.contracts.analysis_results import (
    DetectedError,
    DetectorResult,
    ErrorContext,
    VisionState,
)
from rift_coach.contracts.common import ErrorType, GamePhase, Severity
from rift_coach.contracts.events import WardKillEvent, WardPlacedEvent, WardType
from rift_coach.contracts.timeline import NormalizedMatch
from rift_coach.core.phase import classify_phase
from rift_coach.core.utils.rounding import round_half_up

logger = structlog.get_logger(__name__)

WINDOW_MS = 5 * 60_000
WINDOW_MINUTES = 5
MIN_WINDOW_START_MINUTE = 10
NON_SUPPORT_FACTOR = 0.6


class VisionBenchmark(NamedTuple):
    """Expected wards placed per 5 minutes for a support."""

    good: float
    average: float
    poor: float

    def scaled(self, factor: float) -> "VisionBenchmark":
        return VisionBenchmark(self.good * factor, self.average * factor, self.poor * factor)


VISION_BENCHMARKS: dict[GamePhase, VisionBenchmark] = {
    GamePhase.EARLY: VisionBenchmark(good=5, average=3, poor=1),
    GamePhase.MID: VisionBenchmark(good=8, average=5, poor=2),
    GamePhase.LATE: VisionBenchmark(good=10, average=6, poor=3),
}


@dataclass(slots=True)
class WardWindow:
    """Ward counts for one 5-minute window."""

    placed: int = 0
    killed: int = 0
    control: int = 0


def analyze_vision(match: NormalizedMatch, participant_id: int | None = None) -> DetectorResult:
    """Detect windows with too few wards and mid/late windows without a control ward.

    A window exists for every 5-minute span covered by a frame or a ward event;
    windows without events count as zero wards.
    """
    player_id = participant_id if participant_id is not None else match.player_id
    is_support = match.participants[player_id].is_support

    windows: dict[int, WardWindow] = {
        frame.timestamp // WINDOW_MS: WardWindow() for frame in match.frames
    }
    total_placed = 0
    total_killed = 0
    control_placed = 0

    for event in match.events:
        if isinstance(event, WardPlacedEvent) and event.creator_id == player_id:
            window = windows.setdefault(event.timestamp // WINDOW_MS, WardWindow())
            window.placed += 1
            total_placed += 1
            if event.ward_type == WardType.CONTROL_WARD:
                window.control += 1
                control_placed += 1
        elif isinstance(event, WardKillEvent) and event.killer_id == player_id:
            window = windows.setdefault(event.timestamp // WINDOW_MS, WardWindow())
            window.killed += 1
            total_killed += 1

    errors: list[DetectedError] = []
    for window_index in sorted(windows):
        errors.extend(_check_window(window_index, windows[window_index], is_support))

    wards_per_minute = 0.0
    if match.frame_count > 0:
        wards_per_minute = round_half_up(total_placed / match.frame_count, 1)

    logger.debug(
        "vision_analyzed",
        match_id=match.match_id,
        participant_id=player_id,
        windows=len(windows),
        errors=len(errors),
    )
    return DetectorResult(
        errors=errors,
        stats={
            "totalWardsPlaced": total_placed,
            "totalWardsKilled": total_killed,
            "controlWardsPlaced": control_placed,
            "wardsPerMinute": wards_per_minute,
        },
    )


def _check_window(window_index: int, window: WardWindow, is_support: bool) -> list[DetectedError]:
    minute_start = window_index * WINDOW_MINUTES
    if minute_start < MIN_WINDOW_START_MINUTE:
        return []

    minute_end = minute_start + WINDOW_MINUTES
    game_phase = classify_phase(minute_start * 60_000)
    benchmark = VISION_BENCHMARKS[game_phase]
    if not is_support:
        benchmark = benchmark.scaled(NON_SUPPORT_FACTOR)

    errors = []
    if window.placed < benchmark.poor:
        if is_support:
            role_note = "As a support, vision is your main responsibility."
            suggestion = (
                "Place strategic wards: river, enemy jungle, objectives. "
                "Use your Oracle Lens to deward."
            )
        else:
            role_note = "Even as a laner, you should contribute to vision control."
            suggestion = "Buy Control Wards regularly. A ward can save your life or your team's."

        errors.append(
            DetectedError(
                type=ErrorType.VISION,
                severity=Severity.HIGH if game_phase == GamePhase.LATE else Severity.MEDIUM,
                timestamp=minute_start * 60,
                title=f"Lack of vision ({minute_start}-{minute_end} min)",
                description=(
                    f"You only placed {window.placed} ward(s) between {minute_start} "
                    f"and {minute_end} min. {role_note}"
                ),
                suggestion=suggestion,
                coaching_note=(
                    f"Vision wins games. {window.placed} ward(s) in 5 min is not enough "
                    "to have good map awareness."
                ),
                context=ErrorContext(
                    game_phase=game_phase,
                    vision_state=VisionState(
                        player_wards_active=window.placed,
                        area_warded=window.placed >= benchmark.average,
                    ),
                ),
            )
        )

    if game_phase != GamePhase.EARLY and window.control == 0:
        errors.append(
            DetectedError(
                type=ErrorType.VISION,
                severity=Severity.LOW,
                timestamp=minute_start * 60,
                title=f"No Control Ward ({minute_start}-{minute_end} min)",
                description=(
                    f"You didn't place any Control Ward between {minute_start} "
                    f"and {minute_end} min."
                ),
                suggestion=(
                    "Control Wards are essential to control key zones (dragon, baron, jungle). "
                    "Buy one on every back."
                ),
                coaching_note=(
                    "A Control Ward costs 75 gold but can save your life or reveal ambushes."
                ),
                context=ErrorContext(
                    game_phase=game_phase,
                    vision_state=VisionState(player_wards_active=window.placed, area_warded=False),
                ),
            )
        )

    return errors
