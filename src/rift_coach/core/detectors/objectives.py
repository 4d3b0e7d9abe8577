"""Objective-control detector - dragons, barons and heralds taken by the enemy."""

import math

import structlog

from rift_coach.contracts.analysis_results import (
    DetectedError,
    DetectorResult,
    ErrorContext,
    MapState,
)
from rift_coach.contracts.common import MAP_CENTER, ErrorType, GamePhase, Position, Severity
from rift_coach.contracts.events import ChampionKillEvent, EliteMonsterKillEvent, MonsterType
from rift_coach.contracts.timeline import NormalizedMatch
from rift_coach.core.phase import classify_phase, format_game_time
from rift_coach.core.utils.rounding import round_int

logger = structlog.get_logger(__name__)

DRAGON_PIT = Position(x=9866, y=4414)
# Rift Herald spawns in the Baron pit
BARON_PIT = Position(x=5007, y=10471)

CONTEST_DISTANCE = 4000
FAR_DISTANCE = 6000

RESPAWN_MS: dict[GamePhase, int] = {
    GamePhase.EARLY: 15_000,
    GamePhase.MID: 30_000,
    GamePhase.LATE: 50_000,
}


def distance(a: Position, b: Position) -> float:
    """Euclidean distance in map units."""
    return math.hypot(b.x - a.x, b.y - a.y)


def death_windows(match: NormalizedMatch, participant_id: int) -> list[tuple[int, int]]:
    """``(death, respawn)`` timestamps (ms) for every death of the participant."""
    windows = []
    for event in match.events:
        if isinstance(event, ChampionKillEvent) and event.victim_id == participant_id:
            timer = RESPAWN_MS[classify_phase(event.timestamp)]
            windows.append((event.timestamp, event.timestamp + timer))
    return windows


def was_dead(windows: list[tuple[int, int]], timestamp_ms: int) -> bool:
    return any(death < timestamp_ms < respawn for death, respawn in windows)


def analyze_objectives(
    match: NormalizedMatch, participant_id: int | None = None
) -> DetectorResult:
    """Detect lost objectives the player could have contested.

    Every elite monster taken by the enemy team counts as a loss. An error is only
    emitted when the player was alive and further than 4000 units from the pit;
    a death or proximity exonerates them. Events whose killer team cannot be
    resolved are skipped.
    """
    player_id = participant_id if participant_id is not None else match.player_id
    player = match.participants[player_id]
    deaths = death_windows(match, player_id)

    stats = {
        "dragonsLost": 0,
        "dragonsContested": 0,
        "baronsLost": 0,
        "baronsContested": 0,
        "heraldsContested": 0,
    }
    errors: list[DetectedError] = []

    for event in match.events:
        if not isinstance(event, EliteMonsterKillEvent):
            continue
        if event.killer_team_id is None or event.killer_team_id == player.team_id:
            continue

        game_phase = classify_phase(event.timestamp)
        position = match.position_at(event.timestamp, player_id) or MAP_CENTER
        dead = was_dead(deaths, event.timestamp)

        if event.monster_type in (MonsterType.DRAGON, MonsterType.ELDER_DRAGON):
            stats["dragonsLost"] += 1
            gap = distance(position, DRAGON_PIT)
            if dead or gap <= CONTEST_DISTANCE:
                stats["dragonsContested"] += 1
                continue
            errors.append(_dragon_error(event, game_phase, position, gap, player.is_jungler))

        elif event.monster_type == MonsterType.BARON_NASHOR:
            stats["baronsLost"] += 1
            gap = distance(position, BARON_PIT)
            if dead or gap <= CONTEST_DISTANCE:
                stats["baronsContested"] += 1
                continue
            errors.append(_baron_error(event, game_phase, position, gap))

        elif event.monster_type == MonsterType.RIFTHERALD:
            stats["heraldsContested"] += 1
            gap = distance(position, BARON_PIT)
            if dead or gap <= CONTEST_DISTANCE or game_phase != GamePhase.EARLY:
                continue
            errors.append(_herald_error(event, game_phase, position, gap))

    logger.debug(
        "objectives_analyzed",
        match_id=match.match_id,
        participant_id=player_id,
        errors=len(errors),
        **stats,
    )
    return DetectorResult(errors=errors, stats=stats)


def _is_elder(event: EliteMonsterKillEvent) -> bool:
    return (
        event.monster_type == MonsterType.ELDER_DRAGON
        or event.monster_sub_type == MonsterType.ELDER_DRAGON
    )


def _dragon_error(
    event: EliteMonsterKillEvent,
    game_phase: GamePhase,
    position: Position,
    gap: float,
    is_jungler: bool,
) -> DetectedError:
    elder = _is_elder(event)
    if elder:
        severity = Severity.CRITICAL
        title = "Elder Dragon lost"
        coaching_note = (
            "Elder Dragon is often game-deciding. Everything should be organized around "
            "this objective."
        )
    else:
        severity = Severity.HIGH if game_phase == GamePhase.LATE else Severity.MEDIUM
        element = (event.monster_sub_type or "").replace("_DRAGON", "").title()
        title = f"{element} Dragon lost".strip()
        reach = (
            "You were way too far to contest."
            if gap > FAR_DISTANCE
            else "Get closer earlier to have priority."
        )
        coaching_note = f"Dragon gives permanent buffs to your team. {reach}"

    if is_jungler:
        suggestion = (
            "As a jungler, you must time objectives and be present. "
            "Ward the area 1 min before spawn."
        )
    else:
        suggestion = "Be ready to rotate to Dragon when it spawns. Communicate with your team."

    return DetectedError(
        type=ErrorType.OBJECTIVE,
        severity=severity,
        timestamp=event.timestamp // 1000,
        title=title,
        description=(
            f"The enemy took {'Elder Dragon' if elder else 'Dragon'} at "
            f"{format_game_time(event.timestamp // 1000)}. "
            f"You were {round_int(gap)} units away."
        ),
        suggestion=suggestion,
        coaching_note=coaching_note,
        context=ErrorContext(
            game_phase=game_phase,
            map_state=MapState(zone="danger", player_position=position),
        ),
    )


def _baron_error(
    event: EliteMonsterKillEvent, game_phase: GamePhase, position: Position, gap: float
) -> DetectedError:
    return DetectedError(
        type=ErrorType.OBJECTIVE,
        severity=Severity.CRITICAL,
        timestamp=event.timestamp // 1000,
        title="Baron Nashor lost",
        description=(
            f"The enemy took Baron at {format_game_time(event.timestamp // 1000)}. "
            f"You were {round_int(gap)} units away."
        ),
        suggestion=(
            "Baron is the most important mid/late game objective. "
            "Group with your team to contest or take it."
        ),
        coaching_note=(
            "Baron gives a huge advantage in siege and gold. Losing Baron without "
            "contesting is often a negative turning point."
        ),
        context=ErrorContext(
            game_phase=game_phase,
            map_state=MapState(zone="danger", player_position=position),
        ),
    )


def _herald_error(
    event: EliteMonsterKillEvent, game_phase: GamePhase, position: Position, gap: float
) -> DetectedError:
    return DetectedError(
        type=ErrorType.OBJECTIVE,
        severity=Severity.MEDIUM,
        timestamp=event.timestamp // 1000,
        title="Herald lost",
        description=(
            f"The enemy took Herald at {format_game_time(event.timestamp // 1000)}. "
            f"You were {round_int(gap)} units away."
        ),
        suggestion=(
            "Herald can destroy an entire tower. Help your jungler secure it "
            "or at least contest it."
        ),
        coaching_note=(
            "Herald is very useful to accelerate early game. One less tower opens up "
            "the map for your team."
        ),
        context=ErrorContext(
            game_phase=game_phase,
            map_state=MapState(zone="neutral", player_position=position),
        ),
    )
