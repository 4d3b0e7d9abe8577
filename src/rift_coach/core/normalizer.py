"""Telemetry normalizer.

Turns the provider's timeline and match-detail payloads into one immutable
``NormalizedMatch``: per-minute frames keyed by participant id, a flat
time-ordered list of typed events, and the participant roster.

CRITICAL: no network or disk access here. Retrieval and rate limiting belong to
the data provider.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

import structlog
from pydantic import ValidationError

from rift_coach.contracts.common import BLUE_TEAM_ID, RED_TEAM_ID
from rift_coach.contracts.events import EliteMonsterKillEvent, parse_event
from rift_coach.contracts.match import MatchDetails, MatchParticipant
from rift_coach.contracts.timeline import Frame, NormalizedMatch, TimelinePayload
from rift_coach.core.errors import MalformedTimelineError, MissingOpponentWarning

logger = structlog.get_logger(__name__)

PARTICIPANTS_PER_MATCH = 10
PARTICIPANTS_PER_TEAM = 5


class OpponentSource(str, Enum):
    """How a lane opponent was matched."""

    TEAM_POSITION = "team_position"
    INDEX_SHIFT = "index_shift"
    NONE = "none"


def normalize_match(
    timeline: TimelinePayload | Mapping[str, Any],
    details: MatchDetails | Mapping[str, Any],
    puuid: str,
    duration_seconds: int | None = None,
) -> NormalizedMatch:
    """Build the canonical snapshot for one match and target player.

    Raises:
        MalformedTimelineError: no frames, target puuid absent, roster is not 5v5,
            or the payloads fail validation.
    """
    timeline_model = _parse(TimelinePayload, timeline, "timeline")
    details_model = _parse(MatchDetails, details, "match details")
    match_id = timeline_model.metadata.match_id or details_model.metadata.match_id

    if not timeline_model.info.frames:
        raise MalformedTimelineError("timeline has no frames", match_id=match_id)

    participants = _index_participants(details_model.info.participants, match_id)

    target = next((p for p in participants.values() if p.puuid == puuid), None)
    if target is None:
        raise MalformedTimelineError(
            f"target player {puuid!r} not found in participants", match_id=match_id
        )

    frames = _build_frames(timeline_model, match_id)
    events = _flatten_events(timeline_model, participants, match_id)

    if duration_seconds is None:
        duration_seconds = details_model.info.game_duration or frames[-1].timestamp // 1000

    logger.debug(
        "match_normalized",
        match_id=match_id,
        frames=len(frames),
        events=len(events),
        player_id=target.participant_id,
    )

    return NormalizedMatch(
        match_id=match_id,
        frame_interval=timeline_model.info.frame_interval,
        frames=frames,
        events=events,
        participants=participants,
        player_id=target.participant_id,
        duration_seconds=duration_seconds,
    )


def find_lane_opponent(
    match: NormalizedMatch, participant_id: int
) -> tuple[MatchParticipant | None, OpponentSource]:
    """Find the lane opponent: same team position on the other team.

    When the player has no team position, fall back to the index-shift heuristic
    (participant ``p`` faces ``p+5`` / ``p-5``). That match is only a guess, so it
    is logged with ``needs_review=True`` and reported as ``INDEX_SHIFT``.
    """
    player = match.participants[participant_id]

    if player.team_position:
        for candidate in match.participants.values():
            if (
                candidate.team_id != player.team_id
                and candidate.team_position == player.team_position
            ):
                return candidate, OpponentSource.TEAM_POSITION
        _warn_missing_opponent(match, player, "no enemy shares the player's team position")
        return None, OpponentSource.NONE

    shifted_id = participant_id + 5 if participant_id <= 5 else participant_id - 5
    candidate = match.participants.get(shifted_id)
    if candidate is None or candidate.team_id == player.team_id:
        _warn_missing_opponent(match, player, "index-shift candidate is not an enemy")
        return None, OpponentSource.NONE

    logger.warning(
        "lane_opponent_heuristic",
        category=MissingOpponentWarning.__name__,
        match_id=match.match_id,
        participant_id=participant_id,
        opponent_id=shifted_id,
        opponent_position=candidate.team_position,
        needs_review=True,
    )
    return candidate, OpponentSource.INDEX_SHIFT


def _warn_missing_opponent(match: NormalizedMatch, player: MatchParticipant, reason: str) -> None:
    logger.warning(
        "lane_opponent_missing",
        category=MissingOpponentWarning.__name__,
        match_id=match.match_id,
        participant_id=player.participant_id,
        team_position=player.team_position,
        reason=reason,
    )


def _parse(model: Any, payload: Any, label: str) -> Any:
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise MalformedTimelineError(f"invalid {label} payload: {e.error_count()} error(s)") from e


def _index_participants(
    participants: list[MatchParticipant], match_id: str
) -> dict[int, MatchParticipant]:
    if len(participants) != PARTICIPANTS_PER_MATCH:
        raise MalformedTimelineError(
            f"expected {PARTICIPANTS_PER_MATCH} participants, got {len(participants)}",
            match_id=match_id,
        )

    indexed: dict[int, MatchParticipant] = {}
    puuids: set[str] = set()
    for participant in participants:
        if participant.participant_id in indexed:
            raise MalformedTimelineError(
                f"duplicate participant id {participant.participant_id}", match_id=match_id
            )
        if participant.puuid in puuids:
            raise MalformedTimelineError(
                f"duplicate puuid {participant.puuid!r}", match_id=match_id
            )
        indexed[participant.participant_id] = participant
        puuids.add(participant.puuid)

    for team_id in (BLUE_TEAM_ID, RED_TEAM_ID):
        team_size = sum(1 for p in participants if p.team_id == team_id)
        if team_size != PARTICIPANTS_PER_TEAM:
            raise MalformedTimelineError(
                f"team {team_id} has {team_size} participants", match_id=match_id
            )

    # Payload order is kept: the scorer breaks ties by it
    return indexed


def _build_frames(timeline: TimelinePayload, match_id: str) -> list[Frame]:
    frames: list[Frame] = []
    previous_timestamp = -1

    for index, raw_frame in enumerate(timeline.info.frames):
        if raw_frame.timestamp <= previous_timestamp:
            raise MalformedTimelineError(
                f"frame {index} timestamp {raw_frame.timestamp} is not increasing",
                match_id=match_id,
            )
        previous_timestamp = raw_frame.timestamp

        participant_frames = {}
        for key, participant_frame in raw_frame.participant_frames.items():
            if not key.isdigit():
                continue
            participant_frames[int(key)] = participant_frame

        frames.append(
            Frame(index=index, timestamp=raw_frame.timestamp, participant_frames=participant_frames)
        )

    return frames


def _flatten_events(
    timeline: TimelinePayload, participants: dict[int, MatchParticipant], match_id: str
) -> list[Any]:
    events = []
    unsupported = 0
    invalid = 0

    for raw_frame in timeline.info.frames:
        for raw_event in raw_frame.events:
            try:
                event = parse_event(raw_event)
            except ValidationError as e:
                invalid += 1
                logger.warning(
                    "timeline_event_invalid",
                    match_id=match_id,
                    event_type=raw_event.get("type"),
                    error_count=e.error_count(),
                )
                continue

            if event is None:
                unsupported += 1
                continue

            if isinstance(event, EliteMonsterKillEvent) and event.killer_team_id is None:
                killer = participants.get(event.killer_id)
                if killer is not None:
                    event = event.model_copy(update={"killer_team_id": killer.team_id})

            events.append(event)

    if unsupported or invalid:
        logger.debug(
            "timeline_events_dropped", match_id=match_id, unsupported=unsupported, invalid=invalid
        )

    # Events are only monotonic within a frame, so order them once here
    events.sort(key=lambda ev: ev.timestamp)
    return events
