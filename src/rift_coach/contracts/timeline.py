"""
Match Timeline data contracts.

The raw models mirror the provider payload (Match-V5 timeline). ``NormalizedMatch``
is the canonical snapshot every detector, the highlight extractor and the scorer
read from.
"""

from typing import Any

from pydantic import ConfigDict, Field

from .common import BaseContract, FrozenContract, Position, ProviderContract
from .events import TimelineEvent
from .match import MatchParticipant


class ParticipantFrame(ProviderContract):
    """Participant state at a specific frame."""

    participant_id: int = Field(0, ge=0, le=10)
    position: Position | None = Field(None)
    current_gold: int = Field(0)
    total_gold: int = Field(0)
    level: int = Field(1, ge=1, le=30)
    xp: int = Field(0)
    minions_killed: int = Field(0)
    jungle_minions_killed: int = Field(0)

    @property
    def cs(self) -> int:
        return self.minions_killed + self.jungle_minions_killed


class RawFrame(ProviderContract):
    """A single frame as delivered by the provider."""

    timestamp: int = Field(..., ge=0, description="Frame timestamp in milliseconds")
    participant_frames: dict[str, ParticipantFrame] = Field(
        default_factory=dict, description="Participant states indexed by participant ID string"
    )
    events: list[dict[str, Any]] = Field(
        default_factory=list, description="Events that occurred during this frame"
    )


class TimelineParticipant(ProviderContract):
    """Participant mapping in timeline."""

    participant_id: int = Field(..., ge=1, le=10)
    puuid: str = Field(..., description="Player's PUUID")


class TimelineInfo(ProviderContract):
    """Timeline information containing frames and metadata."""

    frame_interval: int = Field(60000, description="Milliseconds between frames (usually 60000)")
    frames: list[RawFrame] = Field(default_factory=list)
    participants: list[TimelineParticipant] = Field(default_factory=list)


class TimelineMetadata(ProviderContract):
    """Timeline metadata."""

    match_id: str = Field("", description="Match ID")


class TimelinePayload(ProviderContract):
    """Complete match timeline from the provider."""

    metadata: TimelineMetadata = Field(default_factory=TimelineMetadata)
    info: TimelineInfo


class Frame(FrozenContract):
    """Canonical per-minute frame; ``index`` is the in-game minute."""

    index: int = Field(..., ge=0)
    timestamp: int = Field(..., ge=0)
    participant_frames: dict[int, ParticipantFrame] = Field(default_factory=dict)


class NormalizedMatch(BaseContract):
    """Immutable snapshot shared by every analysis component for one match."""

    model_config = ConfigDict(frozen=True)

    match_id: str
    frame_interval: int
    frames: list[Frame]
    events: list[TimelineEvent] = Field(
        default_factory=list, description="Supported events, stably sorted by timestamp"
    )
    participants: dict[int, MatchParticipant]
    player_id: int = Field(..., ge=1, le=10, description="Target player's participant ID")
    duration_seconds: int = Field(..., ge=0)

    @property
    def player(self) -> MatchParticipant:
        return self.participants[self.player_id]

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def team_of(self, participant_id: int) -> int | None:
        participant = self.participants.get(participant_id)
        return participant.team_id if participant else None

    def champion_name(self, participant_id: int) -> str:
        participant = self.participants.get(participant_id)
        return participant.champion_name if participant else "Unknown"

    def participant_frame(self, minute: int, participant_id: int) -> ParticipantFrame | None:
        """Participant state at frame ``minute``, or None when out of range."""
        if minute < 0 or minute >= len(self.frames):
            return None
        return self.frames[minute].participant_frames.get(participant_id)

    def position_at(self, timestamp_ms: int, participant_id: int) -> Position | None:
        """Position from the frame at ``floor(timestamp/60000)`` (last frame past the end)."""
        if not self.frames:
            return None
        index = min(timestamp_ms // 60000, len(self.frames) - 1)
        participant_frame = self.frames[index].participant_frames.get(participant_id)
        return participant_frame.position if participant_frame else None
