"""
Match information data contracts for Riot API Match-V5 details.
"""

from typing import Any, Literal

from pydantic import ConfigDict, Field, field_validator

from .common import ProviderContract, TeamPosition

_KNOWN_POSITIONS = frozenset(position.value for position in TeamPosition)


class MatchParticipant(ProviderContract):
    """Participant (player) summary from match details."""

    model_config = ConfigDict(frozen=True)

    participant_id: int = Field(..., ge=1, le=10)
    puuid: str = Field(..., min_length=1, description="Player's PUUID")
    team_id: Literal[100, 200] = Field(..., description="100 (blue) or 200 (red)")
    team_position: TeamPosition = Field(TeamPosition.NONE, description="Assigned position")
    champion_name: str = Field("Unknown", description="Champion name")

    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    win: bool = Field(False)

    gold_earned: int = Field(0, ge=0)
    total_damage_dealt_to_champions: int = Field(0, ge=0)
    total_minions_killed: int = Field(0, ge=0)
    neutral_minions_killed: int = Field(0, ge=0)
    vision_score: float = Field(0, ge=0)

    @field_validator("team_position", mode="before")
    @classmethod
    def normalize_team_position(cls, v: Any) -> str:
        """Map missing or unrecognised positions (e.g. "Invalid") to ""."""
        if v is None:
            return TeamPosition.NONE.value
        value = str(v).upper()
        return value if value in _KNOWN_POSITIONS else TeamPosition.NONE.value

    @property
    def cs(self) -> int:
        return self.total_minions_killed + self.neutral_minions_killed

    @property
    def is_jungler(self) -> bool:
        return self.team_position == TeamPosition.JUNGLE.value

    @property
    def is_support(self) -> bool:
        return self.team_position == TeamPosition.UTILITY.value


class MatchMetadata(ProviderContract):
    """Match metadata."""

    match_id: str = Field("", description="Match ID")


class MatchInfo(ProviderContract):
    """Match information block."""

    game_duration: int = Field(0, ge=0, description="Game duration in seconds")
    participants: list[MatchParticipant] = Field(default_factory=list)


class MatchDetails(ProviderContract):
    """Complete match details payload from Match-V5."""

    metadata: MatchMetadata = Field(default_factory=MatchMetadata)
    info: MatchInfo
