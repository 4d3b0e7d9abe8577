"""
Timeline event models for Match-V5 timelines.
Each event type the engine reads has its own model; every other type is dropped
during normalization instead of being accessed as a free-form mapping.
"""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter

from .common import Position, ProviderContract


class EventType(str, Enum):
    """Event types consumed by the analysis engine."""

    CHAMPION_KILL = "CHAMPION_KILL"
    WARD_PLACED = "WARD_PLACED"
    WARD_KILL = "WARD_KILL"
    ELITE_MONSTER_KILL = "ELITE_MONSTER_KILL"
    BUILDING_KILL = "BUILDING_KILL"


SUPPORTED_EVENT_TYPES = frozenset(event_type.value for event_type in EventType)


class WardType(str, Enum):
    """Types of wards that can be placed."""

    YELLOW_TRINKET = "YELLOW_TRINKET"
    CONTROL_WARD = "CONTROL_WARD"
    SIGHT_WARD = "SIGHT_WARD"
    BLUE_TRINKET = "BLUE_TRINKET"
    TEEMO_MUSHROOM = "TEEMO_MUSHROOM"
    UNDEFINED = "UNDEFINED"


class MonsterType(str, Enum):
    """Elite monster types."""

    DRAGON = "DRAGON"
    ELDER_DRAGON = "ELDER_DRAGON"
    BARON_NASHOR = "BARON_NASHOR"
    RIFTHERALD = "RIFTHERALD"


class BuildingType(str, Enum):
    """Building types."""

    TOWER_BUILDING = "TOWER_BUILDING"
    INHIBITOR_BUILDING = "INHIBITOR_BUILDING"


class BaseEvent(ProviderContract):
    """Base class for all timeline events."""

    timestamp: int = Field(..., ge=0, description="Game time in milliseconds when event occurred")


class ChampionKillEvent(BaseEvent):
    """Champion kill event."""

    type: Literal["CHAMPION_KILL"]
    killer_id: int = Field(0, ge=0, description="0 for execute")
    victim_id: int = Field(..., ge=1, le=10)
    assisting_participant_ids: list[int] = Field(default_factory=list)
    position: Position | None = Field(None)


class WardPlacedEvent(BaseEvent):
    """Ward placement event."""

    type: Literal["WARD_PLACED"]
    creator_id: int = Field(0, ge=0)
    # Kept as a plain string: the provider adds ward types between patches
    ward_type: str = Field(WardType.UNDEFINED.value)


class WardKillEvent(BaseEvent):
    """Ward kill event."""

    type: Literal["WARD_KILL"]
    killer_id: int = Field(0, ge=0)
    ward_type: str = Field(WardType.UNDEFINED.value)


class EliteMonsterKillEvent(BaseEvent):
    """Elite monster kill event."""

    type: Literal["ELITE_MONSTER_KILL"]
    killer_id: int = Field(0, ge=0)
    killer_team_id: int | None = Field(None, description="100 (blue) or 200 (red)")
    monster_type: str = Field(..., description="DRAGON, BARON_NASHOR, RIFTHERALD, ...")
    monster_sub_type: str | None = Field(None)
    assisting_participant_ids: list[int] = Field(default_factory=list)
    position: Position | None = Field(None)


class BuildingKillEvent(BaseEvent):
    """Building destruction event."""

    type: Literal["BUILDING_KILL"]
    killer_id: int = Field(0, ge=0)
    assisting_participant_ids: list[int] = Field(default_factory=list)
    building_type: str = Field(..., description="TOWER_BUILDING or INHIBITOR_BUILDING")
    team_id: int = Field(..., description="Team that owned the destroyed building")
    tower_type: str | None = Field(None)
    lane_type: str | None = Field(None)
    position: Position | None = Field(None)


TimelineEvent = Annotated[
    ChampionKillEvent | WardPlacedEvent | WardKillEvent | EliteMonsterKillEvent | BuildingKillEvent,
    Field(discriminator="type"),
]

_event_adapter: TypeAdapter[Any] = TypeAdapter(TimelineEvent)


def parse_event(raw: dict[str, Any]) -> TimelineEvent | None:
    """Parse one raw provider event, returning None for unsupported types.

    Raises pydantic.ValidationError when a supported event is missing fields.
    """
    if raw.get("type") not in SUPPORTED_EVENT_TYPES:
        return None
    return _event_adapter.validate_python(raw)  # type: ignore[no-any-return]
