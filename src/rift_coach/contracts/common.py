"""
Common data types and base models for rift-coach.
All models use Pydantic V2.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

BLUE_TEAM_ID = 100
RED_TEAM_ID = 200


class GamePhase(str, Enum):
    """Coarse game-time bucket used to pick benchmark thresholds."""

    EARLY = "early"  # 0-14 min
    MID = "mid"  # 14-25 min
    LATE = "late"  # 25+ min


class Severity(str, Enum):
    """Severity of a detected mistake or highlight."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ErrorType(str, Enum):
    """Mistake categories a coaching report can contain."""

    POSITIONING = "positioning"
    TIMING = "timing"
    CS_MISSING = "cs-missing"
    VISION = "vision"
    OBJECTIVE = "objective"
    MAP_AWARENESS = "map-awareness"
    ITEMIZATION = "itemization"
    COOLDOWN_TRACKING = "cooldown-tracking"
    TRADING = "trading"
    WAVE_MANAGEMENT = "wave-management"
    ROAMING = "roaming"
    TEAMFIGHT = "teamfight"


class TeamPosition(str, Enum):
    """Assigned position from Match-V5 details ("" when unknown)."""

    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MIDDLE = "MIDDLE"
    BOTTOM = "BOTTOM"
    UTILITY = "UTILITY"
    NONE = ""


class HighlightType(str, Enum):
    """Kinds of player-relative events the highlight extractor emits."""

    DEATH = "death"
    KILL = "kill"
    ASSIST = "assist"
    MULTIKILL = "multikill"
    OBJECTIVE = "objective"
    TOWER = "tower"


class Position(BaseModel):
    """2D position on the map."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: int = Field(..., description="X coordinate on the map")
    y: int = Field(..., description="Y coordinate on the map")


MAP_CENTER = Position(x=7500, y=7500)


class BaseContract(BaseModel):
    """Base model for all data contracts with common configuration."""

    model_config = ConfigDict(
        # Validate data on assignment
        validate_assignment=True,
        # Use enum values in JSON
        use_enum_values=True,
        json_schema_extra={"examples": []},
        # Forbid extra fields to ensure data integrity
        extra="forbid",
    )


class ProviderContract(BaseContract):
    """Base for payloads produced by the match data provider.

    Accepts the provider's camelCase keys as well as snake_case field names
    and ignores fields the engine never reads.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class FrozenContract(BaseContract):
    """Base for engine outputs, which are never mutated after creation."""

    model_config = ConfigDict(frozen=True)
