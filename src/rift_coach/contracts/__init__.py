"""Contract models for data validation."""

from .analysis_results import (
    AnalysisStats,
    BatchItem,
    CategoryScores,
    Clip,
    CoachingTip,
    CsState,
    DetectedError,
    DetectorResult,
    ErrorContext,
    Highlight,
    HighlightReport,
    MapState,
    MatchAnalysis,
    MatchRequest,
    MatchScoreboard,
    PerformanceScore,
    SubScores,
    VisionState,
)
from .common import (
    GamePhase,
    HighlightType,
    ErrorType,
    Position,
    Severity,
    TeamPosition,
)
from .events import (
    BuildingKillEvent,
    ChampionKillEvent,
    EliteMonsterKillEvent,
    EventType,
    TimelineEvent,
    WardKillEvent,
    WardPlacedEvent,
)
from .match import MatchDetails, MatchParticipant
from .timeline import Frame, NormalizedMatch, ParticipantFrame, TimelinePayload

__all__ = [
    "AnalysisStats",
    "BatchItem",
    "BuildingKillEvent",
    "CategoryScores",
    "ChampionKillEvent",
    "Clip",
    "CoachingTip",
    "CsState",
    "DetectedError",
    "DetectorResult",
    "EliteMonsterKillEvent",
    "ErrorContext",
    "ErrorType",
    "EventType",
    "Frame",
    "GamePhase",
    "Highlight",
    "HighlightReport",
    "HighlightType",
    "MapState",
    "MatchAnalysis",
    "MatchDetails",
    "MatchParticipant",
    "MatchRequest",
    "MatchScoreboard",
    "NormalizedMatch",
    "ParticipantFrame",
    "PerformanceScore",
    "Position",
    "Severity",
    "SubScores",
    "TeamPosition",
    "TimelineEvent",
    "TimelinePayload",
    "VisionState",
    "WardKillEvent",
    "WardPlacedEvent",
]
