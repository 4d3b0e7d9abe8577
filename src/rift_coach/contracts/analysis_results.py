"""Analysis result contracts.

Defines the structured data handed to the persistence and rendering layers for
one analysed match: detected mistakes, highlight clips, performance scores and
coaching tips.
"""

from typing import Any, Literal

from pydantic import Field, model_validator

from .common import (
    BaseContract,
    ErrorType,
    FrozenContract,
    GamePhase,
    HighlightType,
    Position,
    Severity,
)


class CsState(FrozenContract):
    """CS snapshot at a checkpoint."""

    player: int
    opponent: int = Field(description="Opponent CS, or expected CS in benchmark mode")
    differential: int


class VisionState(FrozenContract):
    """Ward snapshot for a 5-minute window."""

    player_wards_active: int = Field(ge=0)
    area_warded: bool


class MapState(FrozenContract):
    """Where the player stood when the mistake happened."""

    zone: Literal["safe", "neutral", "danger"]
    player_position: Position | None = None


class ErrorContext(FrozenContract):
    """Situational snapshot attached to a detected mistake."""

    game_phase: GamePhase
    cs_state: CsState | None = None
    vision_state: VisionState | None = None
    map_state: MapState | None = None


class DetectedError(FrozenContract):
    """A typed, timestamped mistake with coaching text."""

    id: str = Field(
        "",
        description=(
            "error-{timestamp}, derived on validation. Not unique: errors raised in the same "
            "second (e.g. both vision errors of one window) share an id"
        ),
    )
    type: ErrorType
    severity: Severity
    timestamp: int = Field(ge=0, description="Seconds into the game")
    title: str
    description: str
    suggestion: str
    coaching_note: str
    context: ErrorContext

    @model_validator(mode="before")
    @classmethod
    def derive_id(cls, data: Any) -> Any:
        """Recompute ``id`` from ``timestamp`` so stored reports load back unchanged."""
        if isinstance(data, dict) and "timestamp" in data:
            return {**data, "id": f"error-{data['timestamp']}"}
        return data


class DetectorResult(BaseContract):
    """Output of one detector for one player."""

    errors: list[DetectedError] = Field(default_factory=list)
    stats: dict[str, Any] = Field(default_factory=dict)


class CoachingTip(FrozenContract):
    """Tip selected from the static catalog."""

    id: str
    category: str
    title: str
    description: str
    priority: int = Field(ge=1, description="1 = most important")
    related_errors: list[str] = Field(default_factory=list, max_length=3)


class Highlight(FrozenContract):
    """A player-relative event worth reviewing."""

    type: HighlightType
    timestamp: int = Field(ge=0, description="Seconds into the game")
    description: str
    severity: Severity
    involved_champions: list[str] = Field(default_factory=list)


class Clip(FrozenContract):
    """Time span around one or more clustered highlights."""

    id: str
    type: HighlightType
    timestamp: int = Field(ge=0)
    start_time: int = Field(ge=0)
    end_time: int = Field(ge=0)
    duration: int = Field(ge=0)
    severity: Severity
    description: str
    involved_champions: list[str] = Field(default_factory=list)


class HighlightReport(BaseContract):
    """Highlights and merged clips for one player."""

    player_champion: str = "Unknown"
    events: list[Highlight] = Field(default_factory=list)
    clips: list[Clip] = Field(default_factory=list)
    total_deaths: int = Field(0, ge=0)
    total_kills: int = Field(0, ge=0)


class SubScores(FrozenContract):
    """Per-signal performance scores, each 0-100."""

    kda: float = Field(ge=0, le=100)
    damage: float = Field(ge=0, le=100)
    gold: float = Field(ge=0, le=100)
    cs: float = Field(ge=0, le=100)
    vision: float = Field(ge=0, le=100)
    participation: float = Field(ge=0, le=100)


class PerformanceScore(FrozenContract):
    """Composite performance score of one participant in one match."""

    puuid: str
    participant_id: int = Field(ge=1, le=10)
    team_id: int
    champion_name: str
    kda: float = Field(ge=0, description="Raw KDA ratio")
    sub_scores: SubScores
    # Not clamped: a perfect game on the winning side scores 105
    total_score: float = Field(ge=0)
    win_bonus_applied: bool


class MatchScoreboard(BaseContract):
    """All participants' scores in rank order plus the puuid -> rank map."""

    scores: list[PerformanceScore] = Field(default_factory=list)
    ranking: dict[str, int] = Field(default_factory=dict)
    mvp_puuid: str | None = None
    team_blue_avg_score: float = Field(0.0, ge=0)
    team_red_avg_score: float = Field(0.0, ge=0)

    def score_for(self, puuid: str) -> PerformanceScore | None:
        for score in self.scores:
            if score.puuid == puuid:
                return score
        return None


class CategoryScores(FrozenContract):
    """The five coaching categories the tip aggregator ranks (0-100)."""

    cs: float = Field(ge=0, le=100)
    vision: float = Field(ge=0, le=100)
    positioning: float = Field(ge=0, le=100)
    objective: float = Field(ge=0, le=100)
    trading: float = Field(ge=0, le=100)


class AnalysisStats(FrozenContract):
    """Headline numbers for the analysed player."""

    overall_score: float = Field(ge=0, le=100)
    score_label: str
    cs_score: float = Field(ge=0, le=100)
    vision_score: float = Field(ge=0, le=100)
    positioning_score: float = Field(ge=0, le=100)
    objective_score: float = Field(ge=0, le=100)
    trading_score: float = Field(ge=0, le=100)
    deaths_analyzed: int = Field(ge=0)
    errors_found: int = Field(ge=0)


class MatchAnalysis(BaseContract):
    """Complete analysis of one match for one player."""

    match_id: str
    puuid: str
    participant_id: int = Field(ge=1, le=10)
    champion_name: str
    duration_seconds: int = Field(ge=0)

    errors: list[DetectedError] = Field(default_factory=list)
    stats: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Per-detector stat bundles keyed by detector name"
    )
    tips: list[CoachingTip] = Field(default_factory=list, max_length=10)
    highlights: list[Highlight] = Field(default_factory=list)
    clips: list[Clip] = Field(default_factory=list)
    ranking: dict[str, int] = Field(default_factory=dict)
    scores: list[PerformanceScore] = Field(default_factory=list)
    summary: AnalysisStats
    failed_components: list[str] = Field(default_factory=list)


class MatchRequest(BaseContract):
    """One match queued for batch analysis."""

    match_id: str
    timeline: dict[str, Any]
    details: dict[str, Any]
    puuid: str
    duration_seconds: int | None = Field(None, ge=0)


class BatchItem(BaseContract):
    """Outcome of one match in a batch: an analysis or the reason it was rejected."""

    match_id: str
    analysis: MatchAnalysis | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.analysis is not None
