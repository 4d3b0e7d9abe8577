"""Scoring weights and thresholds.

Data structures only; the arithmetic lives in ``calculator``.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoreWeights(BaseModel):
    """Weights of the six sub-scores in the composite score (sum to 1)."""

    model_config = ConfigDict(frozen=True)

    kda: float = Field(0.25, ge=0, le=1)
    damage: float = Field(0.25, ge=0, le=1)
    gold: float = Field(0.15, ge=0, le=1)
    cs: float = Field(0.10, ge=0, le=1)
    vision: float = Field(0.10, ge=0, le=1)
    participation: float = Field(0.15, ge=0, le=1)

    @model_validator(mode="after")
    def check_total(self) -> "ScoreWeights":
        total = self.kda + self.damage + self.gold + self.cs + self.vision + self.participation
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"score weights must sum to 1, got {total}")
        return self


DEFAULT_WEIGHTS = ScoreWeights()

WIN_MULTIPLIER = 1.05
PERFECT_KDA_MULTIPLIER = 1.2  # applied to kills+assists when deaths == 0
KDA_SCALE = 10
CS_PER_MIN_SCALE = 10
VISION_PER_MIN_SCALE = 20
MAX_SUB_SCORE = 100.0

# Lower bounds of each label, checked in order
SCORE_LABELS: tuple[tuple[float, str], ...] = (
    (90, "Excellent"),
    (70, "Good"),
    (50, "Average"),
    (30, "Needs Work"),
)
LOWEST_SCORE_LABEL = "Critical"
