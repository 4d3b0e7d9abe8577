"""Signal detectors.

Each detector is a pure function of a ``NormalizedMatch`` and a target
participant, returning a fresh ``DetectorResult``. Detectors share no state and
can run in any order or in parallel.
"""

from rift_coach.core.detectors.cs import analyze_cs
from rift_coach.core.detectors.objectives import analyze_objectives
from rift_coach.core.detectors.vision import analyze_vision

__all__ = [
    "analyze_cs",
    "analyze_vision",
    "analyze_objectives",
]
