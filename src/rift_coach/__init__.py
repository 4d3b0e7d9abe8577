"""rift-coach: match telemetry analysis engine.

Turns a match timeline and match details into detected mistakes, highlight
clips, performance rankings and coaching tips for one player.
"""

from rift_coach.config.settings import EngineSettings, get_settings
from rift_coach.core.errors import MalformedTimelineError, MissingOpponentWarning, RiftCoachError
from rift_coach.core.pipeline import analyze_match, analyze_matches

__version__ = "0.1.0"

__all__ = [
    "EngineSettings",
    "get_settings",
    "RiftCoachError",
    "MalformedTimelineError",
    "MissingOpponentWarning",
    "analyze_match",
    "analyze_matches",
]
