"""Error taxonomy for the analysis engine.

Only ``MalformedTimelineError`` aborts an analysis. A missing lane opponent is a
warning the CS detector degrades around, and an empty 5-minute window is simply a
window with zero wards.
"""


class RiftCoachError(Exception):
    """Base class for engine errors."""


class MalformedTimelineError(RiftCoachError, ValueError):
    """The payload cannot be analysed (no frames, unknown target player, bad roster).

    Callers must treat this as "cannot analyze", never as "zero errors found".
    """

    def __init__(self, message: str, *, match_id: str | None = None) -> None:
        self.match_id = match_id
        super().__init__(f"{match_id}: {message}" if match_id else message)


class MissingOpponentWarning(UserWarning):
    """No lane opponent found, or one found only by the index-shift heuristic."""
