"""Unit tests for the CS detector."""

from rift_coach.contracts.common import ErrorType, Severity
from rift_coach.core.detectors.cs import analyze_cs
from rift_coach.core.utils.rounding import round_half_up


def _cs_with_deficits(deficits: dict[int, int], player_id: int = 1):
    """Everyone farms 7/min; the player trails by ``deficits[minute]``."""

    def cs(minute: int, pid: int) -> int:
        base = minute * 7
        if pid == player_id:
            return base + deficits.get(minute, 0)
        return base

    return cs


class TestLaneOpponentMode:
    """CS compared against the lane opponent."""

    def test_even_farm_has_no_errors(self, quiet_match) -> None:
        result = analyze_cs(quiet_match)

        assert result.errors == []
        assert result.stats["maxCSDiff"] == 0
        assert result.stats["opponentSource"] == "team_position"

    def test_persistent_deficit_reported_once(self, payloads) -> None:
        match = payloads.normalized(cs=_cs_with_deficits({5: -16, 10: -18, 15: -20}))

        result = analyze_cs(match)

        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.type == ErrorType.CS_MISSING
        assert error.timestamp == 300
        assert error.severity == Severity.MEDIUM
        assert error.id == "error-300"
        assert result.stats["csBehindMinutes"] == 1
        assert result.stats["maxCSDiff"] == -20

    def test_growing_deficit_reported_again(self, payloads) -> None:
        match = payloads.normalized(cs=_cs_with_deficits({5: -16, 10: -40}))

        result = analyze_cs(match)

        assert [e.timestamp for e in result.errors] == [300, 600]
        assert [e.severity for e in result.errors] == [Severity.MEDIUM, Severity.HIGH]
        assert "(-40 CS, ~840 gold behind)" in result.errors[1].description
        assert result.errors[1].context.cs_state.differential == -40
        assert result.stats["maxCSDiff"] == -40

    def test_deficit_of_exactly_fifteen_is_ignored(self, payloads) -> None:
        match = payloads.normalized(cs=_cs_with_deficits({10: -15}))

        assert analyze_cs(match).errors == []

    def test_max_diff_keeps_sign_of_largest_gap(self, payloads) -> None:
        match = payloads.normalized(cs=_cs_with_deficits({5: 12, 20: -8}))

        assert analyze_cs(match).stats["maxCSDiff"] == 12

    def test_jungler_suggestion(self, payloads) -> None:
        match = payloads.normalized(cs=_cs_with_deficits({10: -35}, player_id=2))

        deficits = [e for e in analyze_cs(match, 2).errors if e.title.startswith("CS deficit")]

        assert len(deficits) == 1
        assert "jungle clears" in deficits[0].suggestion


class TestBenchmarkMode:
    """CS/min against phase benchmarks."""

    def test_jungler_is_benchmarked_from_minute_ten(self, payloads) -> None:
        # Both junglers farm 4/min: no lane deficit, but below every "poor" benchmark
        match = payloads.normalized(
            cs=lambda minute, pid: minute * 4 if pid in (2, 7) else minute * 7
        )

        result = analyze_cs(match, 2)

        assert [e.timestamp for e in result.errors] == [600, 900, 1200, 1500, 1800]
        first = result.errors[0]
        assert first.title == "CS below average at 10 min"
        assert "Target is 6 CS/min minimum." in first.description
        assert first.coaching_note == "At 10 min, you should aim for 60 CS. You missed 20."
        assert all(e.severity == Severity.MEDIUM for e in result.errors)

    def test_no_opponent_uses_benchmarks(self, payloads) -> None:
        details = payloads.details(overrides={6: {"teamPosition": "JUNGLE"}})
        match = payloads.normalized(details=details, cs=lambda minute, pid: minute * 5)

        result = analyze_cs(match)

        assert result.stats["opponentSource"] == "none"
        # 5/min only falls below "poor" from mid game (5.5) onwards
        assert [e.timestamp for e in result.errors] == [900, 1200, 1500, 1800]

    def test_index_shift_opponent_is_recorded(self, payloads) -> None:
        details = payloads.details(overrides={1: {"teamPosition": ""}})
        match = payloads.normalized(details=details)

        assert analyze_cs(match).stats["opponentSource"] == "index_shift"


class TestSparseFrames:
    """Checkpoints beyond the last frame are skipped, never fatal."""

    def test_short_game_only_evaluates_available_checkpoints(self, payloads) -> None:
        match = payloads.normalized(frame_count=8, cs=_cs_with_deficits({5: -35}))

        result = analyze_cs(match)

        assert len(result.errors) == 1
        assert result.errors[0].severity == Severity.HIGH

    def test_game_shorter_than_first_checkpoint(self, payloads) -> None:
        match = payloads.normalized(frame_count=5, cs=_cs_with_deficits({4: -10}))

        result = analyze_cs(match)

        assert result.errors == []
        assert result.stats["totalCS"] == 18
        assert result.stats["avgCSPerMin"] == 3.6

    def test_avg_cs_per_min_uses_final_frame(self, payloads) -> None:
        match = payloads.normalized(frame_count=31)

        stats = analyze_cs(match).stats

        assert stats["totalCS"] == 210
        assert stats["avgCSPerMin"] == round_half_up(210 / 31, 1) == 6.8
