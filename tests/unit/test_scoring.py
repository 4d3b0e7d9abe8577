"""Unit tests for the performance scorer.

Covers the sub-score formulas, the win bonus, division-by-zero floors and the
stability of the ranking. Pure domain logic only: no I/O, no mocks.
"""

import pytest
from pydantic import ValidationError

from rift_coach.contracts.match import MatchParticipant
from rift_coach.core.scoring.calculator import (
    calculate_kda,
    calculate_scoreboard,
    calculate_sub_scores,
    composite_score,
    score_label,
    score_match,
)
from rift_coach.core.scoring.models import ScoreWeights

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def roster(payloads) -> list[MatchParticipant]:
    """Ten identical 2/2/2 players; blue side wins."""
    return [MatchParticipant.model_validate(payloads.participant(pid)) for pid in range(1, 11)]


def _with(roster: list[MatchParticipant], participant_id: int, **changes) -> list[MatchParticipant]:
    return [
        p.model_copy(update=changes) if p.participant_id == participant_id else p for p in roster
    ]


# ============================================================================
# Sub-scores
# ============================================================================


class TestSubScores:
    def test_kda_ratio(self) -> None:
        assert calculate_kda(4, 2, 6) == 5.0
        assert calculate_kda(10, 0, 5) == 18.0
        assert calculate_kda(0, 0, 0) == 0.0

    def test_default_player(self, roster) -> None:
        sub = calculate_sub_scores(roster[0], 30.0, 15_000, 10_000, 10)

        assert sub.kda == 20.0
        assert sub.damage == 100.0
        assert sub.gold == 100.0
        assert sub.cs == 50.0  # 150 CS over 30 min
        assert sub.vision == pytest.approx(20 / 30 * 20)
        assert sub.participation == 40.0

    def test_caps_at_one_hundred(self, payloads) -> None:
        participant = MatchParticipant.model_validate(
            payloads.participant(
                1, kills=10, deaths=0, assists=5, totalMinionsKilled=400, visionScore=200
            )
        )

        sub = calculate_sub_scores(participant, 20.0, 15_000, 10_000, 10)

        assert sub.kda == 100.0  # min(15 * 1.2 * 10, 100)
        assert sub.cs == 100.0
        assert sub.vision == 100.0
        assert sub.participation == 100.0

    def test_damage_and_gold_relative_to_match_max(self, roster) -> None:
        roster = _with(roster, 3, total_damage_dealt_to_champions=30_000, gold_earned=20_000)

        board = calculate_scoreboard(roster, 1800)

        by_id = {s.participant_id: s for s in board.scores}
        assert by_id[3].sub_scores.damage == 100.0
        assert by_id[1].sub_scores.damage == 50.0
        assert by_id[1].sub_scores.gold == 50.0


class TestCompositeScore:
    def test_weighted_sum_with_win_bonus(self, roster) -> None:
        board = calculate_scoreboard(roster, 1800)

        blue = board.score_for("puuid-1")
        red = board.score_for("puuid-6")
        # 20*.25 + 100*.25 + 100*.15 + 50*.10 + 13.33*.10 + 40*.15
        assert red.total_score == pytest.approx(57.3333, abs=1e-3)
        assert blue.total_score == pytest.approx(red.total_score * 1.05)
        assert blue.win_bonus_applied is True
        assert red.win_bonus_applied is False

    def test_perfect_winner_example(self, roster) -> None:
        roster = _with(roster, 1, kills=10, deaths=0, assists=5)

        score = calculate_scoreboard(roster, 1800).score_for("puuid-1")

        assert score.sub_scores.kda == 100.0
        assert score.win_bonus_applied is True
        assert score.total_score == pytest.approx(composite_score(score.sub_scores, False) * 1.05)

    def test_total_is_not_clamped(self) -> None:
        from rift_coach.contracts.analysis_results import SubScores

        perfect = SubScores(kda=100, damage=100, gold=100, cs=100, vision=100, participation=100)

        assert composite_score(perfect, True) == pytest.approx(105.0)

    def test_weights_must_sum_to_one(self) -> None:
        with pytest.raises(ValidationError):
            ScoreWeights(kda=0.5)


class TestDivisionByZeroFloors:
    def test_zero_duration_and_empty_stats(self, payloads) -> None:
        roster = [
            MatchParticipant.model_validate(
                payloads.participant(
                    pid,
                    kills=0,
                    deaths=0,
                    assists=0,
                    goldEarned=0,
                    totalDamageDealtToChampions=0,
                    totalMinionsKilled=0,
                    visionScore=0,
                )
            )
            for pid in range(1, 11)
        ]

        board = calculate_scoreboard(roster, 0)

        assert len(board.scores) == 10
        assert all(s.sub_scores.participation == 0.0 for s in board.scores)
        assert all(s.sub_scores.damage == 0.0 for s in board.scores)

    def test_duration_floored_at_one_minute(self, roster) -> None:
        board = calculate_scoreboard(roster, 30)

        assert board.scores[0].sub_scores.cs == 100.0

    def test_empty_roster(self) -> None:
        board = calculate_scoreboard([], 1800)

        assert board.scores == []
        assert board.ranking == {}
        assert board.mvp_puuid is None


class TestRanking:
    def test_ranks_are_a_permutation(self, quiet_match) -> None:
        board = score_match(quiet_match)

        assert sorted(board.ranking.values()) == list(range(1, 11))
        assert len(board.ranking) == 10

    def test_ties_keep_input_order(self, roster) -> None:
        board = calculate_scoreboard(roster, 1800)

        assert [board.ranking[f"puuid-{pid}"] for pid in range(1, 11)] == list(range(1, 11))
        assert board.mvp_puuid == "puuid-1"

    def test_ties_follow_details_roster_order(self, payloads) -> None:
        # Identical stats and no winner: every score ties
        participants = [payloads.participant(pid, win=False) for pid in range(10, 0, -1)]
        match = payloads.normalized(details=payloads.details(participants))

        board = score_match(match)

        order = sorted(board.ranking, key=board.ranking.__getitem__)
        assert order == [f"puuid-{pid}" for pid in range(10, 0, -1)]
        assert board.mvp_puuid == "puuid-10"

    def test_ranking_is_stable_across_runs(self, roster) -> None:
        first = calculate_scoreboard(roster, 1800)
        second = calculate_scoreboard(list(roster), 1800)

        assert first.model_dump() == second.model_dump()

    def test_best_player_ranks_first(self, roster) -> None:
        roster = _with(
            roster, 8, kills=12, deaths=1, assists=4, total_damage_dealt_to_champions=40_000
        )

        board = calculate_scoreboard(roster, 1800)

        assert board.ranking["puuid-8"] == 1
        assert board.scores[0].champion_name == "Zed"

    def test_team_averages(self, roster) -> None:
        board = calculate_scoreboard(roster, 1800)

        assert board.team_blue_avg_score == pytest.approx(board.score_for("puuid-1").total_score)
        assert board.team_blue_avg_score > board.team_red_avg_score


class TestScoreLabel:
    @pytest.mark.parametrize(
        ("score", "label"),
        [
            (100, "Excellent"),
            (90, "Excellent"),
            (89.9, "Good"),
            (70, "Good"),
            (50, "Average"),
            (30, "Needs Work"),
            (29.9, "Critical"),
            (0, "Critical"),
        ],
    )
    def test_bands(self, score: float, label: str) -> None:
        assert score_label(score) == label
