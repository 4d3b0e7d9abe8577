"""Performance scorer - pure functions with zero I/O.

Scores every participant of a match from six sub-scores and ranks them:

1. KDA (25%)
2. Damage to champions, relative to the match maximum (25%)
3. Gold earned, relative to the match maximum (15%)
4. CS per minute (10%)
5. Vision score per minute (10%)
6. Kill participation (15%)

Winners get a 5% bonus on the composite. Ranking is a stable sort, so ties keep
the participants' input order and repeated runs rank identically.
"""

from collections.abc import Sequence

import numpy as np
import structlog

from rift_coach.contracts.analysis_results import MatchScoreboard, PerformanceScore, SubScores
from rift_coach.contracts.common import BLUE_TEAM_ID, RED_TEAM_ID
from rift_coach.contracts.match import MatchParticipant
from rift_coach.contracts.timeline import NormalizedMatch
from rift_coach.core.scoring.models import (
    CS_PER_MIN_SCALE,
    DEFAULT_WEIGHTS,
    KDA_SCALE,
    LOWEST_SCORE_LABEL,
    MAX_SUB_SCORE,
    PERFECT_KDA_MULTIPLIER,
    SCORE_LABELS,
    VISION_PER_MIN_SCALE,
    WIN_MULTIPLIER,
    ScoreWeights,
)

logger = structlog.get_logger(__name__)


def calculate_kda(kills: int, deaths: int, assists: int) -> float:
    """KDA ratio; a deathless game counts takedowns at 1.2x."""
    if deaths == 0:
        return (kills + assists) * PERFECT_KDA_MULTIPLIER
    return (kills + assists) / deaths


def calculate_sub_scores(
    participant: MatchParticipant,
    duration_minutes: float,
    max_damage: float,
    max_gold: float,
    team_kills: int,
) -> SubScores:
    """Six 0-100 sub-scores for one participant.

    ``max_damage``, ``max_gold``, ``team_kills`` and ``duration_minutes`` must
    already be floored at 1.
    """
    kda = calculate_kda(participant.kills, participant.deaths, participant.assists)
    takedowns = participant.kills + participant.assists

    return SubScores(
        kda=min(kda * KDA_SCALE, MAX_SUB_SCORE),
        damage=participant.total_damage_dealt_to_champions / max_damage * 100,
        gold=participant.gold_earned / max_gold * 100,
        cs=min(participant.cs / duration_minutes * CS_PER_MIN_SCALE, MAX_SUB_SCORE),
        vision=min(
            participant.vision_score / duration_minutes * VISION_PER_MIN_SCALE, MAX_SUB_SCORE
        ),
        participation=min(takedowns / team_kills * 100, MAX_SUB_SCORE),
    )


def composite_score(
    sub_scores: SubScores, win: bool, weights: ScoreWeights = DEFAULT_WEIGHTS
) -> float:
    """Weighted sum of the sub-scores, times 1.05 on a win (not clamped)."""
    total = (
        sub_scores.kda * weights.kda
        + sub_scores.damage * weights.damage
        + sub_scores.gold * weights.gold
        + sub_scores.cs * weights.cs
        + sub_scores.vision * weights.vision
        + sub_scores.participation * weights.participation
    )
    if win:
        total *= WIN_MULTIPLIER
    return total


def calculate_scoreboard(
    participants: Sequence[MatchParticipant],
    duration_seconds: int,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> MatchScoreboard:
    """Score and rank every participant of one match.

    Args:
        participants: The match roster, in input order (used to break ties)
        duration_seconds: Game duration; floored at one minute
        weights: Composite weights

    Returns:
        MatchScoreboard with scores in rank order and ``ranking`` mapping
        puuid -> rank (1 = best)
    """
    if not participants:
        return MatchScoreboard()

    duration_minutes = max(duration_seconds / 60, 1.0)
    max_damage = max(max(p.total_damage_dealt_to_champions for p in participants), 1)
    max_gold = max(max(p.gold_earned for p in participants), 1)

    team_kills: dict[int, int] = {}
    for participant in participants:
        team_kills[participant.team_id] = team_kills.get(participant.team_id, 0) + participant.kills

    scores: list[PerformanceScore] = []
    for participant in participants:
        sub_scores = calculate_sub_scores(
            participant,
            duration_minutes,
            max_damage,
            max_gold,
            max(team_kills[participant.team_id], 1),
        )
        scores.append(
            PerformanceScore(
                puuid=participant.puuid,
                participant_id=participant.participant_id,
                team_id=participant.team_id,
                champion_name=participant.champion_name,
                kda=calculate_kda(participant.kills, participant.deaths, participant.assists),
                sub_scores=sub_scores,
                total_score=composite_score(sub_scores, participant.win, weights),
                win_bonus_applied=participant.win,
            )
        )

    # sorted() is stable: equal scores keep roster order
    ranked = sorted(scores, key=lambda s: s.total_score, reverse=True)
    ranking = {score.puuid: rank for rank, score in enumerate(ranked, start=1)}

    blue_scores = [s.total_score for s in ranked if s.team_id == BLUE_TEAM_ID]
    red_scores = [s.total_score for s in ranked if s.team_id == RED_TEAM_ID]

    logger.debug(
        "match_scored",
        participants=len(ranked),
        mvp_puuid=ranked[0].puuid,
        top_score=ranked[0].total_score,
    )

    return MatchScoreboard(
        scores=ranked,
        ranking=ranking,
        mvp_puuid=ranked[0].puuid,
        team_blue_avg_score=np.mean(blue_scores).item() if blue_scores else 0.0,
        team_red_avg_score=np.mean(red_scores).item() if red_scores else 0.0,
    )


def score_match(
    match: NormalizedMatch, weights: ScoreWeights = DEFAULT_WEIGHTS
) -> MatchScoreboard:
    """Scoreboard for a normalized match; ties keep the details payload's roster order."""
    return calculate_scoreboard(list(match.participants.values()), match.duration_seconds, weights)


def score_label(score: float) -> str:
    """Human-readable band for a 0-100 score."""
    for lower_bound, label in SCORE_LABELS:
        if score >= lower_bound:
            return label
    return LOWEST_SCORE_LABEL
