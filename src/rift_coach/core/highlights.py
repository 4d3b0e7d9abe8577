"""Event-cluster extractor.

Walks the event stream once, keeps the events that matter to one player
(deaths, kills, assists, team objectives, enemy towers), detects multikills and
turns everything into review clips, merging clips that are close in time.
"""

from collections.abc import Iterable

import structlog

from rift_coach.contracts.analysis_results import Clip, Highlight, HighlightReport
from rift_coach.contracts.common import HighlightType, Severity
from rift_coach.contracts.events import (
    BuildingKillEvent,
    BuildingType,
    ChampionKillEvent,
    EliteMonsterKillEvent,
    MonsterType,
)
from rift_coach.contracts.timeline import NormalizedMatch

logger = structlog.get_logger(__name__)

MULTIKILL_GAP_SECONDS = 10
CLIP_LEAD_SECONDS = 15
CLIP_TAIL_SECONDS = 10
CLIP_DURATION_SECONDS = CLIP_LEAD_SECONDS + CLIP_TAIL_SECONDS
CLIP_MERGE_GAP_SECONDS = 5

MULTIKILL_LABELS = {2: "Double Kill", 3: "Triple Kill", 4: "Quadra Kill", 5: "Penta Kill"}
TEAM_OBJECTIVES = frozenset(
    {MonsterType.DRAGON.value, MonsterType.BARON_NASHOR.value, MonsterType.RIFTHERALD.value}
)


def extract_highlights(
    match: NormalizedMatch, participant_id: int | None = None
) -> HighlightReport:
    """Extract the player's highlights and merged clips from a normalized match.

    Events must be in non-decreasing timestamp order (the normalizer guarantees
    it); clip merging is a single ordered pass.
    """
    player_id = participant_id if participant_id is not None else match.player_id
    player_team = match.team_of(player_id)

    highlights: list[Highlight] = []
    kill_times: list[int] = []

    for event in match.events:
        seconds = event.timestamp // 1000

        if isinstance(event, ChampionKillEvent):
            victim = match.champion_name(event.victim_id)
            killer = match.champion_name(event.killer_id)

            if event.victim_id == player_id:
                highlights.append(
                    Highlight(
                        type=HighlightType.DEATH,
                        timestamp=seconds,
                        description=f"Killed by {killer}",
                        severity=Severity.CRITICAL,
                        involved_champions=[killer],
                    )
                )
            if event.killer_id == player_id:
                kill_times.append(seconds)
                highlights.append(
                    Highlight(
                        type=HighlightType.KILL,
                        timestamp=seconds,
                        description=f"Kill on {victim}",
                        severity=Severity.MEDIUM,
                        involved_champions=[victim],
                    )
                )
            if player_id in event.assisting_participant_ids:
                highlights.append(
                    Highlight(
                        type=HighlightType.ASSIST,
                        timestamp=seconds,
                        description=f"Assist on {victim} (kill by {killer})",
                        severity=Severity.MEDIUM,
                        involved_champions=[victim, killer],
                    )
                )

        elif isinstance(event, EliteMonsterKillEvent):
            own_team = event.killer_team_id is not None and event.killer_team_id == player_team
            if event.killer_id == player_id or (own_team and event.monster_type in TEAM_OBJECTIVES):
                monster = event.monster_type
                if event.monster_sub_type:
                    monster = f"{event.monster_sub_type} {monster}"
                highlights.append(
                    Highlight(
                        type=HighlightType.OBJECTIVE,
                        timestamp=seconds,
                        description=f"{'Secured' if own_team else 'Lost'} {monster}",
                        severity=(
                            Severity.CRITICAL
                            if event.monster_type == MonsterType.BARON_NASHOR
                            else Severity.HIGH
                        ),
                    )
                )

        elif isinstance(event, BuildingKillEvent):
            # team_id is the team that owned the destroyed tower
            if event.building_type == BuildingType.TOWER_BUILDING and event.team_id != player_team:
                highlights.append(
                    Highlight(
                        type=HighlightType.TOWER,
                        timestamp=seconds,
                        description="Tower destroyed by your team",
                        severity=Severity.MEDIUM,
                    )
                )

    highlights.extend(detect_multikills(kill_times))
    # Stable: a multikill lands after the kill that opened it
    highlights.sort(key=lambda h: h.timestamp)

    clips = merge_clips(build_clips(highlights))
    total_deaths = sum(1 for h in highlights if h.type == HighlightType.DEATH)

    logger.debug(
        "highlights_extracted",
        match_id=match.match_id,
        participant_id=player_id,
        events=len(highlights),
        clips=len(clips),
    )

    return HighlightReport(
        player_champion=match.champion_name(player_id),
        events=highlights,
        clips=clips,
        total_deaths=total_deaths,
        total_kills=len(kill_times),
    )


def multikill_label(size: int) -> str:
    return MULTIKILL_LABELS[min(size, 5)]


def detect_multikills(kill_times: Iterable[int]) -> list[Highlight]:
    """Group kills (seconds) into multikills.

    A new cluster starts whenever the gap to the previous kill exceeds 10 s. Each
    cluster of two or more kills yields one highlight at its first kill; the last
    cluster is flushed after the loop.
    """
    multikills: list[Highlight] = []
    cluster: list[int] = []

    def flush() -> None:
        if len(cluster) < 2:
            return
        multikills.append(
            Highlight(
                type=HighlightType.MULTIKILL,
                timestamp=cluster[0],
                description=multikill_label(len(cluster)),
                severity=Severity.CRITICAL if len(cluster) >= 4 else Severity.HIGH,
            )
        )

    for kill_time in sorted(kill_times):
        if cluster and kill_time - cluster[-1] > MULTIKILL_GAP_SECONDS:
            flush()
            cluster = []
        cluster.append(kill_time)
    flush()

    return multikills


def build_clips(highlights: Iterable[Highlight]) -> list[Clip]:
    """One 25 s candidate clip per highlight: 15 s before to 10 s after."""
    return [
        Clip(
            id=f"clip-{index}",
            type=highlight.type,
            timestamp=highlight.timestamp,
            start_time=max(0, highlight.timestamp - CLIP_LEAD_SECONDS),
            end_time=highlight.timestamp + CLIP_TAIL_SECONDS,
            duration=CLIP_DURATION_SECONDS,
            severity=highlight.severity,
            description=highlight.description,
            involved_champions=highlight.involved_champions,
        )
        for index, highlight in enumerate(highlights)
    ]


def merge_clips(clips: Iterable[Clip]) -> list[Clip]:
    """Merge clips left to right.

    A clip joins the previous one when it starts within 5 s of that clip's end.
    The merged clip keeps the first clip's id and start, extends its end, becomes
    critical if either side is critical and joins descriptions with `` + ``.
    """
    merged: list[Clip] = []
    for clip in clips:
        if merged and clip.start_time <= merged[-1].end_time + CLIP_MERGE_GAP_SECONDS:
            previous = merged[-1]
            end_time = max(previous.end_time, clip.end_time)
            critical = Severity.CRITICAL in (previous.severity, clip.severity)
            champions = list(previous.involved_champions)
            champions.extend(c for c in clip.involved_champions if c not in champions)
            merged[-1] = previous.model_copy(
                update={
                    "end_time": end_time,
                    "duration": end_time - previous.start_time,
                    "severity": Severity.CRITICAL.value if critical else previous.severity,
                    "description": f"{previous.description} + {clip.description}",
                    "involved_champions": champions,
                }
            )
        else:
            merged.append(clip)
    return merged
