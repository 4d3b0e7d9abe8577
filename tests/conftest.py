"""Pytest configuration and payload builders for rift-coach tests.

Payloads are built in the provider's camelCase wire format so every test goes
through the same validation path as production data.
"""

from collections.abc import Callable, Iterable
from typing import Any

import pytest

from rift_coach.config.settings import EngineSettings
from rift_coach.contracts.timeline import NormalizedMatch
from rift_coach.core.normalizer import normalize_match

POSITIONS = ["TOP", "JUNGLE", "MIDDLE", "BOTTOM", "UTILITY"]
CHAMPIONS = [
    "Darius",
    "LeeSin",
    "Ahri",
    "Jinx",
    "Thresh",
    "Garen",
    "Elise",
    "Zed",
    "Caitlyn",
    "Lulu",
]

MAP_CENTER = {"x": 7500, "y": 7500}
BLUE_FOUNTAIN = {"x": 500, "y": 500}

# Participant 1 (blue TOP) is the default analysed player
PLAYER_PUUID = "puuid-1"


def _minute(ts_ms: int) -> int:
    return ts_ms // 60_000


class PayloadBuilder:
    """Builds Match-V5 style timeline and details payloads."""

    def participant(self, participant_id: int, **overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "participantId": participant_id,
            "puuid": f"puuid-{participant_id}",
            "teamId": 100 if participant_id <= 5 else 200,
            "teamPosition": POSITIONS[(participant_id - 1) % 5],
            "championName": CHAMPIONS[participant_id - 1],
            "kills": 2,
            "deaths": 2,
            "assists": 2,
            "win": participant_id <= 5,
            "goldEarned": 10_000,
            "totalDamageDealtToChampions": 15_000,
            "totalMinionsKilled": 150,
            "neutralMinionsKilled": 0,
            "visionScore": 20,
        }
        data.update(overrides)
        return data

    def details(
        self,
        participants: list[dict[str, Any]] | None = None,
        *,
        match_id: str = "EUW1_1000",
        game_duration: int = 1800,
        overrides: dict[int, dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Match details; ``overrides`` maps participant id -> changed fields."""
        if participants is None:
            overrides = overrides or {}
            participants = [self.participant(pid, **overrides.get(pid, {})) for pid in range(1, 11)]
        return {
            "metadata": {"matchId": match_id},
            "info": {"gameDuration": game_duration, "participants": participants},
        }

    def timeline(
        self,
        frame_count: int = 31,
        events: Iterable[dict[str, Any]] = (),
        *,
        match_id: str = "EUW1_1000",
        cs: Callable[[int, int], int] | None = None,
        position: Callable[[int, int], dict[str, int] | None] | None = None,
    ) -> dict[str, Any]:
        """Timeline with one frame per minute.

        ``cs(minute, participant_id)`` and ``position(minute, participant_id)``
        override the defaults (7 CS per minute, standing at map centre). Events
        are placed in the frame of their minute.
        """
        cs = cs or (lambda minute, pid: minute * 7)
        position = position or (lambda minute, pid: MAP_CENTER)

        frames: list[dict[str, Any]] = []
        for minute in range(frame_count):
            participant_frames = {}
            for pid in range(1, 11):
                frame: dict[str, Any] = {
                    "participantId": pid,
                    "currentGold": 500,
                    "totalGold": 500 + minute * 400,
                    "level": min(1 + minute // 2, 18),
                    "xp": minute * 500,
                    "minionsKilled": cs(minute, pid),
                    "jungleMinionsKilled": 0,
                }
                pos = position(minute, pid)
                if pos is not None:
                    frame["position"] = pos
                participant_frames[str(pid)] = frame
            frames.append(
                {
                    "timestamp": minute * 60_000,
                    "participantFrames": participant_frames,
                    "events": [],
                }
            )

        for event in events:
            index = min(_minute(event["timestamp"]), frame_count - 1)
            frames[index]["events"].append(event)

        return {
            "metadata": {"matchId": match_id},
            "info": {
                "frameInterval": 60_000,
                "frames": frames,
                "participants": [
                    {"participantId": pid, "puuid": f"puuid-{pid}"} for pid in range(1, 11)
                ],
            },
        }

    # Events

    def kill(
        self, ts_ms: int, killer: int, victim: int, assists: Iterable[int] = ()
    ) -> dict[str, Any]:
        return {
            "type": "CHAMPION_KILL",
            "timestamp": ts_ms,
            "killerId": killer,
            "victimId": victim,
            "assistingParticipantIds": list(assists),
            "position": MAP_CENTER,
        }

    def ward_placed(
        self, ts_ms: int, creator: int, ward_type: str = "YELLOW_TRINKET"
    ) -> dict[str, Any]:
        return {
            "type": "WARD_PLACED",
            "timestamp": ts_ms,
            "creatorId": creator,
            "wardType": ward_type,
        }

    def ward_kill(
        self, ts_ms: int, killer: int, ward_type: str = "YELLOW_TRINKET"
    ) -> dict[str, Any]:
        return {"type": "WARD_KILL", "timestamp": ts_ms, "killerId": killer, "wardType": ward_type}

    def monster(
        self,
        ts_ms: int,
        killer: int,
        monster_type: str,
        sub_type: str | None = None,
        killer_team_id: int | None = None,
    ) -> dict[str, Any]:
        event: dict[str, Any] = {
            "type": "ELITE_MONSTER_KILL",
            "timestamp": ts_ms,
            "killerId": killer,
            "monsterType": monster_type,
        }
        if sub_type is not None:
            event["monsterSubType"] = sub_type
        if killer_team_id is not None:
            event["killerTeamId"] = killer_team_id
        return event

    def tower(self, ts_ms: int, killer: int, team_id: int) -> dict[str, Any]:
        return {
            "type": "BUILDING_KILL",
            "timestamp": ts_ms,
            "killerId": killer,
            "buildingType": "TOWER_BUILDING",
            "teamId": team_id,
            "towerType": "OUTER_TURRET",
            "laneType": "MID_LANE",
        }

    def normalized(
        self,
        events: Iterable[dict[str, Any]] = (),
        *,
        puuid: str = PLAYER_PUUID,
        frame_count: int = 31,
        details: dict[str, Any] | None = None,
        **timeline_kwargs: Any,
    ) -> NormalizedMatch:
        timeline = self.timeline(frame_count, events, **timeline_kwargs)
        return normalize_match(timeline, details or self.details(), puuid)


@pytest.fixture
def payloads() -> PayloadBuilder:
    return PayloadBuilder()


@pytest.fixture
def settings() -> EngineSettings:
    """Settings independent of the developer's environment."""
    return EngineSettings(
        log_level="DEBUG",
        log_json=True,
        max_tips=5,
        low_score_threshold=60.0,
        batch_concurrency=4,
        _env_file=None,
    )


@pytest.fixture
def quiet_match(payloads: PayloadBuilder) -> NormalizedMatch:
    """31-minute match with even farm, no events, everyone at map centre."""
    return payloads.normalized()
