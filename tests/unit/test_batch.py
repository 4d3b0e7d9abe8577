"""Unit tests for the async batch runner."""

import pytest

from rift_coach.contracts.analysis_results import MatchRequest
from rift_coach.core.pipeline import analyze_matches


def _request(payloads, match_id: str, *, frames: bool = True) -> MatchRequest:
    timeline = payloads.timeline(match_id=match_id)
    if not frames:
        timeline["info"]["frames"] = []
    return MatchRequest(
        match_id=match_id,
        timeline=timeline,
        details=payloads.details(match_id=match_id),
        puuid="puuid-1",
    )


class TestAnalyzeMatches:
    @pytest.mark.asyncio
    async def test_rejected_match_does_not_affect_others(self, payloads, settings) -> None:
        requests = [
            _request(payloads, "EUW1_1"),
            _request(payloads, "EUW1_2", frames=False),
            _request(payloads, "EUW1_3"),
        ]

        items = await analyze_matches(requests, settings=settings)

        assert list(items) == ["EUW1_1", "EUW1_2", "EUW1_3"]
        assert items["EUW1_1"].ok
        assert items["EUW1_3"].analysis.match_id == "EUW1_3"
        assert not items["EUW1_2"].ok
        assert "no frames" in items["EUW1_2"].error

    @pytest.mark.asyncio
    async def test_concurrency_limit_of_one(self, payloads, settings) -> None:
        settings = settings.model_copy(update={"batch_concurrency": 1})
        requests = [_request(payloads, f"EUW1_{n}") for n in range(3)]

        items = await analyze_matches(requests, settings=settings)

        assert all(item.ok for item in items.values())
        assert len(items) == 3

    @pytest.mark.asyncio
    async def test_results_match_single_analysis(self, payloads, settings) -> None:
        from rift_coach.core.pipeline import analyze_match

        request = _request(payloads, "EUW1_9")

        items = await analyze_matches([request], settings=settings)

        single = analyze_match(request.timeline, request.details, "puuid-1", settings=settings)
        assert items["EUW1_9"].analysis == single

    @pytest.mark.asyncio
    async def test_empty_batch(self, settings) -> None:
        assert await analyze_matches([], settings=settings) == {}
