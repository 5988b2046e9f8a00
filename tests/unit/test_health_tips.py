"""Unit tests for the health tip rotator."""

import asyncio
from itertools import islice

import pytest

from nutriscan.models import Language
from nutriscan.services.health_tips import HEALTH_TIPS, HealthTipRotator, tips_for


class TestHealthTipRotator:
    def test_cycles(self):
        rotator = HealthTipRotator(["a", "b", "c"])

        assert rotator.current == "a"
        assert [rotator.advance() for _ in range(4)] == ["b", "c", "a", "b"]

    def test_iteration_wraps(self):
        assert list(islice(HealthTipRotator(["a", "b"]), 5)) == ["a", "b", "a", "b", "a"]

    def test_restart(self):
        rotator = HealthTipRotator(["a", "b", "c"])
        rotator.advance()

        rotator.restart()

        assert rotator.current == "a"

    def test_restart_with_new_tips(self):
        rotator = HealthTipRotator.for_language(Language.ENGLISH)
        rotator.advance()

        rotator.restart(tips_for(Language.SPANISH))

        assert rotator.current == HEALTH_TIPS[Language.SPANISH][0]

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            HealthTipRotator([])
        with pytest.raises(ValueError):
            HealthTipRotator(["a"]).restart([])

    def test_every_language_has_tips(self):
        for language in Language:
            assert tips_for(language)

    @pytest.mark.asyncio
    async def test_rotate_publishes_until_cancelled(self):
        rotator = HealthTipRotator(["a", "b"])
        seen = []

        task = asyncio.create_task(rotator.rotate(seen.append, interval=0.01))
        while len(seen) < 4:
            await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert seen[:4] == ["a", "b", "a", "b"]
