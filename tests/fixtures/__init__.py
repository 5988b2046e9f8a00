"""Test fixtures for nutriscan."""

from tests.fixtures.mocks import (
    MockOracleClient,
    analysis_payload,
    clarification_payload,
    meal_plan_payload,
)

__all__ = [
    "MockOracleClient",
    "analysis_payload",
    "clarification_payload",
    "meal_plan_payload",
]
