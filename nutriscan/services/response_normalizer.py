"""
Parsing and normalization of raw AI responses.

The AI service guarantees nothing about its text; this module is the only
validation layer. Malformed text always raises, it is never replaced by a
default result.
"""

import json
import logging
import re
from typing import Any, Optional

from pydantic import ValidationError

from nutriscan.models.meal_plan import Goal, MealPlan
from nutriscan.models.nutrition import AnalysisMode, AnalysisResult, HealthLevel
from nutriscan.services.errors import (
    AnalysisContractError,
    MalformedResponse,
    MealPlanContractError,
)

logger = logging.getLogger(__name__)

# Alternate spellings seen from the service, keyed by their folded form
HEALTH_LEVEL_ALIASES = {
    "healthy": HealthLevel.HEALTHY,
    "saludable": HealthLevel.HEALTHY,
    "moderate": HealthLevel.MODERATE,
    "moderado": HealthLevel.MODERATE,
    "moderada": HealthLevel.MODERATE,
    "unhealthy": HealthLevel.UNHEALTHY,
    "not healthy": HealthLevel.UNHEALTHY,
    "poco saludable": HealthLevel.UNHEALTHY,
    "no saludable": HealthLevel.UNHEALTHY,
}

FASTING_FIELDS = ("fastingProtocol", "fastingRecommendations", "supplements")


def _strip_markdown_json(text: str) -> str:
    """Strip markdown code block wrappers from JSON text."""
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()
    return text


def _fix_trailing_commas(text: str) -> str:
    """Fix trailing commas in JSON (common LLM error)."""
    text = re.sub(r",\s*}", "}", text)
    text = re.sub(r",\s*]", "]", text)
    return text


def _stringify(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def parse_json(raw_text: Optional[str]) -> dict:
    """
    Parse raw response text into a JSON object.

    Well-formed text is parsed as-is; markdown fences and trailing commas are
    only repaired when the plain parse fails.

    Raises:
        MalformedResponse: Empty text, invalid JSON, or a non-object value
    """
    if raw_text is None or not raw_text.strip():
        raise MalformedResponse("AI service returned an empty response")

    text = raw_text.strip()
    stripped = _strip_markdown_json(text)
    candidates = [text, stripped, _fix_trailing_commas(stripped)]

    data = None
    last_error = None
    for candidate in candidates:
        try:
            data = json.loads(candidate)
            break
        except json.JSONDecodeError as e:
            last_error = e
    else:
        logger.warning("Unparseable AI response: %.200s", text)
        raise MalformedResponse(f"AI response is not valid JSON: {last_error}")

    if not isinstance(data, dict):
        raise MalformedResponse(
            f"AI response is a JSON {type(data).__name__}, expected an object"
        )
    return data


def canonical_health_level(value: Any) -> Any:
    """
    Map alternate health level spellings onto HealthLevel.

    Unrecognised strings are returned unchanged; they render with Moderate
    styling (see AnalysisResult.display_health_level).
    """
    if not isinstance(value, str):
        return value
    folded = " ".join(value.replace("_", " ").replace("-", " ").lower().split())
    level = HEALTH_LEVEL_ALIASES.get(folded)
    if level is None:
        logger.warning("Unrecognised health level from AI service: %r", value)
        return value
    return level


def normalize_analysis(
    raw_text: str, mode: AnalysisMode = AnalysisMode.IMAGE_ONLY
) -> AnalysisResult:
    """
    Parse, coerce and validate a food analysis response.

    Args:
        raw_text: Raw response text from the AI service
        mode: The analysis mode the request was made in

    Returns:
        Either a clarification request (IMAGE_ONLY only) or a complete analysis

    Raises:
        MalformedResponse: Text is empty or not a JSON object
        AnalysisContractError: The response violates the shape required for
            the mode (e.g. a clarification request on a context-driven call)
    """
    data = parse_json(raw_text)
    mode = AnalysisMode(mode)

    for key in ("clarificationQuestion", "recommendation"):
        if key in data:
            data[key] = _stringify(data[key])

    if data.get("healthLevel") is not None:
        data["healthLevel"] = canonical_health_level(_stringify(data["healthLevel"]))

    try:
        result = AnalysisResult.model_validate(data)
    except ValidationError as e:
        raise AnalysisContractError(f"Analysis response has an invalid shape: {e}") from e

    if result.needs_clarification:
        if mode != AnalysisMode.IMAGE_ONLY:
            raise AnalysisContractError(
                f"AI service asked for clarification on a {mode.value} request"
            )
        if not result.clarification_question:
            raise AnalysisContractError("Clarification requested without a question")
        return result.model_copy(
            update={"total_calories": None, "health_level": None, "ingredients": None}
        )

    missing = [
        name
        for name in ("total_calories", "health_level", "ingredients")
        if getattr(result, name) is None
    ]
    if missing:
        raise AnalysisContractError(
            f"Analysis response is missing {', '.join(missing)}"
        )

    if result.clarification_question is not None:
        result = result.model_copy(update={"clarification_question": None})
    return result


def normalize_meal_plan(
    raw_text: str, goal: Optional[Goal] = None, default_title: str = "Meal Plan"
) -> MealPlan:
    """
    Parse, coerce and validate a meal plan response.

    Args:
        raw_text: Raw response text from the AI service
        goal: Goal of the profile the plan was generated for; fasting fields
              are dropped for any goal other than intermittent fasting
        default_title: Title used when the response has none

    Raises:
        MalformedResponse: Text is empty or not a JSON object
        MealPlanContractError: The plan does not have the expected shape
    """
    data = parse_json(raw_text)

    data["title"] = _stringify(data.get("title")) or default_title
    data["summary"] = _stringify(data.get("summary")) or ""
    for key in ("fastingProtocol", "fastingRecommendations"):
        if key in data:
            data[key] = _stringify(data[key])

    supplements = data.get("supplements")
    if supplements is not None:
        if not isinstance(supplements, list):
            supplements = [supplements]
        data["supplements"] = [_stringify(item) for item in supplements]

    if goal is not None and Goal(goal) != Goal.INTERMITTENT_FASTING:
        for key in FASTING_FIELDS:
            if data.pop(key, None) is not None:
                logger.debug("Dropped %s from a non-fasting meal plan", key)

    try:
        plan = MealPlan.model_validate(data)
    except ValidationError as e:
        raise MealPlanContractError(f"Meal plan response has an invalid shape: {e}") from e

    if goal is not None and Goal(goal) == Goal.INTERMITTENT_FASTING and not plan.fasting_protocol:
        logger.warning("Fasting meal plan arrived without a fasting protocol")

    return plan
