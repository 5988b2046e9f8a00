"""
Unit tests for response parsing and normalization.

Tests the JSON parsing helpers, field coercions, health level mapping and
the per-mode validation gate.
"""

import json

import pytest

from nutriscan.models import (
    AnalysisMode,
    AnalysisResult,
    DayPlan,
    Goal,
    HealthLevel,
    HealthyAlternative,
    Ingredient,
    Meal,
    MealPlan,
    Nutrient,
)
from nutriscan.services.errors import (
    AnalysisContractError,
    MalformedResponse,
    MealPlanContractError,
)
from nutriscan.services.response_normalizer import (
    _fix_trailing_commas,
    _strip_markdown_json,
    canonical_health_level,
    normalize_analysis,
    normalize_meal_plan,
    parse_json,
)
from tests.fixtures.mocks import analysis_payload, clarification_payload, meal_plan_payload


# =============================================================================
# JSON Parsing
# =============================================================================


class TestParseJson:
    @pytest.mark.parametrize("raw", ["", "   ", "\n", None, "{not json", "{", "null"])
    def test_malformed_raises(self, raw):
        with pytest.raises(MalformedResponse):
            parse_json(raw)

    @pytest.mark.parametrize("raw", ["[1, 2]", '"text"', "42", "true"])
    def test_non_object_raises(self, raw):
        with pytest.raises(MalformedResponse):
            parse_json(raw)

    def test_plain_object(self):
        assert parse_json('{"a": 1}') == {"a": 1}

    def test_markdown_fence_stripped(self):
        raw = 'Here you go:\n```json\n{"a": 1}\n```'
        assert parse_json(raw) == {"a": 1}

    def test_trailing_commas_repaired(self):
        assert parse_json('{"a": [1, 2,], "b": 3,}') == {"a": [1, 2], "b": 3}

    def test_well_formed_strings_left_untouched(self):
        raw = json.dumps({"note": "keep ```this``` and this ,}"})
        assert parse_json(raw) == {"note": "keep ```this``` and this ,}"}


class TestJsonHelpers:
    def test_strip_markdown_json(self):
        assert _strip_markdown_json('```json\n{"x": 1}\n```') == '{"x": 1}'

    def test_strip_plain_fence(self):
        assert _strip_markdown_json('```\n{"x": 1}\n```') == '{"x": 1}'

    def test_strip_no_fence(self):
        assert _strip_markdown_json('{"x": 1}') == '{"x": 1}'

    def test_fix_trailing_commas(self):
        assert _fix_trailing_commas('{"a": [1,],}') == '{"a": [1]}'


# =============================================================================
# Health Level Mapping
# =============================================================================


class TestCanonicalHealthLevel:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Healthy", HealthLevel.HEALTHY),
            ("healthy", HealthLevel.HEALTHY),
            ("Saludable", HealthLevel.HEALTHY),
            ("Moderado", HealthLevel.MODERATE),
            ("MODERATE", HealthLevel.MODERATE),
            ("Poco Saludable", HealthLevel.UNHEALTHY),
            ("poco_saludable", HealthLevel.UNHEALTHY),
            ("Unhealthy", HealthLevel.UNHEALTHY),
            ("not-healthy", HealthLevel.UNHEALTHY),
        ],
    )
    def test_known_spellings(self, raw, expected):
        assert canonical_health_level(raw) is expected

    def test_unknown_left_as_is(self):
        assert canonical_health_level("Excellent") == "Excellent"

    def test_non_string_left_as_is(self):
        assert canonical_health_level(None) is None


# =============================================================================
# Analysis Normalization
# =============================================================================


class TestNormalizeAnalysis:
    def test_full_analysis(self):
        result = normalize_analysis(json.dumps(analysis_payload()))

        assert result.needs_clarification is False
        assert result.total_calories == 450
        assert result.health_level is HealthLevel.HEALTHY
        assert result.ingredients[0].fatty_acids[0].name == "Omega-6"
        assert result.healthy_alternatives[0].name == "Chicken and quinoa bowl"

    def test_clarification_on_image_only(self):
        result = normalize_analysis(json.dumps(clarification_payload("What dish is this?")))

        assert result.needs_clarification is True
        assert result.clarification_question == "What dish is this?"
        assert result.total_calories is None

    def test_clarification_drops_analysis_fields(self):
        payload = analysis_payload(needsClarification=True, clarificationQuestion="Soup?")

        result = normalize_analysis(json.dumps(payload))

        assert result.total_calories is None
        assert result.ingredients is None
        assert result.health_level is None

    def test_clarification_without_question_is_contract_error(self):
        with pytest.raises(AnalysisContractError):
            normalize_analysis('{"needsClarification": true}')

    @pytest.mark.parametrize("missing", ["totalCalories", "healthLevel", "ingredients"])
    def test_incomplete_analysis_is_contract_error(self, missing):
        payload = analysis_payload()
        del payload[missing]

        with pytest.raises(AnalysisContractError):
            normalize_analysis(json.dumps(payload))

    def test_wrong_types_are_contract_error(self):
        with pytest.raises(AnalysisContractError):
            normalize_analysis(json.dumps(analysis_payload(totalCalories="lots")))

    def test_malformed_text_raises_malformed(self):
        with pytest.raises(MalformedResponse):
            normalize_analysis("{not json")

    def test_non_string_fields_stringified(self):
        payload = analysis_payload(recommendation={"tip": "eat greens"})

        result = normalize_analysis(json.dumps(payload))

        assert result.recommendation == '{"tip": "eat greens"}'

    def test_non_string_question_stringified(self):
        payload = {"needsClarification": True, "clarificationQuestion": 42}

        result = normalize_analysis(json.dumps(payload))

        assert result.clarification_question == "42"

    def test_legacy_health_level_mapped(self):
        result = normalize_analysis(json.dumps(analysis_payload(healthLevel="Poco Saludable")))

        assert result.health_level is HealthLevel.UNHEALTHY

    def test_unknown_health_level_kept_and_rendered_moderate(self):
        result = normalize_analysis(json.dumps(analysis_payload(healthLevel="Superb")))

        assert result.health_level == "Superb"
        assert result.display_health_level is HealthLevel.MODERATE

    def test_stray_question_dropped_on_full_analysis(self):
        payload = analysis_payload(clarificationQuestion="Unused?")

        result = normalize_analysis(json.dumps(payload))

        assert result.clarification_question is None

    @pytest.mark.parametrize(
        "mode", [AnalysisMode.IMAGE_WITH_CLARIFICATION, AnalysisMode.TEXT_DESCRIPTION]
    )
    def test_context_modes_reject_clarification(self, mode):
        with pytest.raises(AnalysisContractError):
            normalize_analysis(json.dumps(clarification_payload()), mode)

    @pytest.mark.parametrize(
        "mode", [AnalysisMode.IMAGE_WITH_CLARIFICATION, AnalysisMode.TEXT_DESCRIPTION]
    )
    def test_context_modes_reject_missing_calories(self, mode):
        payload = analysis_payload()
        del payload["totalCalories"]

        with pytest.raises(AnalysisContractError):
            normalize_analysis(json.dumps(payload), mode)

    @pytest.mark.parametrize(
        "mode", [AnalysisMode.IMAGE_WITH_CLARIFICATION, AnalysisMode.TEXT_DESCRIPTION]
    )
    def test_context_modes_accept_full_analysis(self, mode):
        result = normalize_analysis(json.dumps(analysis_payload()), mode)

        assert result.total_calories == 450

    def test_round_trip(self):
        original = AnalysisResult(
            needs_clarification=False,
            total_calories=620,
            health_level=HealthLevel.UNHEALTHY,
            ingredients=[
                Ingredient(
                    name="chocolate cake",
                    calories=620,
                    nutrients=[Nutrient(name="Sugar", amount="48g")],
                    vitamins=[],
                    minerals=[Nutrient(name="Iron", amount="3mg")],
                    fatty_acids=[Nutrient(name="Saturated fat", amount="14g")],
                )
            ],
            recommendation="Share it.",
            healthy_alternatives=[
                HealthyAlternative(name="Dark chocolate", description="Two squares.")
            ],
        )

        assert normalize_analysis(json.dumps(original.to_wire())) == original

    def test_wire_shape_uses_camel_case(self):
        wire = normalize_analysis(json.dumps(analysis_payload())).to_wire()

        assert wire["needsClarification"] is False
        assert wire["totalCalories"] == 450
        assert "fattyAcids" in wire["ingredients"][0]
        assert "clarificationQuestion" not in wire


# =============================================================================
# Meal Plan Normalization
# =============================================================================


class TestNormalizeMealPlan:
    def test_well_formed_plan(self):
        plan = normalize_meal_plan(json.dumps(meal_plan_payload()), goal=Goal.LOSE_WEIGHT)

        assert plan.title == "Balanced Week"
        assert plan.plan[0].meals[1].name == "Baked salmon"
        assert plan.fasting_protocol is None

    def test_fasting_plan_keeps_fasting_fields(self):
        plan = normalize_meal_plan(
            json.dumps(meal_plan_payload(fasting=True)), goal=Goal.INTERMITTENT_FASTING
        )

        assert plan.fasting_protocol.startswith("Fast from 20:00")
        assert plan.supplements == ["Magnesium", "Electrolytes", "Vitamin D"]

    def test_non_fasting_plan_drops_fasting_fields(self):
        plan = normalize_meal_plan(
            json.dumps(meal_plan_payload(fasting=True)), goal=Goal.GENERAL_HEALTH
        )

        assert plan.fasting_protocol is None
        assert plan.fasting_recommendations is None
        assert plan.supplements is None

    def test_missing_title_uses_default(self):
        payload = meal_plan_payload()
        del payload["title"]

        plan = normalize_meal_plan(json.dumps(payload), default_title="Plan de Comidas")

        assert plan.title == "Plan de Comidas"

    def test_non_string_title_and_summary_stringified(self):
        payload = meal_plan_payload(title=2024, summary=["short", "plan"])

        plan = normalize_meal_plan(json.dumps(payload))

        assert plan.title == "2024"
        assert plan.summary == '["short", "plan"]'

    def test_missing_summary_becomes_empty(self):
        payload = meal_plan_payload()
        del payload["summary"]

        assert normalize_meal_plan(json.dumps(payload)).summary == ""

    def test_supplement_items_stringified(self):
        payload = meal_plan_payload(fasting=True, supplements=["Zinc", 3])

        plan = normalize_meal_plan(json.dumps(payload), goal=Goal.INTERMITTENT_FASTING)

        assert plan.supplements == ["Zinc", "3"]

    def test_missing_plan_is_contract_error(self):
        payload = meal_plan_payload()
        del payload["plan"]

        with pytest.raises(MealPlanContractError):
            normalize_meal_plan(json.dumps(payload))

    def test_malformed_raises(self):
        with pytest.raises(MalformedResponse):
            normalize_meal_plan("")

    def test_round_trip(self):
        original = MealPlan(
            title="Fasting Week",
            summary="16:8 plan",
            plan=[
                DayPlan(
                    day="Day 1",
                    meals=[
                        Meal(
                            type="Break Fast",
                            name="Eggs and avocado",
                            description="Two eggs with half an avocado.",
                            calories=420,
                            nutrients=[Nutrient(name="Protein", amount="18g")],
                            vitamins=[Nutrient(name="Vitamin E", amount="2mg")],
                            minerals=[Nutrient(name="Potassium", amount="500mg")],
                        )
                    ],
                )
            ],
            fasting_protocol="Eat between 12:00 and 20:00.",
            fasting_recommendations="Water and tea while fasting.",
            supplements=["Magnesium"],
        )

        result = normalize_meal_plan(
            json.dumps(original.to_wire()), goal=Goal.INTERMITTENT_FASTING
        )

        assert result == original
