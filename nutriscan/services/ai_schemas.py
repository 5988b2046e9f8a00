"""
JSON schemas sent to the AI service as structural constraints.

Both are fixed and mode independent; the response models they describe live
in nutriscan.models.
"""

from nutriscan.models.meal_plan import MEAL_SLOT_LABELS
from nutriscan.models.nutrition import HealthLevel


def _nutrient_list(description: str = "") -> dict:
    schema = {
        "type": "array",
        "items": {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "amount": {"type": "string"},
            },
            "required": ["name", "amount"],
        },
    }
    if description:
        schema["description"] = description
    return schema


# --- Food analysis ---


ANALYSIS_OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "needsClarification": {
            "type": "boolean",
            "description": "True if the image is ambiguous and a description from the user is needed.",
        },
        "clarificationQuestion": {
            "type": "string",
            "description": "When needsClarification is true, the question to ask the user.",
        },
        "totalCalories": {
            "type": "integer",
            "description": "Estimated total calories for the whole dish.",
        },
        "healthLevel": {
            "type": "string",
            "enum": [level.value for level in HealthLevel],
            "description": "How healthy the dish is.",
        },
        "ingredients": {
            "type": "array",
            "description": "Main ingredients identified in the dish.",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "calories": {"type": "integer"},
                    "nutrients": _nutrient_list("Key nutrients (protein, carbohydrates, fat)."),
                    "vitamins": _nutrient_list("Key vitamins (e.g. Vitamin C, D, A)."),
                    "minerals": _nutrient_list("Key minerals (e.g. iron, calcium, potassium)."),
                    "fattyAcids": _nutrient_list("Key fatty acids (e.g. Omega-3)."),
                },
                "required": [
                    "name",
                    "calories",
                    "nutrients",
                    "vitamins",
                    "minerals",
                    "fattyAcids",
                ],
            },
        },
        "recommendation": {
            "type": "string",
            "description": "A short, useful recommendation about the dish.",
        },
        "healthyAlternatives": {
            "type": "array",
            "description": "3-4 healthier alternative meals with a short description.",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                },
                "required": ["name", "description"],
            },
        },
    },
    "required": ["needsClarification"],
}


# --- Meal plan ---


MEAL_PLAN_OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "summary": {"type": "string"},
        "fastingProtocol": {
            "type": "string",
            "description": "Fasting plans only. Fasting schedule and guidance.",
        },
        "fastingRecommendations": {
            "type": "string",
            "description": "Fasting plans only. Advice for the fasting period.",
        },
        "supplements": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Fasting plans only. Recommended supplements.",
        },
        "plan": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "day": {"type": "string"},
                    "meals": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "type": {"type": "string", "enum": list(MEAL_SLOT_LABELS)},
                                "name": {"type": "string"},
                                "description": {"type": "string"},
                                "calories": {"type": "integer"},
                                "nutrients": _nutrient_list(),
                                "vitamins": _nutrient_list(),
                                "minerals": _nutrient_list(),
                            },
                            "required": [
                                "type",
                                "name",
                                "description",
                                "calories",
                                "nutrients",
                                "vitamins",
                                "minerals",
                            ],
                        },
                    },
                },
                "required": ["day", "meals"],
            },
        },
    },
    "required": ["title", "summary", "plan"],
}
