"""
Data models for nutriscan.

Import everything from here rather than from the individual modules.
"""

from nutriscan.models.language import Language
from nutriscan.models.nutrition import (
    AnalysisMode,
    AnalysisRequest,
    AnalysisResult,
    HealthLevel,
    HealthyAlternative,
    ImageInput,
    ImageOnly,
    ImageWithClarification,
    Ingredient,
    Nutrient,
    TextDescription,
)
from nutriscan.models.meal_plan import (
    MEAL_SLOT_LABELS,
    BmiCategory,
    DayPlan,
    FastingType,
    Gender,
    Goal,
    Meal,
    MealPlan,
    PlanDuration,
    UserProfile,
)
from nutriscan.models.state import (
    AwaitingClarification,
    Error,
    Idle,
    Loading,
    ShowingPlan,
    ShowingResult,
    State,
    Task,
)

__all__ = [
    "Language",
    "AnalysisMode",
    "AnalysisRequest",
    "AnalysisResult",
    "HealthLevel",
    "HealthyAlternative",
    "ImageInput",
    "ImageOnly",
    "ImageWithClarification",
    "Ingredient",
    "Nutrient",
    "TextDescription",
    "MEAL_SLOT_LABELS",
    "BmiCategory",
    "DayPlan",
    "FastingType",
    "Gender",
    "Goal",
    "Meal",
    "MealPlan",
    "PlanDuration",
    "UserProfile",
    "AwaitingClarification",
    "Error",
    "Idle",
    "Loading",
    "ShowingPlan",
    "ShowingResult",
    "State",
    "Task",
]
