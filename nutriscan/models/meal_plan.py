"""Health profile and meal plan models."""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from nutriscan.models.nutrition import Nutrient, OracleModel


class Goal(str, Enum):
    MAINTAIN_WEIGHT = "maintain_weight"
    LOSE_WEIGHT = "lose_weight"
    GAIN_MUSCLE = "gain_muscle"
    GENERAL_HEALTH = "general_health"
    INTERMITTENT_FASTING = "intermittent_fasting"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class PlanDuration(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class FastingType(str, Enum):
    SIXTEEN_EIGHT = "16:8"
    EIGHTEEN_SIX = "18:6"
    TWENTY_FOUR = "20:4"


class BmiCategory(str, Enum):
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


# Slot labels the oracle may use, in both supported locales
MEAL_SLOT_LABELS = [
    "Desayuno",
    "Almuerzo",
    "Cena",
    "Snack",
    "Romper Ayuno",
    "Comida",
    "Breakfast",
    "Lunch",
    "Dinner",
    "Break Fast",
    "Meal",
]


class UserProfile(BaseModel):
    """Answers from the meal planner form."""

    goal: Goal = Goal.GENERAL_HEALTH
    gender: Gender = Gender.FEMALE
    age: int = Field(default=30, ge=1, le=120)
    weight: Optional[str] = None  # kg, as typed
    height: Optional[str] = None  # cm, as typed
    restrictions: str = ""
    dislikes: str = ""
    plan_duration: PlanDuration = PlanDuration.WEEK
    fasting_type: Optional[FastingType] = None

    @field_validator("weight", "height", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def check_fasting_type(self):
        if self.goal == Goal.INTERMITTENT_FASTING:
            if self.fasting_type is None:
                raise ValueError("fasting_type is required for intermittent fasting")
        else:
            self.fasting_type = None
        return self

    @property
    def is_fasting(self) -> bool:
        return self.goal == Goal.INTERMITTENT_FASTING

    def bmi(self) -> Optional[tuple[float, BmiCategory]]:
        """
        Body-mass index from weight (kg) and height (cm).

        Returns:
            (bmi rounded to one decimal, category), or None when either
            measurement is missing or not a positive number
        """
        try:
            weight = float(self.weight or 0)
            height_m = float(self.height or 0) / 100
        except ValueError:
            return None
        if not (math.isfinite(weight) and math.isfinite(height_m)):
            return None
        if weight <= 0 or height_m <= 0:
            return None

        value = weight / (height_m * height_m)
        if value < 18.5:
            category = BmiCategory.UNDERWEIGHT
        elif value < 25:
            category = BmiCategory.NORMAL
        elif value < 30:
            category = BmiCategory.OVERWEIGHT
        else:
            category = BmiCategory.OBESE
        return round(value, 1), category


class Meal(OracleModel):
    type: str  # one of MEAL_SLOT_LABELS
    name: str
    description: str
    calories: Optional[int] = None
    nutrients: Optional[list[Nutrient]] = None
    vitamins: Optional[list[Nutrient]] = None
    minerals: Optional[list[Nutrient]] = None


class DayPlan(OracleModel):
    day: str
    meals: list[Meal]


class MealPlan(OracleModel):
    title: str
    summary: str
    plan: list[DayPlan]
    fasting_protocol: Optional[str] = None
    fasting_recommendations: Optional[str] = None
    supplements: Optional[list[str]] = None

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
