"""
Interaction controller states.

A single tagged variant: exactly one of these is current at any time, so an
analysis result and a meal plan can never be shown together.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from nutriscan.models.meal_plan import MealPlan
from nutriscan.models.nutrition import AnalysisResult, ImageInput


class Task(str, Enum):
    """What a Loading state is waiting on."""

    IMAGE_ANALYSIS = "image_analysis"
    CLARIFICATION = "clarification"
    TEXT_ANALYSIS = "text_analysis"
    MEAL_PLAN = "meal_plan"


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    task: Task


@dataclass(frozen=True)
class AwaitingClarification:
    question: str
    pending_image: Optional[ImageInput] = field(default=None, repr=False)


@dataclass(frozen=True)
class ShowingResult:
    result: AnalysisResult


@dataclass(frozen=True)
class ShowingPlan:
    plan: MealPlan


@dataclass(frozen=True)
class Error:
    message: str
    error_kind: str = "unexpected"  # exception class name, for presentation


State = Union[Idle, Loading, AwaitingClarification, ShowingResult, ShowingPlan, Error]
