"""
Food analysis models.

Oracle-facing models use the camelCase field names of the JSON contract
(needsClarification, totalCalories, ...) as aliases, so
model_dump(by_alias=True, exclude_none=True) reproduces the wire shape.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OracleModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthLevel(str, Enum):
    HEALTHY = "Healthy"
    MODERATE = "Moderate"
    UNHEALTHY = "Unhealthy"


class Nutrient(OracleModel):
    name: str
    amount: str  # free-form, e.g. "12g"


class Ingredient(OracleModel):
    name: str
    calories: int
    nutrients: list[Nutrient] = []
    vitamins: list[Nutrient] = []
    minerals: list[Nutrient] = []
    fatty_acids: list[Nutrient] = []


class HealthyAlternative(OracleModel):
    name: str
    description: str


class AnalysisResult(OracleModel):
    needs_clarification: bool = False
    clarification_question: Optional[str] = None
    total_calories: Optional[int] = None
    # Unrecognised levels are kept verbatim, see display_health_level
    health_level: Optional[Union[HealthLevel, str]] = Field(
        default=None, union_mode="left_to_right"
    )
    ingredients: Optional[list[Ingredient]] = None
    recommendation: Optional[str] = None
    healthy_alternatives: list[HealthyAlternative] = []

    @property
    def display_health_level(self) -> HealthLevel:
        """Level used for styling; unknown strings render as Moderate."""
        if isinstance(self.health_level, HealthLevel):
            return self.health_level
        return HealthLevel.MODERATE

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Requests ---


class AnalysisMode(str, Enum):
    IMAGE_ONLY = "image_only"
    IMAGE_WITH_CLARIFICATION = "image_with_clarification"
    TEXT_DESCRIPTION = "text_description"


@dataclass(frozen=True)
class ImageInput:
    data: bytes = field(repr=False)
    media_type: str = "image/jpeg"


@dataclass(frozen=True)
class ImageOnly:
    image: ImageInput

    mode = AnalysisMode.IMAGE_ONLY


@dataclass(frozen=True)
class ImageWithClarification:
    image: ImageInput
    clarification: str

    mode = AnalysisMode.IMAGE_WITH_CLARIFICATION


@dataclass(frozen=True)
class TextDescription:
    text: str

    mode = AnalysisMode.TEXT_DESCRIPTION


AnalysisRequest = Union[ImageOnly, ImageWithClarification, TextDescription]
