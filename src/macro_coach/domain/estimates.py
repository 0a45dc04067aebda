"""Models for meal-text estimation results."""

from pydantic import BaseModel, Field


class MealEstimate(BaseModel):
    """Structured output for a free-text meal description."""

    description: str = Field(min_length=1)
    time_of_day: str | None = Field(default=None, pattern=r"^\d{1,2}:\d{2}$")
    calories: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)
