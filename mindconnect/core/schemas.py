from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Rating = Annotated[int, Field(ge=1, le=10)]


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys; snake_case is accepted on input too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Questionnaire(CamelModel):
    """Intake questionnaire, every answer rated from 1 to 10."""

    overall_mood: Rating
    anxiety_frequency: Rating
    sleep_ability: Rating
    stress_frequency: Rating
    difficulty_handling: Rating
    overwhelmed_frequency: Rating
    sadness_frequency: Rating
    connection_to_others: Rating
    negative_thoughts: Rating
    hopefulness: Rating
    life_satisfaction: Rating
    motivation: Rating
    loneliness_frequency: Rating
    physical_drain_frequency: Rating
    focus_difficulty: Rating
    irritability_frequency: Rating
    hobby_enjoyment: Rating
    support_from_loved_ones: Rating
    accomplishment_frequency: Rating
    self_esteem: Rating
