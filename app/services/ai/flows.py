"""
Text-generation flows.

Each flow validates one free-text input, formats a fixed prompt, calls the
model once and returns the single declared output field verbatim. Any
failure after validation collapses into one generic AIFlowError.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.services.ai import prompts
from app.services.ai.groq_service import GroqService
from app.utils.exceptions import AIFlowError, ValidationError
from app.utils.logger import extra, get_logger

logger = get_logger(__name__)


class _FlowModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummarizeConditionInput(_FlowModel):
    condition_name: str = Field(description="Name of the physiotherapy condition to summarize")

    @field_validator("condition_name")
    @classmethod
    def long_enough(cls, value: str) -> str:
        if len(value) < 2:
            raise PydanticCustomError("too_short", "Please enter a condition name.")
        return value


class SummarizeConditionOutput(_FlowModel):
    summary: str = Field(description="Symptoms, causes and treatment options in plain language")


class SuggestExerciseInput(_FlowModel):
    pain_description: str = Field(description="The user's pain and limitations of movement")

    @field_validator("pain_description")
    @classmethod
    def long_enough(cls, value: str) -> str:
        if len(value) < 10:
            raise PydanticCustomError("too_short", "Please describe your symptoms in more detail.")
        return value


class SuggestExerciseOutput(_FlowModel):
    suggested_exercises: str = Field(description="Suggested exercises for the described pain")


@dataclass(frozen=True)
class Flow:
    name: str
    input_model: Type[_FlowModel]
    output_model: Type[_FlowModel]

    @property
    def output_field(self) -> str:
        (field_name,) = self.output_model.model_fields
        return to_camel(field_name)

    def validate(self, payload: Dict[str, Any]) -> _FlowModel:
        try:
            return self.input_model.model_validate(payload)
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            raise ValidationError(
                message=first["msg"],
                details={"field": to_camel(str(first["loc"][0])) if first["loc"] else None},
            ) from exc

    def run(self, service: Optional[GroqService], payload: Dict[str, Any]) -> Dict[str, str]:
        """
        Validate, prompt, call the model once and return ``{output_field: text}``.

        Raises:
            ValidationError: Input fails the minimum-length check
            AIFlowError: Anything goes wrong after validation
        """
        data = self.validate(payload)

        try:
            if service is None:
                raise RuntimeError("Text generation is not configured")
            prompt = prompts.render(self.name, **data.model_dump())
            reply = service.generate_json(prompts.system_prompt(self.output_field), prompt)
            output = self.output_model.model_validate(reply)
        except Exception as exc:
            logger.error(
                f"Flow {self.name} failed: {exc}",
                exc_info=True,
                extra=extra(flow=self.name),
            )
            raise AIFlowError() from exc

        return output.model_dump(by_alias=True)


SUMMARIZE_CONDITION = Flow("summarizeCondition", SummarizeConditionInput, SummarizeConditionOutput)
SUGGEST_EXERCISE = Flow("suggestExercise", SuggestExerciseInput, SuggestExerciseOutput)


def summarize_condition(service: Optional[GroqService], condition_name: str) -> Dict[str, str]:
    """``{"summary": ...}`` for a condition name."""
    return SUMMARIZE_CONDITION.run(service, {"conditionName": condition_name})


def suggest_exercise(service: Optional[GroqService], pain_description: str) -> Dict[str, str]:
    """``{"suggestedExercises": ...}`` for a description of pain."""
    return SUGGEST_EXERCISE.run(service, {"painDescription": pain_description})
