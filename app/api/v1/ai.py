"""AI helper endpoints: condition summaries and exercise suggestions."""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.dependencies import get_groq_service
from app.schemas.responses import ApiResponse
from app.services.ai.flows import suggest_exercise, summarize_condition
from app.services.ai.groq_service import GroqService

router = APIRouter()


class ConditionSummaryRequest(BaseModel):
    conditionName: str = ""


class ExerciseSuggestionRequest(BaseModel):
    painDescription: str = ""


@router.post("/condition-summary", response_model=ApiResponse)
async def condition_summary(
    request: ConditionSummaryRequest,
    service: Optional[GroqService] = Depends(get_groq_service),
) -> ApiResponse:
    """
    Summarize a condition's symptoms, causes and treatments.

    Raises:
        ValidationError: Condition name shorter than 2 characters
        AIFlowError: The model call failed or returned an unusable reply
    """
    result = await run_in_threadpool(summarize_condition, service, request.conditionName)
    return ApiResponse.ok(result, "Summary generated")


@router.post("/exercise-suggestions", response_model=ApiResponse)
async def exercise_suggestions(
    request: ExerciseSuggestionRequest,
    service: Optional[GroqService] = Depends(get_groq_service),
) -> ApiResponse:
    """Suggest exercises for a description of pain (at least 10 characters)."""
    result = await run_in_threadpool(suggest_exercise, service, request.painDescription)
    return ApiResponse.ok(result, "Suggestions generated")
