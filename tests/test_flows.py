"""Tests for the text-generation flows."""

import pytest

from app.services.ai import prompts
from app.services.ai.flows import SUGGEST_EXERCISE, SUMMARIZE_CONDITION, suggest_exercise, summarize_condition
from app.utils.exceptions import AIFlowError, ValidationError


def test_summarize_condition_returns_summary(make_groq):
    service = make_groq(reply={"summary": "Pain between the head and shoulders."})
    assert summarize_condition(service, "Neck Pain") == {"summary": "Pain between the head and shoulders."}

    call = service.calls[0]
    assert "Condition Name: Neck Pain" in call["prompt"]
    assert "summary" in call["system"]


def test_suggest_exercise_returns_suggestions(make_groq):
    service = make_groq(reply={"suggestedExercises": "Try gentle neck tilts."})
    result = suggest_exercise(service, "My neck hurts when I turn left")
    assert result == {"suggestedExercises": "Try gentle neck tilts."}
    assert "User Description: My neck hurts when I turn left" in service.calls[0]["prompt"]


def test_short_condition_name_is_rejected_before_calling(make_groq):
    service = make_groq(reply={"summary": "unused"})
    with pytest.raises(ValidationError) as exc_info:
        summarize_condition(service, "a")
    assert exc_info.value.message == "Please enter a condition name."
    assert exc_info.value.details == {"field": "conditionName"}
    assert service.calls == []


def test_short_pain_description_is_rejected(make_groq):
    with pytest.raises(ValidationError) as exc_info:
        suggest_exercise(make_groq(), "sore")
    assert exc_info.value.message == "Please describe your symptoms in more detail."


def test_model_failure_becomes_generic_error(make_groq):
    service = make_groq(error=TimeoutError("upstream timed out"))
    with pytest.raises(AIFlowError) as exc_info:
        summarize_condition(service, "Neck Pain")
    assert exc_info.value.message == "An error occurred while getting suggestions. Please try again later."


def test_reply_without_output_field_is_an_error(make_groq):
    with pytest.raises(AIFlowError):
        suggest_exercise(make_groq(reply={"summary": "wrong field"}), "My knee aches on stairs")


def test_missing_service_is_an_error():
    with pytest.raises(AIFlowError):
        summarize_condition(None, "Neck Pain")


def test_flow_output_fields():
    assert SUMMARIZE_CONDITION.output_field == "summary"
    assert SUGGEST_EXERCISE.output_field == "suggestedExercises"


def test_prompts_are_registered_by_flow_name():
    assert set(prompts.PROMPTS) == {SUMMARIZE_CONDITION.name, SUGGEST_EXERCISE.name}


def test_input_length_counts_raw_characters(make_groq):
    service = make_groq(reply={"suggestedExercises": "Rest and ice."})
    assert suggest_exercise(service, "   knee   ") == {"suggestedExercises": "Rest and ice."}
    assert "User Description:    knee   " in service.calls[0]["prompt"]
