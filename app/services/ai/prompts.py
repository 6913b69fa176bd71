"""Prompt templates for the clinic's text-generation flows."""

from typing import Dict

# Every flow answers with a JSON object holding exactly its output field.
JSON_SYSTEM_PROMPT = """You are an assistant for a physiotherapy clinic website.
Always answer with a single JSON object containing exactly the key {field}
whose value is a plain-text string. Do not add any other keys."""

CONDITION_SUMMARY_PROMPT = """You are an expert physiotherapist specializing in explaining conditions to patients.

Provide a concise summary of the following physiotherapy condition, including common symptoms, causes, and treatment options. Keep it short and easy to understand for the general public.

Condition Name: {condition_name}"""

EXERCISE_SUGGESTION_PROMPT = """You are a helpful AI assistant that suggests exercises based on a user's description of their pain and limitations of movement. These suggestions are not medical advice, and the user should consult a healthcare professional for proper diagnosis and treatment.

User Description: {pain_description}

Suggested Exercises:"""

PROMPTS: Dict[str, str] = {
    "summarizeCondition": CONDITION_SUMMARY_PROMPT,
    "suggestExercise": EXERCISE_SUGGESTION_PROMPT,
}


def system_prompt(field: str) -> str:
    return JSON_SYSTEM_PROMPT.format(field=field)


def render(name: str, **values: str) -> str:
    """Format a named prompt with its inputs interpolated."""
    return PROMPTS[name].format(**values)
