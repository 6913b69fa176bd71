"""Groq API integration for structured text generation."""

import json
import logging
from typing import Any, Dict

from groq import Groq

logger = logging.getLogger(__name__)


class GroqService:
    """Single-shot chat completions that return a JSON object."""

    DEFAULT_MODEL = "llama-3.1-8b-instant"
    DEFAULT_MAX_TOKENS = 1024
    DEFAULT_TEMPERATURE = 0.4
    DEFAULT_TIMEOUT = 30  # seconds

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize Groq service.

        Args:
            api_key: Groq API key
            model: Chat model to use
            timeout: Request timeout in seconds

        Raises:
            ValueError: If api_key is empty
        """
        if not api_key:
            raise ValueError("API key cannot be empty")

        # The SDK retries by default; flows are single-attempt.
        self.client = Groq(api_key=api_key, max_retries=0, timeout=timeout)
        self.model = model
        self.timeout = timeout

        logger.info("GroqService initialized with model=%s, timeout=%s", model, timeout)

    def generate_json(
        self,
        system: str,
        prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> Dict[str, Any]:
        """
        Ask the model for a JSON object.

        Args:
            system: System instruction
            prompt: User prompt
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature (0.0-2.0)

        Returns:
            Parsed JSON object

        Raises:
            ValueError: If the prompt is empty or the reply is not a JSON object
        """
        if not prompt:
            raise ValueError("Prompt cannot be empty")

        if not 0.0 <= temperature <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")

        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        logger.info(
            "Completion received with model=%s, tokens_used=%s",
            self.model, getattr(response.usage, "total_tokens", None),
        )

        parsed = json.loads(content)
        if not isinstance(parsed, dict):
            raise ValueError("Model reply is not a JSON object")
        return parsed
