# generator.py
from typing import Optional

from google import genai
from google.genai import types


class EmptyCompletionError(Exception):
    """The model answered without any text, e.g. a blocked prompt"""
    pass


class GeminiContentGenerator:
    """Single-turn text generation with a Gemini model."""

    def __init__(
        self,
        client: genai.Client,
        model_name: str,
        max_output_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ):
        self._client = client
        self.model_name = model_name
        self._config = None
        if max_output_tokens is not None or temperature is not None:
            self._config = types.GenerateContentConfig(
                max_output_tokens=max_output_tokens,
                temperature=temperature,
            )

    def generate(self, prompt: str) -> str:
        response = self._client.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=self._config,
        )
        text = getattr(response, "text", None)
        if not text:
            raise EmptyCompletionError(f"{self.model_name} returned no text")
        return text
