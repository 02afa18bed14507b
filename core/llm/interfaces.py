"""
LLM Provider Interface - Abstract base for generative model clients.

This module defines the interface the scorer and the skill extractor talk
to (OpenAI-compatible endpoints such as Gemini, OpenAI, Ollama, ...).
"""
from abc import ABC, abstractmethod
from typing import Optional


class LLMProvider(ABC):
    """
    Abstract Interface for generative model providers.
    """

    @abstractmethod
    def generate_text(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        system_prompt: Optional[str] = None,
    ) -> str:
        """
        Send a single prompt to ``model`` and return the raw response text.

        Args:
            prompt: User prompt
            model: Model id; the provider default when None
            temperature: Sampling temperature; the provider default when None
            max_output_tokens: Response token cap
            system_prompt: Optional system instruction

        Raises:
            Any client error. Callers own the fallback.
        """
        pass
