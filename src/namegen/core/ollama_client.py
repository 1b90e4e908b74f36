"""Ollama provider client for locally hosted models."""

from typing import Any, Optional

from ollama import Client

from namegen.core.errors import ProviderError
from namegen.core.prompts import build_prompt, extract_names
from namegen.schemas.generation import GenerationRequest

OLLAMA_DEFAULT_URL = "http://localhost:11434"


class OllamaClient:
    """
    Client for interacting with the Ollama API.

    Implements the ProviderClient protocol. Model identifiers may carry an
    "ollama/" prefix, which is stripped before the call.
    """

    provider_name = "ollama"

    def __init__(
        self,
        base_url: Optional[str] = None,
        temperature: float = 0.8,
        max_tokens: int = 1000,
    ):
        """
        Initialize Ollama client.

        Args:
            base_url: Base URL for Ollama API (defaults to http://localhost:11434)
            temperature: Temperature for generation
            max_tokens: Maximum tokens to predict
        """
        self.base_url = base_url or OLLAMA_DEFAULT_URL
        self.temperature = temperature
        self.max_tokens = max_tokens

    def generate(self, request: GenerationRequest, timeout: float = 30.0) -> str:
        """
        Generate names from a local Ollama model.

        Args:
            request: Generation request
            timeout: Request timeout in seconds

        Returns:
            Generated text response

        Raises:
            ProviderError: If the call fails
        """
        model = request.model_identifier.removeprefix("ollama/")
        client = Client(host=self.base_url, timeout=timeout)
        try:
            response = client.generate(
                model=model,
                prompt=build_prompt(request),
                options={"temperature": self.temperature, "num_predict": self.max_tokens},
                stream=False,
            )
        except Exception as e:
            error_msg = str(e)
            if "not found" in error_msg.lower() or "404" in error_msg:
                raise ProviderError(
                    f"Model '{model}' not found. Pull it with 'ollama pull {model}'",
                    retryable=False,
                ) from e
            raise ProviderError(f"Ollama request failed: {error_msg}") from e

        return response.get("response", "") or ""

    def extract_names(self, text: str) -> Any:
        """Parse response text into name candidates."""
        return extract_names(text)
