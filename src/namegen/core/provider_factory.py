"""Factory for creating AI provider clients with auto-detection."""

from typing import Optional

import requests

from namegen.core.config import Config
from namegen.core.llm_base import ProviderClient
from namegen.core.ollama_client import OLLAMA_DEFAULT_URL, OllamaClient
from namegen.core.openrouter_client import OpenRouterClient

SUPPORTED_PROVIDERS = ("openrouter", "ollama", "auto")


def check_ollama_available(base_url: Optional[str] = None) -> bool:
    """
    Check if Ollama is available and running.

    Args:
        base_url: Ollama base URL to check

    Returns:
        True if Ollama is available, False otherwise
    """
    base_url = base_url or OLLAMA_DEFAULT_URL
    try:
        response = requests.get(f"{base_url}/api/tags", timeout=2)
        return response.status_code == 200
    except requests.RequestException:
        return False


def create_client(config: Config) -> ProviderClient:
    """
    Create a provider client from configuration.

    "auto" prefers OpenRouter when an API key is configured and falls back to
    a running local Ollama server.

    Args:
        config: Loaded configuration

    Returns:
        Provider client

    Raises:
        ValueError: If the provider is unknown or none is available
    """
    provider = (config.provider or "auto").lower()

    if provider == "auto":
        if config.api_key:
            provider = "openrouter"
        elif check_ollama_available(config.ollama_base_url):
            provider = "ollama"
        else:
            raise ValueError(
                "No AI provider available. "
                "Set OPENROUTER_API_KEY for OpenRouter, or ensure Ollama is running."
            )

    if provider == "openrouter":
        return OpenRouterClient.from_config(config)

    if provider == "ollama":
        return OllamaClient(
            base_url=config.ollama_base_url,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    raise ValueError(
        f"Unknown provider: {provider}. Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
    )
