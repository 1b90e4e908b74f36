"""OpenRouter provider client using the OpenAI-compatible API."""

from typing import Any, Optional

import openai
from openai import OpenAI

from namegen.core.config import OPENROUTER_ENDPOINT, Config
from namegen.core.errors import ProviderError
from namegen.core.prompts import build_prompt, extract_names
from namegen.schemas.generation import GenerationRequest


class OpenRouterClient:
    """
    Client for the OpenRouter chat completions API.

    Implements the ProviderClient protocol.
    """

    provider_name = "openrouter"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = 0.8,
        max_tokens: int = 1000,
        site_url: str = "http://localhost:3000",
        app_title: str = "Random Name Finder",
    ):
        """
        Initialize OpenRouter client.

        Args:
            api_key: OpenRouter API key
            base_url: API base URL (defaults to https://openrouter.ai/api/v1)
            temperature: Sampling temperature
            max_tokens: Maximum tokens in the completion
            site_url: Sent as HTTP-Referer for OpenRouter attribution
            app_title: Sent as X-Title for OpenRouter attribution
        """
        # Clean API key (remove quotes if present)
        self.api_key = api_key.strip().strip('"').strip("'") if api_key else None
        self.base_url = base_url or OPENROUTER_ENDPOINT
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.default_headers = {
            "HTTP-Referer": site_url,
            "X-Title": app_title,
        }
        self._client: Optional[OpenAI] = None

    @classmethod
    def from_config(cls, config: Config) -> "OpenRouterClient":
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            site_url=config.site_url,
            app_title=config.app_title,
        )

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise ProviderError(
                    "AI service is not configured: OPENROUTER_API_KEY is not set. "
                    "Get an API key from https://openrouter.ai/keys",
                    retryable=False,
                )
            # Retries are decided by the pipeline, never inside the SDK.
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                default_headers=self.default_headers,
                max_retries=0,
            )
        return self._client

    def generate(self, request: GenerationRequest, timeout: float = 30.0) -> str:
        """
        Generate names for a request.

        Args:
            request: Generation request
            timeout: Request timeout in seconds

        Returns:
            Raw completion text (empty if the model produced nothing)

        Raises:
            ProviderError: If the call fails
        """
        prompt = build_prompt(request)
        try:
            response = self.client.chat.completions.create(
                model=request.model_identifier,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                timeout=timeout,
            )
        except openai.AuthenticationError as e:
            raise ProviderError(
                f"OpenRouter API authentication failed (401). Check OPENROUTER_API_KEY. "
                f"Original error: {e}",
                retryable=False,
            ) from e
        except openai.NotFoundError as e:
            raise ProviderError(
                f"OpenRouter model '{request.model_identifier}' not found (404). "
                f"Browse models at https://openrouter.ai/models",
                retryable=False,
            ) from e
        except openai.APITimeoutError as e:
            raise ProviderError(
                f"OpenRouter request timed out after {timeout}s"
            ) from e
        except openai.APIConnectionError as e:
            raise ProviderError(f"Network error connecting to OpenRouter API: {e}") from e
        except openai.APIStatusError as e:
            retryable = e.status_code == 429 or e.status_code >= 500
            raise ProviderError(
                f"OpenRouter API error {e.status_code}: {e.message}",
                retryable=retryable,
            ) from e
        except openai.OpenAIError as e:
            raise ProviderError(f"OpenRouter request failed: {e}") from e

        return _first_message_content(response)

    def extract_names(self, text: str) -> Any:
        """Parse completion text into name candidates."""
        return extract_names(text)


def _first_message_content(response: Any) -> str:
    if response.choices and len(response.choices) > 0:
        return response.choices[0].message.content or ""
    return ""
