"""Interface every AI provider client implements."""

from typing import Any, Protocol

from namegen.schemas.generation import GenerationRequest


class ProviderClient(Protocol):
    """
    Protocol for AI provider clients.

    All provider implementations must implement these methods.
    """

    provider_name: str

    def generate(self, request: GenerationRequest, timeout: float = 30.0) -> str:
        """
        Send a generation request to the provider.

        Args:
            request: Validated, immutable generation request
            timeout: Request timeout in seconds

        Returns:
            Raw reply text

        Raises:
            ProviderError: If the call fails for any transport or provider reason
        """
        ...

    def extract_names(self, text: str) -> Any:
        """
        Parse raw reply text into a payload (normally a list of strings).

        Args:
            text: Raw reply text

        Returns:
            Parsed payload; not guaranteed to be well formed
        """
        ...
