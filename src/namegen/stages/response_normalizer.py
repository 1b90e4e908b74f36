"""Response normalization stage implementation."""

from collections.abc import Sequence
from typing import Any, Optional

from namegen.core.errors import EmptyOrMalformedResponse, ProviderError
from namegen.schemas.generation import GenerationResponse


class ResponseNormalizer:
    """
    Decides what counts as a usable generated name.

    Every provider quirk is absorbed here so persistence and display only ever
    see one shape: a GenerationResponse.
    """

    def normalize(
        self,
        payload: Any,
        model_identifier: Optional[str] = None,
    ) -> GenerationResponse:
        """
        Normalize a successful provider reply.

        Args:
            payload: Parsed reply, expected to be a sequence of strings
            model_identifier: Model that produced the reply

        Returns:
            Successful response with trimmed, deduplicated names, or a
            EmptyOrMalformedResponse failure
        """
        try:
            names = self.clean_names(payload)
        except EmptyOrMalformedResponse as e:
            return GenerationResponse.failure(e)
        return GenerationResponse.ok(names, model_identifier=model_identifier)

    def from_provider_error(self, error: ProviderError) -> GenerationResponse:
        """Report a failed provider call."""
        return GenerationResponse.failure(error)

    def clean_names(self, payload: Any) -> list[str]:
        """
        Trim, drop empties and deduplicate (case-sensitive, first-seen order).

        Raises:
            EmptyOrMalformedResponse: If payload is not a non-empty sequence of
                strings, or nothing is left after cleaning
        """
        if isinstance(payload, (str, bytes)) or not isinstance(payload, Sequence):
            raise EmptyOrMalformedResponse(
                f"Expected a list of names, got {type(payload).__name__}"
            )
        if not payload:
            raise EmptyOrMalformedResponse("Provider returned no names")
        if not all(isinstance(item, str) for item in payload):
            raise EmptyOrMalformedResponse("Provider reply contains non-text entries")

        names: list[str] = []
        seen: set[str] = set()
        for item in payload:
            name = item.strip()
            if not name or name in seen:
                continue
            seen.add(name)
            names.append(name)

        if not names:
            raise EmptyOrMalformedResponse("Provider reply contained only blank names")
        return names
