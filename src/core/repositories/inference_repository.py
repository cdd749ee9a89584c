"""Abstract contract for the multimodal inference service."""

from abc import ABC, abstractmethod

from core.models.suggestion import InferenceRequest


class InferenceRepository(ABC):
    """Contract for generating text from a prompt plus inline media.

    Implementations could be Gemini, Bedrock, a local model, etc.
    The suggestion pipeline depends on this interface, not the implementation.
    """

    @abstractmethod
    def generate(self, *, request: InferenceRequest, api_key: str) -> str:
        """Run one inference call and return the raw reply text.

        Args:
            request: Prompt, media and generation settings
            api_key: Credential for the service

        Returns:
            Raw text produced by the model (expected to contain JSON)

        Raises:
            InferenceCallError: If the call fails or returns no text.
                The message carries the service's error text so callers
                can classify it.
        """
