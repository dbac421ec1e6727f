from abc import ABC, abstractmethod


class BaseClassificationClient(ABC):
    """Contract for provider-specific chat clients used by the classifier."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        schema_name: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return the provider's JSON answer as plain text.

        Raises:
            ClassificationNetworkError: provider unreachable or rejected the call.
            ClassificationError: provider answered without content.
        """
