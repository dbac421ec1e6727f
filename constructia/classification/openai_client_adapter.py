"""Chat completions client for OpenAI and OpenAI-compatible providers.

Requests strict structured output. A refusal or a reply cut off by the token
limit is rejected here, before the classifier tries to parse it.
"""

from typing import Any

import httpx
import openai

from constructia.classification.client_base import BaseClassificationClient
from constructia.classification.exceptions import (
    ClassificationError,
    ClassificationNetworkError,
)
from constructia.logging.logger import Log


class OpenAIClientAdapter(BaseClassificationClient):
    """Classification client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        # No SDK-level retries.
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

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
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format=_structured_output(schema_name, json_schema),
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.RateLimitError as exc:
            raise ClassificationNetworkError(f"AI provider rate limited: {exc}") from exc
        except (openai.APIConnectionError, httpx.TimeoutException) as exc:
            raise ClassificationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ClassificationNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ClassificationError("AI returned no choices")
        choice = response.choices[0]
        usage = getattr(response, "usage", None)
        if usage is not None:
            Log.debug(
                "Classification completion usage",
                model=model,
                prompt_tokens=getattr(usage, "prompt_tokens", None),
                completion_tokens=getattr(usage, "completion_tokens", None),
            )

        refusal = getattr(choice.message, "refusal", None)
        if isinstance(refusal, str) and refusal:
            raise ClassificationError(f"AI refused to classify: {refusal}")
        if choice.finish_reason == "length":
            raise ClassificationError("AI response truncated at token limit")
        content = choice.message.content
        if not content:
            raise ClassificationError("AI returned empty response")
        return content


def _structured_output(schema_name: str, json_schema: dict[str, object]) -> dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {"name": schema_name, "strict": True, "schema": json_schema},
    }
