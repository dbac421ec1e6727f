"""AI-powered classifier for construction compliance documents."""

import json
from pathlib import Path

from constructia.classification.base import BaseClassifier
from constructia.classification.client_base import BaseClassificationClient
from constructia.classification.exceptions import ClassificationError
from constructia.classification.models import ClassificationResult
from constructia.classification.prompt_loader import (
    load_json_schema,
    load_prompt_template,
    load_system_prompt,
)
from constructia.classification.validator import validate_and_build
from constructia.logging.logger import Log


class Classifier(BaseClassifier):
    """Classifies a document and extracts its key fields through a chat model."""

    SCHEMA_NAME = "document_classification"

    def __init__(
        self,
        *,
        client: BaseClassificationClient,
        model: str,
        temperature: float = 0.0,
        max_text_chars: int = 8000,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_text_chars = max_text_chars
        self._system_prompt = load_system_prompt(system_prompt_path)
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = load_json_schema(json_schema_path)
        self._json_schema_dict = json.loads(self._json_schema)

    def classify(self, file_name: str, mime_type: str, text: str) -> ClassificationResult:
        prompt = self._prompt_template.format(
            file_name=file_name,
            mime_type=mime_type,
            document_text=text[: self._max_text_chars],
            json_schema=self._json_schema,
        )
        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            schema_name=self.SCHEMA_NAME,
            json_schema=self._json_schema_dict,
        )
        Log.debug(f"Classifier raw response:\n{raw_response}")

        result = validate_and_build(self._parse_json(raw_response))
        Log.info(
            f"Classified {file_name} as {result.category}",
            confidence=result.confidence,
            entity_type=result.entity_type,
        )
        return result

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ClassificationError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ClassificationError("JSON response must be an object")
        return parsed
