"""Offline classification client.

Answers every request with a fixed, schema-valid classification so the
lifecycle can run without an AI provider (local development, tests).
"""

import json
from typing import ClassVar

from constructia.classification.client_base import BaseClassificationClient


class ExampleClientAdapter(BaseClassificationClient):
    """Returns a fixed OTROS classification. No network calls."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "category": "OTROS",
        "entity_type": "obra",
        "fields": {
            "id_number": None,
            "first_name": None,
            "last_name": None,
            "company": None,
            "rea_number": None,
            "policy_number": None,
            "issue_date": None,
            "expiry_date": None,
            "prl_course_level": None,
            "machine_serial": None,
            "text_matches": [],
        },
        "confidence": {"category": 0.5},
    }

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
        _ = model, temperature, system_prompt, user_prompt, schema_name, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
