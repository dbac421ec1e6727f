"""Tests for classifier prompt and JSON schema loading."""

import json
from pathlib import Path

import pytest

from constructia.classification.exceptions import ClassificationError
from constructia.classification.prompt_loader import (
    load_json_schema,
    load_prompt_template,
    load_system_prompt,
)


class TestLoadPromptTemplate:
    def test_loads_default_template(self) -> None:
        template = load_prompt_template()
        for placeholder in ("{file_name}", "{mime_type}", "{document_text}", "{json_schema}"):
            assert placeholder in template

    def test_loads_custom_template(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.txt"
        custom.write_text("Classify {file_name}")
        assert load_prompt_template(custom) == "Classify {file_name}"

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(ClassificationError, match="Failed to load prompt"):
            load_prompt_template(Path("/nonexistent/file.txt"))


class TestLoadSystemPrompt:
    def test_loads_default_system_prompt(self) -> None:
        assert "JSON" in load_system_prompt()

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(ClassificationError, match="Failed to load system prompt"):
            load_system_prompt(Path("/nonexistent/system.txt"))


class TestLoadJsonSchema:
    def test_default_schema_is_valid_json(self) -> None:
        schema = json.loads(load_json_schema())
        assert set(schema["required"]) == {"category", "entity_type", "fields", "confidence"}
        assert "OTROS" in schema["properties"]["category"]["enum"]

    def test_loads_custom_schema(self, tmp_path: Path) -> None:
        custom = tmp_path / "schema.json"
        custom.write_text('{"type": "object"}')
        assert load_json_schema(custom) == '{"type": "object"}'

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(ClassificationError, match="Failed to load JSON schema"):
            load_json_schema(Path("/nonexistent/schema.json"))
