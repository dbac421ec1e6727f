from pathlib import Path

from constructia.classification.exceptions import ClassificationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def _read(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ClassificationError(f"Failed to load {what}: {exc}") from exc


def load_system_prompt(path: Path | None = None) -> str:
    """Load the classifier system prompt. Defaults to prompts/system_prompt.txt."""
    return _read(path or _DEFAULT_PROMPT_DIR / "system_prompt.txt", "system prompt")


def load_prompt_template(path: Path | None = None) -> str:
    """Load the user prompt template with {file_name}, {mime_type}, {document_text}
    and {json_schema} placeholders. Defaults to prompts/classification_prompt.txt.

    Raises:
        ClassificationError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "classification_prompt.txt", "prompt template")


def load_json_schema(path: Path | None = None) -> str:
    """Load the response JSON schema. Defaults to prompts/classification_schema.json.

    Raises:
        ClassificationError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "classification_schema.json", "JSON schema")
