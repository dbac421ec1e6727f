from constructia.classification.base import BaseClassifier
from constructia.classification.classifier import Classifier
from constructia.classification.example_client_adapter import ExampleClientAdapter
from constructia.classification.openai_client_adapter import OpenAIClientAdapter
from constructia.config.settings import Settings


class ClassifierFactory:
    """Creates the configured document classifier."""

    PROVIDERS = ("example", "openai", "openai_compatible")

    @classmethod
    def create(cls, settings: Settings) -> BaseClassifier:
        """Create a classifier from application settings."""
        provider = settings.classification_provider.lower()
        if provider == "example":
            return Classifier(
                client=ExampleClientAdapter(),
                model="example",
                max_text_chars=settings.classification_max_text_chars,
            )
        if provider == "openai":
            client = OpenAIClientAdapter(
                api_key=settings.classification_openai_api_key,
                timeout_seconds=settings.classification_openai_timeout_seconds,
                base_url=None,
            )
            return Classifier(
                client=client,
                model=settings.classification_openai_model_name,
                temperature=settings.classification_openai_temperature,
                max_text_chars=settings.classification_max_text_chars,
            )
        if provider == "openai_compatible":
            url = settings.classification_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "classification_openai_compatible_base_url is required for "
                    "classification_provider=openai_compatible"
                )
            client = OpenAIClientAdapter(
                api_key=settings.classification_openai_compatible_api_key,
                timeout_seconds=settings.classification_openai_compatible_timeout_seconds,
                base_url=url,
            )
            return Classifier(
                client=client,
                model=settings.classification_openai_compatible_model_name,
                max_text_chars=settings.classification_max_text_chars,
            )
        raise ValueError(
            f"Unknown classification provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
