from abc import ABC, abstractmethod

from constructia.classification.models import ClassificationResult


class BaseClassifier(ABC):
    """Contract for all document classifiers."""

    @abstractmethod
    def classify(self, file_name: str, mime_type: str, text: str) -> ClassificationResult:
        """Classify a construction compliance document.

        Args:
            file_name: Original file name, used as a hint.
            mime_type: MIME type of the stored file.
            text: Extracted document text; may be empty.

        Raises:
            ClassificationError: on any failure.
        """
