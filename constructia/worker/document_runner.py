from constructia.classification.base import BaseClassifier
from constructia.classification.exceptions import ClassificationError
from constructia.classification.models import ClassificationResult
from constructia.classification.text_extractor import extract_text
from constructia.database.models import DocumentRecord
from constructia.database.repositories.documents_repository import DocumentsRepository
from constructia.lifecycle.exceptions import LifecycleError
from constructia.lifecycle.handoff import HandoffResult, UploadHandoffService
from constructia.logging.logger import Log
from constructia.storage.base import BaseFileStorage
from constructia.storage.exceptions import StorageError


class DocumentRunner:
    """Classify one pending document if needed, then hand it off."""

    def __init__(
        self,
        handoff_service: UploadHandoffService,
        doc_repo: DocumentsRepository,
        storage: BaseFileStorage,
        classifier: BaseClassifier | None = None,
    ) -> None:
        self._handoff_service = handoff_service
        self._doc_repo = doc_repo
        self._storage = storage
        self._classifier = classifier

    def run(self, document: DocumentRecord) -> HandoffResult | None:
        """Process a single document. Lifecycle errors are logged, not raised."""
        Log.info(f"Running handoff for document {document.id}", client_id=document.client_id)
        classification = document.classification
        confidence = document.classification_confidence
        if classification is None:
            result = self._classify(document)
            if result is not None:
                classification, confidence = result.category, result.confidence

        try:
            return self._handoff_service.handoff(
                document.id,
                document.client_id,
                document.file_path,
                classification,
                confidence,
            )
        except LifecycleError as exc:
            Log.error(f"Handoff of document {document.id} failed: {exc}")
            return None
        except Exception as exc:
            Log.error(f"Unexpected error handing off document {document.id}: {exc}")
            return None

    def _classify(self, document: DocumentRecord) -> ClassificationResult | None:
        """Classify and persist. Any failure leaves the document unclassified."""
        if self._classifier is None:
            return None
        try:
            data = self._storage.read(document.file_path)
            text = extract_text(data, document.mime_type)
            result = self._classifier.classify(document.file_name, document.mime_type, text)
            self._doc_repo.update_classification(document.id, result.category, result.confidence)
        except (StorageError, ClassificationError, LifecycleError) as exc:
            Log.warning(f"Classification of document {document.id} skipped: {exc}")
            return None
        return result
