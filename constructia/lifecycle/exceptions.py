class LifecycleError(Exception):
    """Base exception for document lifecycle errors."""


class ConfigurationError(LifecycleError):
    """Raised when a client has no usable external platform credentials."""


class ExternalUploadError(LifecycleError):
    """Raised when the external platform call fails or times out."""


class SweepQueryError(LifecycleError):
    """Raised when the cleanup sweep cannot load its candidate documents."""


class AuditWriteError(LifecycleError):
    """Raised when an audit log entry cannot be persisted."""


class DocumentNotFoundError(LifecycleError):
    """Raised when a document cannot be found in the database."""


class ClientNotFoundError(LifecycleError):
    """Raised when a client cannot be found in the database."""


class StaleDocumentError(LifecycleError):
    """Raised when a guarded document update matched no row."""


class InvalidTransitionError(LifecycleError):
    """Raised when a document status would move backwards."""
