class ClassificationError(Exception):
    """Raised when document classification fails."""


class ClassificationValidationError(ClassificationError):
    """Raised when the classifier response breaks the expected structure."""


class ClassificationNetworkError(ClassificationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
