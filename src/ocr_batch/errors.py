class OCRBatchError(Exception):
    """Base exception for the ocr_batch package."""


class ServiceUnavailableError(OCRBatchError):
    """Raised when the recognition engine or PDF backend cannot be used at call time."""


class PreconditionError(OCRBatchError):
    """Raised when an operation is invoked in a state that does not allow it."""

