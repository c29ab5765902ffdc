"""
Errors raised when talking to the remote model store.
"""

from typing import Optional


class ModelStoreError(Exception):
    """Base class for a failed single attempt against the model store."""

    message = "Model store request failed"

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None):
        self.status = status
        super().__init__(message or self.message)


class FetchFailed(ModelStoreError):
    """Raised when the model list could not be loaded."""
    message = "Failed to load models"


class SubmitFailed(ModelStoreError):
    """Raised when a create or update was rejected or never reached the store."""
    message = "Failed to save model"


class DeleteFailed(ModelStoreError):
    """Raised when a delete was rejected or never reached the store."""
    message = "Failed to delete model"
