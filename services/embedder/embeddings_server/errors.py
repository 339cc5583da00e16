from __future__ import annotations

from typing import Optional


class EmbeddingsServerError(Exception):
    """
    Base error. Carries the HTTP status and the OpenAI-style error type
    used when the error is rendered at the request boundary.
    """

    status_code: int = 500
    error_type: str = "server_error"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class DecodeError(EmbeddingsServerError):
    status_code = 400
    error_type = "invalid_request_error"


class ModelInitError(EmbeddingsServerError):
    """Provider could not be constructed. Raised at startup only."""


class InferenceError(EmbeddingsServerError):
    error_type = "inference_error"


class InferenceTimeout(InferenceError):
    status_code = 504
    error_type = "timeout_error"


class NormalizationError(EmbeddingsServerError):
    """Raw output cannot be fitted to the target dimension without losing data."""

    error_type = "configuration_error"
