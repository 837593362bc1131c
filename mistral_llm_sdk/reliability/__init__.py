"""Reliability layer for error classification and retries."""

from .retry import RetryManager, RetryConfig
from .error_classifier import ErrorClassifier, ErrorCategory, ErrorClassification

__all__ = [
    "RetryManager",
    "RetryConfig",
    "ErrorClassifier",
    "ErrorCategory",
    "ErrorClassification",
]
