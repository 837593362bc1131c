"""
Error mapping utilities for provider adapters.

Converts errors raised by the OpenAI-compatible client (and the httpx
transport underneath it) into ProviderError instances.
"""

from typing import Any, Dict, Optional

from .base import ProviderError
from ..reliability.error_classifier import ErrorClassifier


class ErrorMapper:
    """Maps provider-specific errors to standardized ProviderError."""

    @staticmethod
    def get_retry_after(error: Exception) -> Optional[float]:
        """
        Extract retry-after value from error if available.

        Args:
            error: The exception to check

        Returns:
            Optional[float]: Seconds to wait before retry, or None
        """
        response = getattr(error, 'response', None)
        headers = getattr(response, 'headers', None)
        if headers is not None:
            retry_after = headers.get('Retry-After')
            if retry_after:
                try:
                    return float(retry_after)
                except ValueError:
                    pass

        retry_after = getattr(error, 'retry_after', None)
        if isinstance(retry_after, (int, float)):
            return float(retry_after)

        return None

    @staticmethod
    def map_mistral_error(error: Exception) -> ProviderError:
        """
        Map errors from a Mistral request to ProviderError.

        Args:
            error: The exception raised by the client or transport

        Returns:
            ProviderError with appropriate metadata
        """
        if isinstance(error, ProviderError):
            return error

        classification = ErrorClassifier.classify_error(error, "mistral")

        status_code = getattr(error, 'status_code', None)
        if not isinstance(status_code, int):
            status_code = None
        retry_after = classification.suggested_delay or ErrorMapper.get_retry_after(error)

        if classification.user_message:
            message = f"Mistral API error: {classification.user_message}"
        else:
            message = f"Mistral API error: {str(error)}"

        provider_error = ProviderError(
            message=message,
            provider="mistral",
            status_code=status_code,
            retry_after=retry_after
        )
        provider_error.is_retryable = classification.is_retryable
        provider_error.original_error = error
        provider_error.error_category = classification.category

        return provider_error

    @staticmethod
    def get_error_classification(error: ProviderError) -> Dict[str, Any]:
        """
        Get detailed error classification for logging.

        Args:
            error: The ProviderError to classify

        Returns:
            Dict with error classification details
        """
        return {
            'provider': error.provider,
            'status_code': error.status_code,
            'is_retryable': error.is_retryable,
            'retry_after': error.retry_after,
            'error_type': type(error.original_error).__name__ if error.original_error is not None else None,
            'category': error.error_category.value if error.error_category is not None else 'unknown'
        }
