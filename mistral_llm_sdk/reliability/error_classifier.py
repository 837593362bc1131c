"""
Error classification for provider failures.

Classifies transport and API errors raised while talking to the Mistral
endpoint (through the OpenAI-compatible client) so that retry decisions
and user-facing messages are consistent.
"""

from enum import Enum
from typing import Optional, Set
from dataclasses import dataclass

import httpx


class ErrorCategory(Enum):
    """Standard error categories."""
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    SERVER_ERROR = "server_error"
    NETWORK = "network"
    TIMEOUT = "timeout"
    CONTENT_FILTER = "content_filter"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    CONFLICT = "conflict"
    UNKNOWN = "unknown"


@dataclass
class ErrorClassification:
    """Detailed error classification."""
    category: ErrorCategory
    is_retryable: bool
    suggested_delay: Optional[float] = None
    user_message: Optional[str] = None


class ErrorClassifier:
    """Error classification by exception type, status code and message."""

    # Keyed by openai SDK exception class name
    ERROR_MAPPINGS = {
        'mistral': {
            'AuthenticationError': {
                'category': ErrorCategory.AUTHENTICATION,
                'retryable': False,
                'message': 'Invalid Mistral API key'
            },
            'RateLimitError': {
                'category': ErrorCategory.RATE_LIMIT,
                'retryable': True,
                'message': 'Mistral rate limit exceeded, please wait before retrying'
            },
            'BadRequestError': {
                'category': ErrorCategory.VALIDATION,
                'retryable': False,
                'message': 'Invalid request to Mistral API'
            },
            'NotFoundError': {
                'category': ErrorCategory.NOT_FOUND,
                'retryable': False,
                'message': 'Mistral resource not found'
            },
            'PermissionDeniedError': {
                'category': ErrorCategory.PERMISSION_DENIED,
                'retryable': False,
                'message': 'Permission denied by Mistral'
            },
            'UnprocessableEntityError': {
                'category': ErrorCategory.VALIDATION,
                'retryable': False,
                'message': 'Mistral could not process request'
            },
            'ConflictError': {
                'category': ErrorCategory.CONFLICT,
                'retryable': False,
                'message': 'Request conflicts with Mistral state'
            },
            'InternalServerError': {
                'category': ErrorCategory.SERVER_ERROR,
                'retryable': True,
                'message': 'Mistral server error, please retry'
            },
            'APIConnectionError': {
                'category': ErrorCategory.NETWORK,
                'retryable': True,
                'message': 'Failed to connect to Mistral'
            },
            'APITimeoutError': {
                'category': ErrorCategory.TIMEOUT,
                'retryable': True,
                'message': 'Mistral request timed out'
            },
            'APIError': {
                'category': ErrorCategory.UNKNOWN,
                'retryable': True,
                'message': 'Mistral API error'
            },
        },
    }

    # Error patterns for string matching
    ERROR_PATTERNS = {
        'rate_limit': {
            'patterns': ['rate limit', 'too many requests', 'quota exceeded',
                         'too_many_requests', 'rate_limit_exceeded', 'throttled',
                         'limit reached', 'try again later'],
            'category': ErrorCategory.RATE_LIMIT,
            'retryable': True
        },
        'authentication': {
            'patterns': ['invalid api key', 'authentication failed', 'unauthorized',
                         'invalid_api_key'],
            'category': ErrorCategory.AUTHENTICATION,
            'retryable': False
        },
        'validation': {
            'patterns': ['invalid request', 'bad request', 'validation error',
                         'invalid_request', 'unexpected role', 'extra_forbidden'],
            'category': ErrorCategory.VALIDATION,
            'retryable': False
        },
        'server_error': {
            'patterns': ['server error', 'internal error', 'service unavailable',
                         'server_error'],
            'category': ErrorCategory.SERVER_ERROR,
            'retryable': True
        },
        'network': {
            'patterns': ['connection error', 'network error', 'dns resolution',
                         'connection refused', 'connection lost'],
            'category': ErrorCategory.NETWORK,
            'retryable': True
        },
        'timeout': {
            'patterns': ['timeout', 'timed out'],
            'category': ErrorCategory.TIMEOUT,
            'retryable': True
        },
        'content_filter': {
            'patterns': ['content filter', 'content_filter', 'safety filter',
                         'moderation'],
            'category': ErrorCategory.CONTENT_FILTER,
            'retryable': False
        }
    }

    RETRYABLE_STATUS_CODES: Set[int] = {429, 500, 502, 503, 504}
    NON_RETRYABLE_STATUS_CODES: Set[int] = {400, 401, 403, 404, 405, 409, 410, 422}

    @classmethod
    def classify_error(cls, error: Exception, provider: str = "mistral") -> ErrorClassification:
        """
        Classify an error with detailed metadata.

        Args:
            error: The exception to classify
            provider: The provider name

        Returns:
            ErrorClassification with category, retry info, and messaging
        """
        error_type = type(error).__name__
        mappings = cls.ERROR_MAPPINGS.get(provider, {})

        if error_type in mappings:
            mapping = mappings[error_type]
            return ErrorClassification(
                category=mapping['category'],
                is_retryable=mapping['retryable'],
                user_message=mapping['message'],
                suggested_delay=cls._get_retry_delay(error) if mapping['retryable'] else None
            )

        # httpx errors surface directly when the transport fails mid-stream
        if isinstance(error, httpx.TimeoutException):
            return ErrorClassification(
                category=ErrorCategory.TIMEOUT,
                is_retryable=True,
                suggested_delay=cls._get_retry_delay(error)
            )
        if isinstance(error, httpx.TransportError):
            return ErrorClassification(
                category=ErrorCategory.NETWORK,
                is_retryable=True,
                suggested_delay=cls._get_retry_delay(error)
            )

        return cls._classify_generic_error(error)

    @classmethod
    def _classify_generic_error(cls, error: Exception) -> ErrorClassification:
        """Generic error classification based on attributes and patterns."""
        status_code = getattr(error, 'status_code', None)
        if isinstance(status_code, int):
            if status_code in cls.RETRYABLE_STATUS_CODES:
                return ErrorClassification(
                    category=cls._categorize_by_status_code(status_code),
                    is_retryable=True,
                    suggested_delay=cls._get_retry_delay(error)
                )
            elif status_code in cls.NON_RETRYABLE_STATUS_CODES:
                return ErrorClassification(
                    category=cls._categorize_by_status_code(status_code),
                    is_retryable=False
                )

        error_str = str(error).lower()

        # Timeout before network
        pattern_priority = ['timeout', 'rate_limit', 'authentication', 'content_filter',
                            'server_error', 'validation', 'network']

        for pattern_key in pattern_priority:
            pattern_info = cls.ERROR_PATTERNS[pattern_key]
            if any(pattern in error_str for pattern in pattern_info['patterns']):
                return ErrorClassification(
                    category=pattern_info['category'],
                    is_retryable=pattern_info['retryable'],
                    suggested_delay=cls._get_retry_delay(error) if pattern_info['retryable'] else None
                )

        return ErrorClassification(
            category=ErrorCategory.UNKNOWN,
            is_retryable=False,
            user_message="An unknown error occurred"
        )

    @classmethod
    def _categorize_by_status_code(cls, status_code: int) -> ErrorCategory:
        """Categorize error based on HTTP status code."""
        if status_code == 401:
            return ErrorCategory.AUTHENTICATION
        elif status_code == 403:
            return ErrorCategory.PERMISSION_DENIED
        elif status_code == 404:
            return ErrorCategory.NOT_FOUND
        elif status_code == 409:
            return ErrorCategory.CONFLICT
        elif status_code == 429:
            return ErrorCategory.RATE_LIMIT
        elif status_code >= 500:
            return ErrorCategory.SERVER_ERROR
        elif status_code >= 400:
            return ErrorCategory.VALIDATION
        else:
            return ErrorCategory.UNKNOWN

    @classmethod
    def _get_retry_delay(cls, error: Exception) -> Optional[float]:
        """Extract retry delay from error if available."""
        retry_after = getattr(error, 'retry_after', None)
        if isinstance(retry_after, (int, float)):
            return float(retry_after)

        response = getattr(error, 'response', None)
        headers = getattr(response, 'headers', None)
        if headers is not None:
            header_value = headers.get('Retry-After')
            if header_value:
                try:
                    return float(header_value)
                except ValueError:
                    pass

        # Default delays by category
        error_type = type(error).__name__
        if 'RateLimit' in error_type:
            return 60.0
        elif 'Timeout' in error_type:
            return 5.0
        elif 'Server' in error_type:
            return 10.0

        return None
