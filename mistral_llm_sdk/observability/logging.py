"""
Structured logging utility for the SDK.

Provides a consistent logging interface for the Mistral provider and the
message/parameter normalisers, with standard fields like provider, model
and request_id.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Optional


class ProviderLogger:
    """Structured logger for provider adapters."""

    def __init__(self, provider_name: str, component: str = "providers"):
        """
        Initialize logger for a specific provider.

        Args:
            provider_name: Name of the provider (e.g., "mistral")
            component: Logger namespace segment ("providers", "normalization", ...)
        """
        self.provider = provider_name
        self.logger = logging.getLogger(f"mistral_llm_sdk.{component}.{provider_name}")

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"provider={self.provider}"]

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, **kwargs):
        """Log debug message with structured fields."""
        self.logger.debug(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    def info(self, message: str, model: Optional[str] = None,
             request_id: Optional[str] = None, **kwargs):
        """Log info message with structured fields."""
        self.logger.info(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    def warning(self, message: str, model: Optional[str] = None,
                request_id: Optional[str] = None, **kwargs):
        """Log warning message with structured fields."""
        self.logger.warning(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    def error(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, error: Optional[Exception] = None, **kwargs):
        """Log error message with structured fields."""
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_msg'] = str(error)

        self.logger.error(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    @contextmanager
    def track_request(self, method: str, model: Optional[str], request_id: Optional[str] = None):
        """
        Context manager to track request timing and log key events.

        Args:
            method: The method being called (e.g., "generate", "stream")
            model: The model being used
            request_id: Optional request ID (generated if not provided)

        Yields:
            Dict with request metadata including request_id
        """
        if request_id is None:
            request_id = str(uuid.uuid4())[:8]

        start_time = time.time()

        self.debug(
            f"Starting {method} request",
            model=model,
            request_id=request_id,
            method=method
        )

        metadata = {
            'request_id': request_id,
            'model': model,
            'method': method,
            'start_time': start_time
        }

        try:
            yield metadata

            duration = time.time() - start_time
            self.info(
                f"Completed {method} request",
                model=model,
                request_id=request_id,
                method=method,
                duration_ms=int(duration * 1000)
            )

        except Exception as e:
            duration = time.time() - start_time
            self.error(
                f"Failed {method} request",
                model=model,
                request_id=request_id,
                method=method,
                duration_ms=int(duration * 1000),
                error=e
            )
            raise

    def log_usage(self, usage: Dict[str, Any], model: Optional[str], request_id: str):
        """Log token usage information."""
        self.info(
            "Token usage",
            model=model,
            request_id=request_id,
            prompt_tokens=usage.get('prompt_tokens', 0),
            completion_tokens=usage.get('completion_tokens', 0),
            total_tokens=usage.get('total_tokens', 0)
        )
