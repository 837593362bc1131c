from typing import Dict, Optional


class MistralSDKError(Exception):
    pass


class ConfigurationError(MistralSDKError):
    """Rejected configuration, raised before any request is built.

    Attributes:
        errors: Mapping of parameter (or setting) name to validation message
    """

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.errors = errors or {}
