"""
Service-level exceptions.

This module contains exceptions that can be raised by various services
in the application.
"""

class LLMError(Exception):
    """Base exception for language model integration errors."""
    pass

class LLMUnavailableError(LLMError):
    """Raised when every model in the failover chain failed."""
    pass

class ResponseParseError(LLMError):
    """Raised when a model response does not contain a usable JSON object."""
    pass

class StorageError(Exception):
    """Raised when the backing table cannot be read or written."""
    pass

class ProfileNotFoundError(StorageError):
    """Raised when a user has no stored profile."""
    pass

class LogNotFoundError(StorageError):
    """Raised when a symptom log id does not exist for the user."""
    pass
