"""
Error taxonomy for the chat pipeline.

- ConfigurationError: raised while the application is being assembled
  (duplicate tool names, unknown backend, missing connection info).
- ProviderError: the completion backend failed or answered with garbage.
- ToolInputError: a tool rejected its arguments. Never propagated to the
  caller; the executor renders it inline as "Error: ...".
- SerializationError: a stream chunk could not be framed and is skipped.
"""


class GadgetsIncError(Exception):
    """Base class for all application errors"""
    pass


class ConfigurationError(GadgetsIncError):
    """Raised at startup when the application cannot be assembled"""
    pass


class ProviderError(GadgetsIncError):
    """Raised when the completion backend is unavailable or misbehaves"""

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class ToolInputError(GadgetsIncError):
    """Raised by a tool function when its arguments are invalid"""
    pass


class SerializationError(GadgetsIncError):
    """Raised when a stream chunk cannot be encoded as a frame"""
    pass
