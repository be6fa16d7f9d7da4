"""
Custom error types for X1 RPC operations.
"""

class X1Error(Exception):
    """Base class for X1 dashboard errors."""
    pass

class UpstreamError(X1Error):
    """Base class for failures fetching a metric from the RPC gateway."""
    pass

class UpstreamUnavailable(UpstreamError):
    """Raised when the RPC gateway cannot be reached or rejects the call."""
    pass

class RPCError(UpstreamUnavailable):
    """Raised when the RPC gateway answers with a JSON-RPC error."""

    def __init__(self, message: str, code: int = 0):
        super().__init__(message)
        self.code = code

class RateLimitError(RPCError):
    """Raised when rate limit is exceeded."""
    pass

class MethodNotSupportedError(RPCError):
    """Raised when the endpoint does not implement the requested method."""
    pass

class MalformedResponse(UpstreamError):
    """Raised when a response is structurally unusable."""
    pass

# Public exports
__all__ = [
    'X1Error',
    'UpstreamError',
    'UpstreamUnavailable',
    'RPCError',
    'RateLimitError',
    'MethodNotSupportedError',
    'MalformedResponse',
]
