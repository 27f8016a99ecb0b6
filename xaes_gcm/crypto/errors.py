"""
Exception types for XAES-256-GCM.

Every failure the library can report is a subclass of XAESError, so callers
can catch the whole family or a single kind.
"""


class XAESError(Exception):
    """Base class for all XAES-256-GCM errors."""
    pass


class UnsupportedPlatformError(XAESError):
    """Raised when AES-GCM is not available from the crypto backend."""
    pass


class InvalidSizeError(XAESError, ValueError):
    """
    Raised when a key, nonce or buffer has the wrong length.

    Attributes:
        parameter: Name of the offending argument
        expected: Human readable required length
        actual: Length that was supplied
    """

    def __init__(self, parameter: str, expected, actual: int):
        self.parameter = parameter
        self.expected = expected
        self.actual = actual
        super().__init__(f"{parameter} must be {expected} bytes long, got {actual}")


class AuthenticationError(XAESError):
    """Raised when the authentication tag does not verify."""
    pass
