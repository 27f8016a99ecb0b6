"""
Cryptographic utilities for secure memory operations and random number generation.

Secret scratch material in this package lives in bytearrays so it can be
overwritten in place once it is no longer needed. Immutable bytes objects
cannot be wiped; keep them out of the secret path wherever possible.
"""

import secrets
from typing import Union


Buffer = Union[bytes, bytearray, memoryview]

def secure_zero(data: Union[bytearray, memoryview]) -> None:
    """
    Overwrite a mutable buffer with zeros in place.

    Args:
        data: bytearray or writable memoryview to clear

    Raises:
        TypeError: If the buffer is immutable
    """
    if isinstance(data, bytearray):
        data[:] = bytes(len(data))
    elif isinstance(data, memoryview):
        if data.readonly:
            raise TypeError("Cannot zero a read-only memoryview")
        view = data if data.format == "B" else data.cast("B")
        view[:] = bytes(view.nbytes)
    else:
        raise TypeError("Data must be bytearray or memoryview")


def is_zero(data) -> bool:
    """Return True if every byte of a bytes-like object is zero."""
    return not any(memoryview(data).cast("B"))


def xor_into(out: bytearray, a, b) -> None:
    """
    XOR two equal-length byte sequences into an existing buffer.

    Args:
        out: Destination buffer, same length as the inputs
        a: First byte sequence
        b: Second byte sequence

    Raises:
        ValueError: If the lengths differ
    """
    if not len(out) == len(a) == len(b):
        raise ValueError("Byte sequences must have equal length")

    for i in range(len(out)):
        out[i] = a[i] ^ b[i]


def generate_random_bytes(length: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Args:
        length: Number of random bytes to generate

    Returns:
        Cryptographically secure random bytes
    """
    return secrets.token_bytes(length)


def byte_view(name: str, buffer: Buffer) -> memoryview:
    """
    Return a flat, one-byte-per-item view of a bytes-like object.

    len() of the result is the size in bytes, whatever the item format of
    the original buffer.

    Raises:
        TypeError: If the buffer is not a contiguous bytes-like object
    """
    try:
        view = memoryview(buffer)
    except TypeError:
        raise TypeError(f"{name} must be a bytes-like object") from None
    if not view.c_contiguous:
        raise TypeError(f"{name} must be a contiguous bytes-like object")
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def require_writable(name: str, buffer: Buffer) -> memoryview:
    """
    Return a flat byte view of an output buffer.

    Raises:
        TypeError: If the buffer is not a writable bytes-like object
    """
    view = byte_view(name, buffer)
    if view.readonly:
        raise TypeError(f"{name} must be writable, not {type(buffer).__name__}")
    return view


class SecureBytes:
    """
    A wrapper for sensitive byte data that attempts secure cleanup.

    This class provides a context manager and destructor that
    zero out the protected data when it's no longer needed.
    """

    def __init__(self, data):
        """
        Initialize with sensitive byte data.

        Args:
            data: Sensitive bytes to protect (copied into a private bytearray)
        """
        self._data = bytearray(data)
        self._is_valid = True

    @property
    def buffer(self) -> bytearray:
        """The protected bytearray itself, without copying."""
        if not self._is_valid:
            raise ValueError("SecureBytes has been cleared")
        return self._data

    def clear(self) -> None:
        """Securely clear the protected data."""
        secure_zero(self._data)
        self._is_valid = False

    def is_cleared(self) -> bool:
        """Check if the SecureBytes has been cleared."""
        return not self._is_valid

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - clear data."""
        self.clear()

    def __del__(self):
        """Destructor - attempt to clear data."""
        if hasattr(self, '_data'):
            self.clear()

    def __len__(self) -> int:
        """Return length of protected data."""
        return len(self._data)
