"""
XAES-256-GCM for Python.

Extended-nonce AEAD built on AES-256-GCM. Callers can use a random 24-byte
nonce safely: the first half of the nonce derives a per-message subkey and
the second half is the regular 12-byte GCM nonce.

Basic Usage:
    >>> from xaes_gcm import XAES256GCM
    >>>
    >>> key = XAES256GCM.generate_key()
    >>> cipher = XAES256GCM(key)
    >>> nonce = XAES256GCM.generate_nonce()
    >>>
    >>> ciphertext = cipher.encrypt(nonce, b"Hello, XAES!", b"header")
    >>> cipher.decrypt(nonce, ciphertext, b"header")
    b'Hello, XAES!'
"""

__version__ = "0.1.0"

# Cryptographic primitives
from .crypto.aead import (
    NONCE_SIZE,
    TAG_SIZE,
    XAES256GCM,
    decrypt,
    encrypt,
    is_supported,
    quick_decrypt,
    quick_encrypt,
)
from .crypto.kdf import KEY_SIZE, derive_subkey

# Errors
from .crypto.errors import AuthenticationError, InvalidSizeError, UnsupportedPlatformError, XAESError


__all__ = [
    # Version info
    '__version__',

    # Constants
    'KEY_SIZE',
    'NONCE_SIZE',
    'TAG_SIZE',

    # Operations
    'encrypt',
    'decrypt',
    'is_supported',
    'derive_subkey',
    'quick_encrypt',
    'quick_decrypt',
    'XAES256GCM',

    # Errors
    'XAESError',
    'UnsupportedPlatformError',
    'InvalidSizeError',
    'AuthenticationError',
]
