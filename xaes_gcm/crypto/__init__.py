"""
Cryptographic primitives for XAES-256-GCM.

This module provides:
- Subkey derivation (CMAC-masked AES-256)
- Extended-nonce authenticated encryption (XAES-256-GCM)
- Secure memory helpers
"""

from .aead import (
    NONCE_SIZE,
    TAG_SIZE,
    XAES256GCM,
    decrypt,
    encrypt,
    is_supported,
    quick_decrypt,
    quick_encrypt,
)
from .errors import AuthenticationError, InvalidSizeError, UnsupportedPlatformError, XAESError
from .kdf import KEY_SIZE, derive_subkey, derive_subkey_into

__all__ = [
    'KEY_SIZE',
    'NONCE_SIZE',
    'TAG_SIZE',
    'XAES256GCM',
    'encrypt',
    'decrypt',
    'is_supported',
    'quick_encrypt',
    'quick_decrypt',
    'derive_subkey',
    'derive_subkey_into',
    'XAESError',
    'UnsupportedPlatformError',
    'InvalidSizeError',
    'AuthenticationError',
]
