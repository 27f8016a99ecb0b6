"""
XAES-256-GCM authenticated encryption.

Extends AES-256-GCM to 24-byte nonces. The first 12 nonce bytes select a
derived subkey (see kdf.py) and the last 12 are used as the ordinary GCM
nonce. Ciphertexts are laid out as encrypted_bytes || 16-byte tag.

Two interfaces are provided:
- encrypt()/decrypt() write into caller-supplied buffers
- XAES256GCM mirrors cryptography's AESGCM and returns new bytes
"""

import logging
from functools import lru_cache
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.ciphers import algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import AuthenticationError, InvalidSizeError, UnsupportedPlatformError
from .kdf import KEY_SIZE, NONCE_PREFIX_SIZE, derive_subkey_into
from .utils import (
    Buffer,
    SecureBytes,
    byte_view,
    generate_random_bytes,
    require_writable,
    secure_zero,
)


logger = logging.getLogger(__name__)

NONCE_SIZE = 24
TAG_SIZE = 16
GCM_NONCE_SIZE = NONCE_SIZE - NONCE_PREFIX_SIZE


@lru_cache(maxsize=None)
def is_supported() -> bool:
    """
    Check whether the crypto backend provides AES-256-GCM and AES-256-ECB.

    Returns:
        True if both primitives are available
    """
    backend = default_backend()
    aes = algorithms.AES(bytes(KEY_SIZE))
    return bool(
        backend.cipher_supported(aes, modes.GCM(bytes(GCM_NONCE_SIZE)))
        and backend.cipher_supported(aes, modes.ECB())
    )


def _require_platform() -> None:
    if not is_supported():
        raise UnsupportedPlatformError("AES-GCM is not supported on this platform")


def _check_size(parameter: str, actual: int, expected: int) -> None:
    if actual != expected:
        logger.debug("Rejected %s of %d bytes, expected %d", parameter, actual, expected)
        raise InvalidSizeError(parameter, expected, actual)


def _associated_view(associated_data: Optional[Buffer]) -> memoryview:
    if associated_data is None:
        return memoryview(b"")
    return byte_view("associated_data", associated_data)


def encrypt(
    ciphertext: Buffer,
    plaintext: Buffer,
    nonce: Buffer,
    key: Buffer,
    associated_data: Optional[Buffer] = b"",
) -> None:
    """
    Encrypt and authenticate plaintext into a caller-supplied buffer.

    Sizes are counted in bytes, so any contiguous bytes-like object works,
    whatever its item format.

    Args:
        ciphertext: Writable output buffer of exactly len(plaintext) + 16 bytes
        plaintext: Data to encrypt
        nonce: 24-byte nonce, unique per message for this key
        key: 32-byte key
        associated_data: Additional data to authenticate (not encrypted);
            None is the same as empty

    Raises:
        UnsupportedPlatformError: If AES-GCM is unavailable
        InvalidSizeError: If any buffer has the wrong length
        TypeError: If ciphertext is not writable
    """
    _require_platform()
    plaintext = byte_view("plaintext", plaintext)
    nonce = byte_view("nonce", nonce)
    key = byte_view("key", key)
    _check_size("ciphertext", len(byte_view("ciphertext", ciphertext)), len(plaintext) + TAG_SIZE)
    _check_size("nonce", len(nonce), NONCE_SIZE)
    _check_size("key", len(key), KEY_SIZE)
    out = require_writable("ciphertext", ciphertext)
    associated_data = _associated_view(associated_data)

    subkey = bytearray(KEY_SIZE)
    try:
        derive_subkey_into(subkey, nonce[:NONCE_PREFIX_SIZE], key)
        sealed = AESGCM(subkey).encrypt(
            bytes(nonce[NONCE_PREFIX_SIZE:]), plaintext, associated_data
        )
        out[:] = sealed
    finally:
        secure_zero(subkey)


def decrypt(
    plaintext: Buffer,
    ciphertext: Buffer,
    nonce: Buffer,
    key: Buffer,
    associated_data: Optional[Buffer] = b"",
) -> None:
    """
    Verify and decrypt ciphertext into a caller-supplied buffer.

    Nothing is written to plaintext unless the tag verifies. On failure the
    buffer is overwritten with zeros.

    Args:
        plaintext: Writable output buffer of exactly len(ciphertext) - 16 bytes
        ciphertext: Encrypted data with the 16-byte tag appended
        nonce: 24-byte nonce used for encryption
        key: 32-byte key
        associated_data: Additional authenticated data; None is the same as empty

    Raises:
        UnsupportedPlatformError: If AES-GCM is unavailable
        InvalidSizeError: If any buffer has the wrong length
        AuthenticationError: If the tag does not verify
        TypeError: If plaintext is not writable
    """
    _require_platform()
    ciphertext = byte_view("ciphertext", ciphertext)
    nonce = byte_view("nonce", nonce)
    key = byte_view("key", key)
    if len(ciphertext) < TAG_SIZE:
        logger.debug("Rejected ciphertext of %d bytes, shorter than the tag", len(ciphertext))
        raise InvalidSizeError("ciphertext", f"at least {TAG_SIZE}", len(ciphertext))
    _check_size("plaintext", len(byte_view("plaintext", plaintext)), len(ciphertext) - TAG_SIZE)
    _check_size("nonce", len(nonce), NONCE_SIZE)
    _check_size("key", len(key), KEY_SIZE)
    out = require_writable("plaintext", plaintext)
    associated_data = _associated_view(associated_data)

    subkey = bytearray(KEY_SIZE)
    try:
        derive_subkey_into(subkey, nonce[:NONCE_PREFIX_SIZE], key)
        opened = AESGCM(subkey).decrypt(
            bytes(nonce[NONCE_PREFIX_SIZE:]), ciphertext, associated_data
        )
    except InvalidTag as e:
        secure_zero(out)
        logger.debug("Authentication failed for %d-byte ciphertext", len(ciphertext))
        raise AuthenticationError("XAES-256-GCM authentication verification failed") from e
    else:
        out[:] = opened
    finally:
        secure_zero(subkey)


class XAES256GCM:
    """
    XAES-256-GCM cipher bound to one long-term key.

    The key is copied into a SecureBytes and wiped by clear() or when the
    cipher is used as a context manager and the block exits.
    """

    def __init__(self, key: Buffer):
        """
        Initialize the cipher.

        Args:
            key: 32-byte long-term key

        Raises:
            UnsupportedPlatformError: If AES-GCM is unavailable
            InvalidSizeError: If the key is not 32 bytes
        """
        _require_platform()
        key = byte_view("key", key)
        _check_size("key", len(key), KEY_SIZE)
        self._key = SecureBytes(key)

    @classmethod
    def generate_key(cls) -> bytes:
        """Generate a random 32-byte key."""
        return generate_random_bytes(KEY_SIZE)

    @staticmethod
    def generate_nonce() -> bytes:
        """Generate a random 24-byte nonce."""
        return generate_random_bytes(NONCE_SIZE)

    def encrypt(self, nonce: Buffer, data: Buffer, associated_data: Optional[Buffer] = None) -> bytes:
        """
        Encrypt data.

        Returns:
            Ciphertext with the 16-byte tag appended
        """
        data = byte_view("data", data)
        ciphertext = bytearray(len(data) + TAG_SIZE)
        encrypt(ciphertext, data, nonce, self._key.buffer, associated_data)
        return bytes(ciphertext)

    def decrypt(self, nonce: Buffer, data: Buffer, associated_data: Optional[Buffer] = None) -> bytes:
        """
        Decrypt data produced by encrypt().

        Raises:
            AuthenticationError: If the tag does not verify
        """
        data = byte_view("data", data)
        plaintext = bytearray(max(len(data) - TAG_SIZE, 0))
        try:
            decrypt(plaintext, data, nonce, self._key.buffer, associated_data)
            return bytes(plaintext)
        finally:
            secure_zero(plaintext)

    def clear(self) -> None:
        """Wipe the stored key. Later use raises ValueError."""
        self._key.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.clear()

    @property
    def algorithm_name(self) -> str:
        """Get the name of the algorithm."""
        return "XAES-256-GCM"

    @property
    def key_size(self) -> int:
        """Get the required key size in bytes."""
        return KEY_SIZE

    @property
    def nonce_size(self) -> int:
        """Get the required nonce size in bytes."""
        return NONCE_SIZE

    @property
    def tag_size(self) -> int:
        """Get the authentication tag size in bytes."""
        return TAG_SIZE


def quick_encrypt(key: Buffer, nonce: Buffer, plaintext: Buffer,
                  associated_data: Optional[Buffer] = b"") -> bytes:
    """
    Quick encryption function for simple use cases.

    Returns:
        Ciphertext with the 16-byte tag appended
    """
    plaintext = byte_view("plaintext", plaintext)
    ciphertext = bytearray(len(plaintext) + TAG_SIZE)
    encrypt(ciphertext, plaintext, nonce, key, associated_data)
    return bytes(ciphertext)


def quick_decrypt(key: Buffer, nonce: Buffer, ciphertext: Buffer,
                  associated_data: Optional[Buffer] = b"") -> bytes:
    """
    Quick decryption function for simple use cases.

    Returns:
        Decrypted plaintext
    """
    ciphertext = byte_view("ciphertext", ciphertext)
    plaintext = bytearray(max(len(ciphertext) - TAG_SIZE, 0))
    decrypt(plaintext, ciphertext, nonce, key, associated_data)
    return bytes(plaintext)
