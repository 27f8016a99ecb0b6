"""
Subkey derivation for XAES-256-GCM.

Derives the per-message AES-256-GCM key from the long-term key and the first
half of the 24-byte nonce:
- L is the AES-256 encryption of the all-zero block
- K1 is L doubled in GF(2^128), as in CMAC subkey generation
- The subkey is AES(K1 ^ M1) || AES(K1 ^ M2), where
  Mi = 0x00 || i || "X" || 0x00 || nonce[:12]

Every scratch buffer is a bytearray and is overwritten before returning,
including when an exception is raised partway through.
"""

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import InvalidSizeError
from .utils import Buffer, byte_view, require_writable, secure_zero, xor_into


# Protocol constants
KEY_SIZE = 32
BLOCK_SIZE = 16
NONCE_PREFIX_SIZE = 12
DOMAIN_SEPARATOR = 0x58  # ASCII "X"
CMAC_RB = 0x87  # Reduction constant for x^128 + x^7 + x^2 + x + 1


def cmac_double(block: bytearray) -> None:
    """
    Double a 128-bit block in GF(2^128), in place.

    The block is shifted left by one bit as a big-endian integer. If the bit
    shifted out was set, the last byte is XORed with 0x87.

    Args:
        block: 16-byte mutable block

    Raises:
        InvalidSizeError: If the block is not 16 bytes
    """
    if len(block) != BLOCK_SIZE:
        raise InvalidSizeError("block", BLOCK_SIZE, len(block))

    msb = 0
    for i in range(BLOCK_SIZE - 1, -1, -1):
        b = block[i]
        block[i] = ((b << 1) & 0xFF) | msb
        msb = b >> 7

    # Mask instead of branch so the reduction does not depend on the secret bit
    block[-1] ^= CMAC_RB & -msb


def _encrypt_block(encryptor, block: bytearray, dest: memoryview, scratch: memoryview) -> None:
    """Encrypt one 16-byte block with AES-ECB and copy it into dest."""
    encryptor.update_into(block, scratch)
    dest[:] = scratch[:BLOCK_SIZE]


def derive_subkey_into(subkey: Buffer, nonce_prefix: Buffer, key: Buffer) -> None:
    """
    Derive the 32-byte XAES-256-GCM subkey into an existing buffer.

    Args:
        subkey: Writable 32-byte destination buffer
        nonce_prefix: First 12 bytes of the 24-byte nonce
        key: 32-byte long-term key

    Raises:
        InvalidSizeError: If any argument has the wrong length
        TypeError: If subkey is not writable
    """
    out = require_writable("subkey", subkey)
    nonce_prefix = byte_view("nonce_prefix", nonce_prefix)
    key = byte_view("key", key)
    if len(out) != KEY_SIZE:
        raise InvalidSizeError("subkey", KEY_SIZE, len(out))
    if len(nonce_prefix) != NONCE_PREFIX_SIZE:
        raise InvalidSizeError("nonce_prefix", NONCE_PREFIX_SIZE, len(nonce_prefix))
    if len(key) != KEY_SIZE:
        raise InvalidSizeError("key", KEY_SIZE, len(key))

    message = bytearray(BLOCK_SIZE)
    k1 = bytearray(BLOCK_SIZE)
    masked = bytearray(BLOCK_SIZE)
    # update_into needs room for len(data) + BLOCK_SIZE - 1 bytes
    scratch = bytearray(2 * BLOCK_SIZE)
    scratch_view = memoryview(scratch)

    try:
        encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()

        # L = AES(K, 0^128), then K1 = dbl(L)
        _encrypt_block(encryptor, message, k1, scratch_view)
        cmac_double(k1)

        message[1] = 0x01
        message[2] = DOMAIN_SEPARATOR
        message[BLOCK_SIZE - NONCE_PREFIX_SIZE:] = nonce_prefix

        xor_into(masked, message, k1)
        _encrypt_block(encryptor, masked, out[:BLOCK_SIZE], scratch_view)

        message[1] = 0x02
        xor_into(masked, message, k1)
        _encrypt_block(encryptor, masked, out[BLOCK_SIZE:], scratch_view)

        encryptor.finalize()
    except Exception:
        secure_zero(out)
        raise
    finally:
        secure_zero(message)
        secure_zero(k1)
        secure_zero(masked)
        secure_zero(scratch)


def derive_subkey(nonce_prefix: Buffer, key: Buffer) -> bytearray:
    """
    Derive the 32-byte XAES-256-GCM subkey for a nonce prefix.

    The result depends only on the key and the nonce prefix. The caller owns
    the returned bytearray and should zero it when done.

    Args:
        nonce_prefix: First 12 bytes of the 24-byte nonce
        key: 32-byte long-term key

    Returns:
        Derived 32-byte subkey

    Raises:
        InvalidSizeError: If any argument has the wrong length
    """
    subkey = bytearray(KEY_SIZE)
    derive_subkey_into(subkey, nonce_prefix, key)
    return subkey
