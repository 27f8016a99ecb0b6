"""
Test suite for XAES-256-GCM.

This package contains tests for all components:
- test_correctness.py: Known answers, round trips, object interface
- test_security.py: Tampering, size enforcement, secret hygiene
- test_kdf.py: Subkey derivation and CMAC doubling
"""

__all__ = [
    'test_correctness',
    'test_security',
    'test_kdf'
]
