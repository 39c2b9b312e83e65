"""
Test suite for bignum

Contains:
- tests/unit/          : Unit tests for kernel modules and the SignedInteger facade
"""
