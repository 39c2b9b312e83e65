"""
Core numeric kernel, domain facade, and external contracts.

This module contains the building blocks that are independent of any
I/O surface: limb arithmetic, transforms, and the SignedInteger type.
"""
