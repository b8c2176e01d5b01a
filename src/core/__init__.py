"""
Core domain models, contracts and invariants.

This module contains the foundational building blocks that are independent
of external systems (value transfer, block clock, storage).
"""
