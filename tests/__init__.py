"""
Test suite for charity-ledger

Contains:
- tests/unit/          : Unit tests for domain models, gates, ledger and contracts
"""
