"""
Test suite for vaultyield

Contains:
- tests/unit/          : Unit tests for individual modules
"""
