"""
Test suite for Buyback Custodian

Contains:
- tests/conftest.py : shared fixtures (environment, custodian, collection, token)
- tests/unit/       : Unit tests for individual modules and custodian flows
"""
