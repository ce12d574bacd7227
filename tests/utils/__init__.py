"""
Test Utilities
==============

Shared test doubles for the test suite.
"""
