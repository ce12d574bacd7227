"""
Core Module
===========

Business logic for turning render requests into PNG images.

Components:
- rendering: request normalization and Playwright PNG generation
"""
