"""
Data Models
===========

Pydantic data models for request/response validation and internal data structures.

Models:
- schemas: render request inputs, resolved render parameters, API responses
"""
