"""
FastAPI REST Endpoints
======================

REST API endpoints for HTTP access to HTML rendering functionality.

Endpoints:
- POST /api/render: HTML (or title) to PNG conversion
- GET /health: Health check endpoint
- GET /: Interactive API documentation
"""
