"""
HTML Render API
===============

A small HTTP service that turns HTML (or a title string) into a PNG image
through headless browser rendering.

This package provides:
- FastAPI REST endpoint for HTML to PNG rendering
- Request normalization with fallback title-card generation
- Browser automation with Playwright
"""

__version__ = "1.0.0"
__author__ = "HTML Render API Team"
