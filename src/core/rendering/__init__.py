"""
Rendering Module
===============

Request normalization and PNG creation with browser automation.

Components:
- params: resolve html/width/height from a render request, fallback title card
- png_generator: browser automation for PNG screenshot generation
"""
