"""GUI adapter layer.

This package provides thin Qt-shaped adapters over engine services.

Notes
-----
Adapters exist to:
- keep GUI code free of persistence details,
- turn engine observer callbacks into Qt signals,
- translate failed writes and domain errors into user-visible messages.
"""
