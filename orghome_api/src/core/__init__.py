"""
Core application utilities for settings and FastAPI dependencies.

This package provides:
- Application-level settings (separate from DB settings)
- Logging configuration with per-request context
- Viewer token handling and the exception taxonomy
- Dependency helpers (optional viewer, org home service)
"""
