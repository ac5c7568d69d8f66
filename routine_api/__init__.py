"""
Top‑level package for the Daily Routine API.

This file makes ``routine_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``routine_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
