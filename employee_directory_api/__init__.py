"""
Top-level package for the Employee Directory API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
