"""
Top-level package for the Product Reviews API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
