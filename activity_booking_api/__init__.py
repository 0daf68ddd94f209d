"""
Top-level package for the School Activities API.

All functionality lives in submodules under ``app``; ``seed`` loads
the initial lesson catalogue.
"""

__all__ = []
