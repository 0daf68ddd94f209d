"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, errors, the store handle
and the retry helper), ``stores`` (table accessors), ``services``
(business logic), ``schemas`` (request and response models) and
``api`` (versioned routers).
"""

from .main import app  # noqa: F401
