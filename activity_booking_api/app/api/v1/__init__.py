"""
Version 1 of the API.

This subpackage bundles all endpoints for the first public version of
the School Activities API.  Breaking changes should be introduced in a
new version subpackage (e.g. ``v2``).
"""
