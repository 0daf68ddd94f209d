"""
Core infrastructure: settings, logging, errors, the store handle and
the retry helper.
"""
