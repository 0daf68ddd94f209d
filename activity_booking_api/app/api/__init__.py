"""
API package containing versioned routes and shared dependencies.

A version subpackage such as ``v1`` exposes a top-level ``router``
which includes all of its endpoints; ``deps`` holds the dependencies
the endpoints use to reach the store and services.
"""
