"""
Pydantic schema definitions for API payloads.

Schemas are separated from the store layer to decouple the API
representation from persistence.
"""
