"""
Service layer.

Each service encapsulates the business logic for one resource and
talks to the store only through the accessors in ``stores`` wrapped in
``call_with_retry``.  The search query builder lives here as well.
"""
