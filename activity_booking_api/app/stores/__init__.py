"""
Store accessors.

Each accessor wraps one table of the SQLite store and exposes the
primitive reads and writes the services need.  Accessors are blocking
and hold no state besides the ``Database`` handle they are given.
"""

from .lesson_store import LessonStore, StoreFilter  # noqa: F401
from .order_store import OrderStore  # noqa: F401
