"""
taskboard: a small task tracker as a reusable Django app.

Tasks live behind a repository that validates every write and keeps the
timestamps honest. A JSON CRUD API is mounted from ``taskboard.urls``.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
