"""
User directory service.

A small REST API for creating, listing, updating and deleting user
records kept in a single JSON file.  The application lives in
``user_directory_api.app``; run it with ``python run.py`` or::

    uvicorn user_directory_api.app.main:app
"""

__all__ = []
