"""
Application package for the user directory service.

``core`` holds configuration, logging and the flat-file record store,
``schemas`` the request/response models, ``services`` the CRUD logic
and ``api`` the versioned HTTP routers.
"""

from .main import app  # noqa: F401
