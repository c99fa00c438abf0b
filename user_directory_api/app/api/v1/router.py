"""
Router for version 1 of the API.

Aggregates the domain routers.  The application mounts this router at
the root, so the user collection is served under ``/data``.
"""

from fastapi import APIRouter

from .endpoints import data

router = APIRouter()

router.include_router(data.router, prefix="/data", tags=["data"])
