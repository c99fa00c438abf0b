"""
User record endpoints.

CRUD over the user collection under ``/data``.  Ids in the path are
taken as strings and parsed the same way stored ids are, so an id such
as ``abc`` is answered with 404 rather than a validation error.

Errors are raised as ``HTTPException``; the application turns their
detail into the ``{"error": ...}`` body.  Unexpected failures are
logged here and reported with a generic message per operation.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from user_directory_api.app.core.storage import RecordStore, get_store
from user_directory_api.app.schemas.user import (
    ErrorResponse,
    MessageResponse,
    UserEnvelope,
    UserPayload,
)
from user_directory_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = "Item not found"

_not_found = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
_server_error = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}}


def _failure(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("", response_model=List[Any], responses=_server_error)
async def list_users(store: RecordStore = Depends(get_store)) -> List[Any]:
    """Return every stored record, in insertion order."""
    try:
        users = await UserService.list_users(store)
    except Exception:
        logger.exception("Error reading data")
        raise _failure("Failed to read data")
    logger.debug("Sending %d users", len(users))
    return users


@router.get("/{user_id}", response_model=Dict[str, Any], responses={**_not_found, **_server_error})
async def get_user(user_id: str, store: RecordStore = Depends(get_store)) -> Dict[str, Any]:
    """Return a single record by id (404 if absent)."""
    try:
        user = await UserService.get_user(store, user_id)
    except Exception:
        logger.exception("Error fetching user %s", user_id)
        raise _failure("Failed to fetch item")
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return user


@router.post("", response_model=UserEnvelope, responses=_server_error)
async def create_user(
    user_in: Optional[UserPayload] = None,
    store: RecordStore = Depends(get_store),
) -> UserEnvelope:
    """Create a record; the store assigns its id."""
    try:
        user = await UserService.create_user(store, user_in if user_in is not None else UserPayload())
    except Exception:
        logger.exception("Error adding data")
        raise _failure("Failed to add data")
    return UserEnvelope(message="Data added successfully!", data=user)


@router.put("/{user_id}", response_model=UserEnvelope, responses={**_not_found, **_server_error})
async def update_user(
    user_id: str,
    user_in: Optional[UserPayload] = None,
    store: RecordStore = Depends(get_store),
) -> UserEnvelope:
    """Replace a record wholesale; fields not sent are dropped."""
    try:
        user = await UserService.update_user(store, user_id, user_in if user_in is not None else UserPayload())
    except Exception:
        logger.exception("Error updating user %s", user_id)
        raise _failure("Failed to update data")
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return UserEnvelope(message="Data updated successfully!", data=user)


@router.delete("/{user_id}", response_model=MessageResponse, responses={**_not_found, **_server_error})
async def delete_user(user_id: str, store: RecordStore = Depends(get_store)) -> MessageResponse:
    """Delete every record carrying the id."""
    try:
        deleted = await UserService.delete_user(store, user_id)
    except Exception:
        logger.exception("Error deleting user %s", user_id)
        raise _failure("Failed to delete data")
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return MessageResponse(message="Data deleted successfully!")
