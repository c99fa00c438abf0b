"""
Pydantic models for user records.

Records are stored as plain JSON objects, so the models here only
describe what the API accepts and returns.  The server does not check
presence or type of ``name``, ``email`` or ``phone``; the client checks
the required ones before a request is sent.  Keys the client did not
send stay absent from the stored record, which is why services dump
payloads with ``exclude_unset``.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class UserPayload(BaseModel):
    """Body of create and update requests.

    Any JSON object is accepted and stored as sent, extra keys included.
    Only a client supplied ``id`` is dropped; the store owns ids.
    """

    model_config = ConfigDict(extra="allow")

    name: Any = Field(None, examples=["Ana"])
    email: Any = Field(None, examples=["a@x.com"])
    phone: Any = Field(None, examples=["+1 555 0100"])

    def to_fields(self) -> Dict[str, Any]:
        """Return the keys present in the request body, without ``id``."""
        fields = self.model_dump(exclude_unset=True)
        fields.pop("id", None)
        return fields


class UserEnvelope(BaseModel):
    """Response of create and update: a message plus the written record."""

    message: str
    data: Dict[str, Any]


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
