# app/schemas/user.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserBootstrap(BaseModel):
    """
    Payload sent by the auth layer when an account logs in for the first time.
    """

    uid: str = Field(
        ...,
        min_length=1,
        description="Identifier issued by the auth provider.",
        examples=["uid-123"],
    )
    display_name: str | None = Field(None, examples=["Jane Coach"])
    photo_url: str | None = Field(None, examples=["https://example.com/avatar.png"])


class UserRead(BaseModel):
    """
    Public representation of a user record.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., examples=["uid-123"])
    name: str | None = Field(None, examples=["Jane Coach"])
    avatar: str | None = Field(None, examples=["https://example.com/avatar.png"])
    created_at: datetime | None = Field(
        None,
        description="Timestamp when the user record was created.",
    )
