"""
Pydantic schemas for messages.

A message is either an original (``original_message_id`` is ``None``)
or a translation of an original.  The same ``MessageDetails`` payload
is used to create a message and to replace it on update.  Tag ids are
only meaningful for originals: a translation always reports the tags
of its original.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .language import LanguageRead
from .tag import TagRead


class MessageDetails(BaseModel):
    """Schema for creating or updating a message."""

    original_message_id: Optional[int] = Field(
        None,
        ge=1,
        description="ID of the original message; omit for an original message",
    )
    language_id: int = Field(..., ge=1, example=1)
    content: str = Field(..., min_length=1, example="Original message")
    tag_ids: List[int] = Field(
        default_factory=list,
        example=[1, 2],
        description="Tags of an original message; ignored for translations",
    )

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content must not be blank")
        return v

    @field_validator("tag_ids")
    @classmethod
    def unique_tag_ids(cls, v: List[int]) -> List[int]:
        # Keep the first occurrence of each id, preserving order
        return list(dict.fromkeys(v))


class MessageRead(BaseModel):
    """Schema for reading a message together with its language and tags."""

    id: int
    content: str
    language: LanguageRead
    original_message_id: Optional[int]
    tags: List[TagRead]
    created_at: str
    updated_at: str

    model_config = {
        "from_attributes": True,
    }
