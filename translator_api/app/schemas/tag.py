"""Pydantic schemas for tags attached to original messages."""

from pydantic import BaseModel, Field, field_validator


class TagDetails(BaseModel):
    """Schema for creating or renaming a tag."""

    name: str = Field(..., min_length=1, max_length=100, example="Note")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v


class TagRead(BaseModel):
    """Schema for reading a tag."""

    id: int
    name: str
    created_at: str
    updated_at: str

    model_config = {
        "from_attributes": True,
    }
