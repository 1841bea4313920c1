"""
Pydantic schemas for languages.

Messages are written in a language.  The original language (English
by default) is created when the database is initialised; further
languages are added through the API before translations in them can
be stored.
"""

from pydantic import BaseModel, Field, field_validator


class LanguageDetails(BaseModel):
    """Schema for creating or renaming a language."""

    name: str = Field(..., min_length=1, max_length=100, example="Polish")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v


class LanguageRead(BaseModel):
    """Schema for reading a language."""

    id: int
    name: str
    created_at: str
    updated_at: str

    model_config = {
        "from_attributes": True,
    }
