"""
Language endpoints for API v1.

These routes expose a CRUD API for the languages messages can be
written in.  A language that is still used by messages cannot be
deleted (HTTP 409).
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from translator_api.app.core.exceptions import DuplicateNameError, ResourceInUseError
from translator_api.app.schemas.language import LanguageDetails, LanguageRead
from translator_api.app.services.language_service import LanguageService

router = APIRouter()


@router.get("/", response_model=List[LanguageRead])
async def list_languages(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[LanguageRead]:
    """Return a paginated list of languages ordered by ID."""
    return await LanguageService.list_languages(limit=limit, offset=offset)


@router.get("/{language_id}", response_model=LanguageRead)
async def get_language(language_id: int) -> LanguageRead:
    """Retrieve a single language by ID."""
    language = await LanguageService.get_language(language_id)
    if language is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Language not found")
    return language


@router.post("/", response_model=LanguageRead, status_code=status.HTTP_201_CREATED)
async def create_language(details: LanguageDetails) -> LanguageRead:
    """Create a new language.  Returns 409 if the name is taken."""
    try:
        return await LanguageService.create_language(details)
    except DuplicateNameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.put("/{language_id}", response_model=LanguageRead)
async def update_language(language_id: int, details: LanguageDetails) -> LanguageRead:
    """Rename an existing language.

    Returns 409 if the name is taken, if the original language would be
    renamed while original messages use it, or if another language
    would take the original language name.
    """
    try:
        language = await LanguageService.update_language(language_id, details)
    except DuplicateNameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ResourceInUseError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if language is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Language not found")
    return language


@router.delete("/{language_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_language(language_id: int) -> None:
    """Delete a language that no message is written in."""
    try:
        deleted = await LanguageService.delete_language(language_id)
    except ResourceInUseError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Language not found")
    return None
