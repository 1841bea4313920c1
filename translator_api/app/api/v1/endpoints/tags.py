"""
Tag endpoints for API v1.

CRUD routes for tags.  Tags are attached to original messages and
inherited by their translations; deleting a tag detaches it from all
messages.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from translator_api.app.core.exceptions import DuplicateNameError
from translator_api.app.schemas.tag import TagDetails, TagRead
from translator_api.app.services.tag_service import TagService

router = APIRouter()


@router.get("/", response_model=List[TagRead])
async def list_tags(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[TagRead]:
    """Return a paginated list of tags ordered by ID."""
    return await TagService.list_tags(limit=limit, offset=offset)


@router.get("/{tag_id}", response_model=TagRead)
async def get_tag(tag_id: int) -> TagRead:
    tag = await TagService.get_tag(tag_id)
    if tag is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found")
    return tag


@router.post("/", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(details: TagDetails) -> TagRead:
    try:
        return await TagService.create_tag(details)
    except DuplicateNameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.put("/{tag_id}", response_model=TagRead)
async def update_tag(tag_id: int, details: TagDetails) -> TagRead:
    try:
        tag = await TagService.update_tag(tag_id, details)
    except DuplicateNameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if tag is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found")
    return tag


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(tag_id: int) -> None:
    deleted = await TagService.delete_tag(tag_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found")
    return None
