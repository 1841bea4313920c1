"""
Message endpoints for API v1.

These routes manage original messages and their translations.  The
same ``MessageDetails`` body is used to create a message and to
replace it: omit ``original_message_id`` for an original, set it to
the ID of an original for a translation.

Rule violations are reported as follows:

* unknown language, tag or original message: 404;
* an original not in the original language, an original given an
  original message, a translation stripped of its original or a
  translation of a translation: 422.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from translator_api.app.core.exceptions import MessageValidationError, NotFoundError
from translator_api.app.schemas.message import MessageDetails, MessageRead
from translator_api.app.services.message_service import MessageService

router = APIRouter()


@router.get("/", response_model=List[MessageRead])
async def list_messages(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    content: Optional[str] = Query(None, description="Case-insensitive substring of the content"),
    language_id: Optional[int] = Query(None, description="Filter by language ID"),
    tag_id: Optional[int] = Query(None, description="Filter by tag ID (translations match via their original)"),
    originals_only: bool = Query(False, description="Only return original messages"),
) -> List[MessageRead]:
    """Return a paginated list of messages ordered by ID."""
    return await MessageService.list_messages(
        limit=limit,
        offset=offset,
        content=content,
        language_id=language_id,
        tag_id=tag_id,
        originals_only=originals_only,
    )


@router.get("/{message_id}", response_model=MessageRead)
async def get_message(message_id: int) -> MessageRead:
    """Retrieve a single message with its language and tags."""
    message = await MessageService.get_message(message_id)
    if message is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    return message


@router.get("/{message_id}/translations", response_model=List[MessageRead])
async def list_translations(message_id: int) -> List[MessageRead]:
    """Return all translations of an original message."""
    try:
        return await MessageService.list_translations(message_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def create_message(details: MessageDetails) -> MessageRead:
    """Create an original message or a translation."""
    try:
        return await MessageService.create_message(details)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except MessageValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.put("/{message_id}", response_model=MessageRead)
async def update_message(message_id: int, details: MessageDetails) -> MessageRead:
    """Replace a message.

    An original keeps being an original and a translation keeps being
    a translation; a translation's tags always follow its original.
    """
    try:
        message = await MessageService.update_message(message_id, details)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except MessageValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if message is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    return message


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(message_id: int) -> None:
    """Delete a message; deleting an original also deletes its translations."""
    deleted = await MessageService.delete_message(message_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    return None
