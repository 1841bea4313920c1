"""
Service layer for tags.

Tags label original messages; translations inherit them.  Deleting a
tag detaches it from every message through the ``ON DELETE CASCADE``
clause on ``message_tags``.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from translator_api.app.core.db import get_connection
from translator_api.app.core.exceptions import DuplicateNameError
from translator_api.app.schemas.tag import TagDetails, TagRead


class TagService:
    """Service class for managing tags."""

    @classmethod
    async def create_tag(cls, details: TagDetails) -> TagRead:
        """Insert a new tag and return the created record.

        Raises ``DuplicateNameError`` if a tag with the same name
        (compared case-insensitively) already exists.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute("INSERT INTO tags (name) VALUES (?)", (details.name,))
            except sqlite3.IntegrityError as e:
                raise DuplicateNameError(f"Tag '{details.name}' already exists") from e
            tag_id = cursor.lastrowid
            conn.commit()
            logger.info("Created tag %s (%s)", tag_id, details.name)
            row = cursor.execute("SELECT * FROM tags WHERE id = ?", (tag_id,)).fetchone()
            return cls._row_to_tag_read(row)
        finally:
            conn.close()

    @classmethod
    async def list_tags(cls, limit: int = 100, offset: int = 0) -> List[TagRead]:
        """Return a paginated list of tags ordered by ID."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            rows = cursor.execute(
                "SELECT * FROM tags ORDER BY id ASC LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
            return [cls._row_to_tag_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_tag(cls, tag_id: int) -> Optional[TagRead]:
        """Retrieve a single tag by its ID."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT * FROM tags WHERE id = ?", (tag_id,)).fetchone()
            if not row:
                return None
            return cls._row_to_tag_read(row)
        finally:
            conn.close()

    @classmethod
    async def update_tag(cls, tag_id: int, details: TagDetails) -> Optional[TagRead]:
        """Rename a tag.

        Returns the updated tag or ``None`` if it does not exist.
        Raises ``DuplicateNameError`` if the name is taken.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "UPDATE tags SET name = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (details.name, tag_id),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateNameError(f"Tag '{details.name}' already exists") from e
            if cursor.rowcount == 0:
                return None
            conn.commit()
            logger.info("Updated tag %s", tag_id)
            row = cursor.execute("SELECT * FROM tags WHERE id = ?", (tag_id,)).fetchone()
            return cls._row_to_tag_read(row)
        finally:
            conn.close()

    @classmethod
    async def delete_tag(cls, tag_id: int) -> bool:
        """Delete a tag and its message associations.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Deleted tag %s", tag_id)
            return affected > 0
        finally:
            conn.close()

    @staticmethod
    def _row_to_tag_read(row: sqlite3.Row) -> TagRead:
        return TagRead(
            id=row["id"],
            name=row["name"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
