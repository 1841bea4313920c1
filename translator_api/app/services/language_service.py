"""
Service layer for languages.

Languages are referenced by messages.  Names are unique regardless of
case, and a language cannot be removed while any message is written
in it.  The original language is seeded by ``init_db``.  It keeps its
name while original messages are written in it, and no other language
may take that name.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from translator_api.app.core.config import settings
from translator_api.app.core.db import get_connection
from translator_api.app.core.exceptions import DuplicateNameError, ResourceInUseError
from translator_api.app.schemas.language import LanguageDetails, LanguageRead


class LanguageService:
    """Service class for managing languages."""

    @classmethod
    async def create_language(cls, details: LanguageDetails) -> LanguageRead:
        """Insert a new language and return the created record.

        Raises ``DuplicateNameError`` if a language with the same name
        (compared case-insensitively) already exists.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute("INSERT INTO languages (name) VALUES (?)", (details.name,))
            except sqlite3.IntegrityError as e:
                raise DuplicateNameError(f"Language '{details.name}' already exists") from e
            language_id = cursor.lastrowid
            conn.commit()
            logger.info("Created language %s (%s)", language_id, details.name)
            row = cursor.execute("SELECT * FROM languages WHERE id = ?", (language_id,)).fetchone()
            return cls._row_to_language_read(row)
        finally:
            conn.close()

    @classmethod
    async def list_languages(cls, limit: int = 100, offset: int = 0) -> List[LanguageRead]:
        """Return a paginated list of languages ordered by ID."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            rows = cursor.execute(
                "SELECT * FROM languages ORDER BY id ASC LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
            return [cls._row_to_language_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_language(cls, language_id: int) -> Optional[LanguageRead]:
        """Retrieve a single language by its ID."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT * FROM languages WHERE id = ?", (language_id,)).fetchone()
            if not row:
                return None
            return cls._row_to_language_read(row)
        finally:
            conn.close()

    @classmethod
    async def update_language(cls, language_id: int, details: LanguageDetails) -> Optional[LanguageRead]:
        """Rename a language.

        Returns the updated language or ``None`` if it does not exist.
        Raises ``ResourceInUseError`` when the original language would
        be renamed while original messages are written in it, or when
        another language would take the original language's name.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            current = cursor.execute("SELECT name FROM languages WHERE id = ?", (language_id,)).fetchone()
            if not current:
                return None
            original_name = settings.original_language.casefold()
            was_original = current["name"].casefold() == original_name
            is_original = details.name.casefold() == original_name
            if was_original and not is_original:
                originals = cursor.execute(
                    "SELECT COUNT(*) AS cnt FROM messages WHERE language_id = ? AND original_message_id IS NULL",
                    (language_id,),
                ).fetchone()["cnt"]
                if originals:
                    raise ResourceInUseError(
                        f"Language {language_id} is used by {originals} original message(s) and cannot be renamed"
                    )
            elif is_original and not was_original:
                raise ResourceInUseError(
                    f"Name '{details.name}' is reserved for the original language"
                )
            try:
                cursor.execute(
                    "UPDATE languages SET name = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (details.name, language_id),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateNameError(f"Language '{details.name}' already exists") from e
            conn.commit()
            logger.info("Updated language %s", language_id)
            row = cursor.execute("SELECT * FROM languages WHERE id = ?", (language_id,)).fetchone()
            return cls._row_to_language_read(row)
        finally:
            conn.close()

    @classmethod
    async def delete_language(cls, language_id: int) -> bool:
        """Delete a language by ID.

        Returns ``True`` if a record was deleted, ``False`` if it did
        not exist.  Raises ``ResourceInUseError`` while messages are
        still written in the language.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            used = cursor.execute(
                "SELECT COUNT(*) AS cnt FROM messages WHERE language_id = ?",
                (language_id,),
            ).fetchone()["cnt"]
            if used:
                raise ResourceInUseError(f"Language {language_id} is used by {used} message(s)")
            cursor.execute("DELETE FROM languages WHERE id = ?", (language_id,))
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Deleted language %s", language_id)
            return affected > 0
        finally:
            conn.close()

    @staticmethod
    def _row_to_language_read(row: sqlite3.Row) -> LanguageRead:
        return LanguageRead(
            id=row["id"],
            name=row["name"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
