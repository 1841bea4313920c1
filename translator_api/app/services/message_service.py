"""
Service layer for messages and their translations.

A message either is an *original* (``original_message_id`` is NULL)
or a *translation* pointing at exactly one original.  The service
enforces the rules that keep this structure consistent:

* an original must be written in the original language (English
  unless ``ORIGINAL_LANGUAGE`` says otherwise);
* an original cannot later be given an original message, and a
  translation cannot later lose it;
* a translation must reference an existing original, never another
  translation, so the structure stays one level deep;
* a translation carries the tags of its original.  Tag rows are only
  stored for originals and a translation's tags are read through its
  ``original_message_id``, so they follow every change made to the
  original.

Deleting an original removes its translations through the
``ON DELETE CASCADE`` clause on ``messages.original_message_id``.

All statements of one operation run on a single connection and are
committed together; an exception raised before the commit leaves the
database untouched.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional, Sequence

from translator_api.app.core.config import settings
from translator_api.app.core.db import get_connection
from translator_api.app.core.exceptions import (
    NestedTranslationError,
    NotFoundError,
    OriginalMessageIsNotNullError,
    OriginalMessageNotInEnglishError,
    TranslationCannotBeConvertedError,
)
from translator_api.app.schemas.language import LanguageRead
from translator_api.app.schemas.message import MessageDetails, MessageRead
from translator_api.app.schemas.tag import TagRead


_MESSAGE_SELECT = """
    SELECT m.id, m.content, m.original_message_id, m.created_at, m.updated_at,
           l.id AS language_id, l.name AS language_name,
           l.created_at AS language_created_at, l.updated_at AS language_updated_at
    FROM messages m
    JOIN languages l ON l.id = m.language_id
"""


class MessageService:
    """Service class for managing original messages and translations."""

    @classmethod
    async def create_message(cls, details: MessageDetails) -> MessageRead:
        """Insert an original message or a translation.

        When ``details.original_message_id`` is ``None`` the message is
        an original: its language must be the original language and the
        given tags are attached to it.  Otherwise the message is a
        translation of that original and ``details.tag_ids`` is ignored.

        Raises ``NotFoundError`` for unknown language, tag or original
        message ids, ``OriginalMessageNotInEnglishError`` and
        ``NestedTranslationError`` for rule violations.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            language = cls._fetch_language(cursor, details.language_id)
            if details.original_message_id is None:
                cls._ensure_original_language(language)
                cls._ensure_tags_exist(cursor, details.tag_ids)
            else:
                cls._fetch_original(cursor, details.original_message_id)
            cursor.execute(
                """
                INSERT INTO messages (content, language_id, original_message_id)
                VALUES (?, ?, ?)
                """,
                (details.content, details.language_id, details.original_message_id),
            )
            message_id = cursor.lastrowid
            if details.original_message_id is None:
                cls._replace_tags(cursor, message_id, details.tag_ids)
            conn.commit()
            if details.original_message_id is None:
                logger.info("Created original message %s", message_id)
            else:
                logger.info(
                    "Created translation %s of message %s",
                    message_id,
                    details.original_message_id,
                )
            return cls._read_message(cursor, message_id)
        finally:
            conn.close()

    @classmethod
    async def update_message(cls, message_id: int, details: MessageDetails) -> Optional[MessageRead]:
        """Replace the content, language and links of a message.

        Returns ``None`` if the message does not exist.  An original
        stays an original (``OriginalMessageIsNotNullError`` otherwise)
        and must remain in the original language; its tags are replaced
        by ``details.tag_ids``.  A translation stays a translation
        (``TranslationCannotBeConvertedError`` otherwise) and may be
        moved to another original.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            current = cursor.execute(
                "SELECT id, original_message_id FROM messages WHERE id = ?",
                (message_id,),
            ).fetchone()
            if not current:
                return None
            is_original = current["original_message_id"] is None

            if is_original and details.original_message_id is not None:
                raise OriginalMessageIsNotNullError(
                    f"Message {message_id} is an original message and cannot reference another message"
                )
            if not is_original and details.original_message_id is None:
                raise TranslationCannotBeConvertedError(
                    f"Message {message_id} is a translation and cannot be converted to an original message"
                )

            language = cls._fetch_language(cursor, details.language_id)
            if is_original:
                cls._ensure_original_language(language)
                cls._ensure_tags_exist(cursor, details.tag_ids)
            elif details.original_message_id != current["original_message_id"]:
                cls._fetch_original(cursor, details.original_message_id)

            cursor.execute(
                """
                UPDATE messages
                SET content = ?, language_id = ?, original_message_id = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (details.content, details.language_id, details.original_message_id, message_id),
            )
            if is_original:
                cls._replace_tags(cursor, message_id, details.tag_ids)
            conn.commit()
            logger.info("Updated message %s", message_id)
            return cls._read_message(cursor, message_id)
        finally:
            conn.close()

    @classmethod
    async def delete_message(cls, message_id: int) -> bool:
        """Delete a message by ID.

        Deleting an original also deletes all of its translations.
        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            translations = cursor.execute(
                "SELECT COUNT(*) AS cnt FROM messages WHERE original_message_id = ?",
                (message_id,),
            ).fetchone()["cnt"]
            cursor.execute("DELETE FROM messages WHERE id = ?", (message_id,))
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Deleted message %s with %s translation(s)", message_id, translations)
            return affected > 0
        finally:
            conn.close()

    @classmethod
    async def get_message(cls, message_id: int) -> Optional[MessageRead]:
        """Retrieve a single message by its ID."""
        conn = get_connection()
        try:
            return cls._read_message(conn.cursor(), message_id)
        finally:
            conn.close()

    @classmethod
    async def list_messages(
        cls,
        limit: int = 100,
        offset: int = 0,
        content: Optional[str] = None,
        language_id: Optional[int] = None,
        tag_id: Optional[int] = None,
        originals_only: bool = False,
    ) -> List[MessageRead]:
        """Return a paginated list of messages ordered by ID.

        ``content`` keeps messages whose content contains the given text
        ignoring case.  ``tag_id`` matches translations through the tags
        of their original.  ``originals_only`` drops translations.
        """
        conn = get_connection()
        try:
            # SQLite's LOWER() and LIKE only fold ASCII letters
            conn.create_function("casefold", 1, _casefold, deterministic=True)
            cursor = conn.cursor()
            where_clauses: List[str] = []
            params: List[object] = []
            if content:
                where_clauses.append("instr(casefold(m.content), ?) > 0")
                params.append(content.casefold())
            if language_id is not None:
                where_clauses.append("m.language_id = ?")
                params.append(language_id)
            if tag_id is not None:
                where_clauses.append(
                    "EXISTS (SELECT 1 FROM message_tags mt"
                    " WHERE mt.message_id = COALESCE(m.original_message_id, m.id) AND mt.tag_id = ?)"
                )
                params.append(tag_id)
            if originals_only:
                where_clauses.append("m.original_message_id IS NULL")
            query = _MESSAGE_SELECT
            if where_clauses:
                query += " WHERE " + " AND ".join(where_clauses)
            query += " ORDER BY m.id ASC LIMIT ? OFFSET ?"
            params.extend([limit, offset])
            rows = cursor.execute(query, tuple(params)).fetchall()
            return [cls._row_to_message_read(cursor, row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_translations(cls, message_id: int) -> List[MessageRead]:
        """Return the translations of a message ordered by ID.

        Raises ``NotFoundError`` if the message does not exist.  A
        translation has no translations of its own, so an empty list is
        returned for it.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            exists = cursor.execute("SELECT 1 FROM messages WHERE id = ?", (message_id,)).fetchone()
            if not exists:
                raise NotFoundError(f"Message {message_id} not found")
            rows = cursor.execute(
                _MESSAGE_SELECT + " WHERE m.original_message_id = ? ORDER BY m.id ASC",
                (message_id,),
            ).fetchall()
            return [cls._row_to_message_read(cursor, row) for row in rows]
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _fetch_language(cursor: sqlite3.Cursor, language_id: int) -> sqlite3.Row:
        row = cursor.execute("SELECT id, name FROM languages WHERE id = ?", (language_id,)).fetchone()
        if not row:
            raise NotFoundError(f"Language {language_id} not found")
        return row

    @staticmethod
    def _ensure_original_language(language: sqlite3.Row) -> None:
        if language["name"].casefold() != settings.original_language.casefold():
            raise OriginalMessageNotInEnglishError(
                f"Original message must be in {settings.original_language}, not {language['name']}"
            )

    @staticmethod
    def _fetch_original(cursor: sqlite3.Cursor, original_message_id: int) -> sqlite3.Row:
        row = cursor.execute(
            "SELECT id, original_message_id FROM messages WHERE id = ?",
            (original_message_id,),
        ).fetchone()
        if not row:
            raise NotFoundError(f"Original message {original_message_id} not found")
        if row["original_message_id"] is not None:
            raise NestedTranslationError(
                f"Message {original_message_id} is a translation and cannot be used as an original message"
            )
        return row

    @staticmethod
    def _ensure_tags_exist(cursor: sqlite3.Cursor, tag_ids: Sequence[int]) -> None:
        if not tag_ids:
            return
        placeholders = ", ".join("?" for _ in tag_ids)
        rows = cursor.execute(
            f"SELECT id FROM tags WHERE id IN ({placeholders})",
            tuple(tag_ids),
        ).fetchall()
        missing = sorted(set(tag_ids) - {row["id"] for row in rows})
        if missing:
            raise NotFoundError(f"Tags not found: {', '.join(str(t) for t in missing)}")

    @staticmethod
    def _replace_tags(cursor: sqlite3.Cursor, message_id: int, tag_ids: Sequence[int]) -> None:
        cursor.execute("DELETE FROM message_tags WHERE message_id = ?", (message_id,))
        cursor.executemany(
            "INSERT INTO message_tags (message_id, tag_id) VALUES (?, ?)",
            [(message_id, tag_id) for tag_id in tag_ids],
        )

    @classmethod
    def _read_message(cls, cursor: sqlite3.Cursor, message_id: int) -> Optional[MessageRead]:
        row = cursor.execute(_MESSAGE_SELECT + " WHERE m.id = ?", (message_id,)).fetchone()
        if not row:
            return None
        return cls._row_to_message_read(cursor, row)

    @staticmethod
    def _row_to_message_read(cursor: sqlite3.Cursor, row: sqlite3.Row) -> MessageRead:
        """Convert a joined message row to a ``MessageRead`` with its tags."""
        tag_owner = row["original_message_id"] if row["original_message_id"] is not None else row["id"]
        tag_rows = cursor.execute(
            """
            SELECT t.id, t.name, t.created_at, t.updated_at
            FROM tags t
            JOIN message_tags mt ON mt.tag_id = t.id
            WHERE mt.message_id = ?
            ORDER BY t.id ASC
            """,
            (tag_owner,),
        ).fetchall()
        return MessageRead(
            id=row["id"],
            content=row["content"],
            language=LanguageRead(
                id=row["language_id"],
                name=row["language_name"],
                created_at=row["language_created_at"],
                updated_at=row["language_updated_at"],
            ),
            original_message_id=row["original_message_id"],
            tags=[
                TagRead(
                    id=t["id"],
                    name=t["name"],
                    created_at=t["created_at"],
                    updated_at=t["updated_at"],
                )
                for t in tag_rows
            ],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None
