"""Tests for the message service: originals, translations and tag inheritance."""

import asyncio

import pytest

from translator_api.app.core.exceptions import (
    NestedTranslationError,
    NotFoundError,
    OriginalMessageIsNotNullError,
    OriginalMessageNotInEnglishError,
    TranslationCannotBeConvertedError,
)
from translator_api.app.schemas.language import LanguageDetails
from translator_api.app.schemas.message import MessageDetails
from translator_api.app.schemas.tag import TagDetails
from translator_api.app.services.language_service import LanguageService
from translator_api.app.services.message_service import MessageService
from translator_api.app.services.tag_service import TagService

ENGLISH_LANG_ID = 1
POLISH_LANG_ID = 2
NOTE_TAG_ID = 1
MESSAGE_TAG_ID = 2
ORIGINAL_MESSAGE_ID = 1
TRANSLATION_ID = 2


def run(coro):
    return asyncio.run(coro)


def original_details(content: str, language_id: int = ENGLISH_LANG_ID) -> MessageDetails:
    return MessageDetails(
        original_message_id=None,
        language_id=language_id,
        content=content,
        tag_ids=[NOTE_TAG_ID, MESSAGE_TAG_ID],
    )


def translation_details(content: str, original_message_id: int = ORIGINAL_MESSAGE_ID) -> MessageDetails:
    return MessageDetails(
        original_message_id=original_message_id,
        language_id=POLISH_LANG_ID,
        content=content,
        tag_ids=[NOTE_TAG_ID],
    )


@pytest.fixture
def messages(database):
    """English (seeded) and Polish, two tags, one original and one translation."""
    run(LanguageService.create_language(LanguageDetails(name="Polish")))
    run(TagService.create_tag(TagDetails(name="Note")))
    run(TagService.create_tag(TagDetails(name="Message")))
    run(MessageService.create_message(original_details("Original message")))
    run(MessageService.create_message(translation_details("Message translation")))


class TestCreateMessage:
    def test_messages_are_created(self, messages):
        assert len(run(MessageService.list_messages())) == 2

    def test_original_message_has_no_original(self, messages):
        original = run(MessageService.get_message(ORIGINAL_MESSAGE_ID))
        assert original.original_message_id is None
        assert original.language.name == "English"

    def test_translation_references_original(self, messages):
        translation = run(MessageService.get_message(TRANSLATION_ID))
        assert translation.original_message_id == ORIGINAL_MESSAGE_ID
        assert translation.language.id == POLISH_LANG_ID

    def test_translation_has_original_message_tags(self, messages):
        original = run(MessageService.get_message(ORIGINAL_MESSAGE_ID))
        translation = run(MessageService.get_message(TRANSLATION_ID))
        # The translation asked only for the Note tag
        assert [t.id for t in translation.tags] == [NOTE_TAG_ID, MESSAGE_TAG_ID]
        assert translation.tags == original.tags

    def test_original_message_not_in_english_is_rejected(self, messages):
        with pytest.raises(OriginalMessageNotInEnglishError):
            run(MessageService.create_message(original_details("Oryginał po polsku", POLISH_LANG_ID)))
        assert len(run(MessageService.list_messages())) == 2

    def test_original_language_is_matched_case_insensitively(self, database, monkeypatch):
        from translator_api.app.core.config import settings

        monkeypatch.setattr(settings, "original_language", "ENGLISH")
        created = run(MessageService.create_message(
            MessageDetails(language_id=ENGLISH_LANG_ID, content="Hello")
        ))
        assert created.original_message_id is None

    def test_translation_of_translation_is_rejected(self, messages):
        with pytest.raises(NestedTranslationError):
            run(MessageService.create_message(translation_details("Nested", original_message_id=TRANSLATION_ID)))

    def test_translation_of_missing_message_is_rejected(self, messages):
        with pytest.raises(NotFoundError):
            run(MessageService.create_message(translation_details("Orphan", original_message_id=42)))

    def test_unknown_language_is_rejected(self, messages):
        with pytest.raises(NotFoundError):
            run(MessageService.create_message(original_details("No language", language_id=42)))

    def test_unknown_tag_is_rejected(self, messages):
        details = MessageDetails(language_id=ENGLISH_LANG_ID, content="Bad tags", tag_ids=[NOTE_TAG_ID, 42])
        with pytest.raises(NotFoundError, match="42"):
            run(MessageService.create_message(details))
        assert len(run(MessageService.list_messages())) == 2

    def test_duplicate_tag_ids_are_stored_once(self, messages):
        details = MessageDetails(language_id=ENGLISH_LANG_ID, content="Twice", tag_ids=[2, 2, 1])
        created = run(MessageService.create_message(details))
        assert [t.id for t in created.tags] == [1, 2]


class TestUpdateMessage:
    def test_original_message_is_updated(self, messages):
        content = "Update original message"
        updated = run(MessageService.update_message(ORIGINAL_MESSAGE_ID, original_details(content)))
        assert updated.content == content
        assert run(MessageService.get_message(ORIGINAL_MESSAGE_ID)).content == content

    def test_original_message_cannot_get_an_original(self, messages):
        details = MessageDetails(
            original_message_id=ORIGINAL_MESSAGE_ID,
            language_id=ENGLISH_LANG_ID,
            content="Update original message id in original message",
            tag_ids=[1, 2],
        )
        with pytest.raises(OriginalMessageIsNotNullError):
            run(MessageService.update_message(ORIGINAL_MESSAGE_ID, details))

    def test_original_message_language_cannot_change(self, messages):
        details = MessageDetails(
            language_id=POLISH_LANG_ID,
            content="Update original message language to Polish",
            tag_ids=[1, 2],
        )
        with pytest.raises(OriginalMessageNotInEnglishError):
            run(MessageService.update_message(ORIGINAL_MESSAGE_ID, details))
        original = run(MessageService.get_message(ORIGINAL_MESSAGE_ID))
        assert original.language.id == ENGLISH_LANG_ID
        assert original.content == "Original message"

    def test_translation_cannot_be_converted_to_original(self, messages):
        details = MessageDetails(
            language_id=POLISH_LANG_ID,
            content="Update translation with no original message id",
            tag_ids=[1, 2],
        )
        with pytest.raises(TranslationCannotBeConvertedError):
            run(MessageService.update_message(TRANSLATION_ID, details))

    def test_translation_is_updated(self, messages):
        content = "Update translation"
        details = MessageDetails(
            original_message_id=ORIGINAL_MESSAGE_ID,
            language_id=POLISH_LANG_ID,
            content=content,
            tag_ids=[],
        )
        run(MessageService.update_message(TRANSLATION_ID, details))
        translation = run(MessageService.get_message(TRANSLATION_ID))
        original = run(MessageService.get_message(ORIGINAL_MESSAGE_ID))
        assert translation.content == content
        assert translation.tags == original.tags

    def test_translation_follows_original_tag_changes(self, messages):
        details = MessageDetails(language_id=ENGLISH_LANG_ID, content="Original message", tag_ids=[MESSAGE_TAG_ID])
        run(MessageService.update_message(ORIGINAL_MESSAGE_ID, details))
        translation = run(MessageService.get_message(TRANSLATION_ID))
        assert [t.id for t in translation.tags] == [MESSAGE_TAG_ID]

    def test_translation_can_move_to_another_original(self, messages):
        other = run(MessageService.create_message(
            MessageDetails(language_id=ENGLISH_LANG_ID, content="Another original", tag_ids=[])
        ))
        moved = run(MessageService.update_message(TRANSLATION_ID, translation_details("Moved", other.id)))
        assert moved.original_message_id == other.id
        assert moved.tags == []

    def test_translation_cannot_move_to_a_translation(self, messages):
        second = run(MessageService.create_message(translation_details("Second translation")))
        with pytest.raises(NestedTranslationError):
            run(MessageService.update_message(TRANSLATION_ID, translation_details("Moved", second.id)))

    def test_missing_message_returns_none(self, messages):
        assert run(MessageService.update_message(42, original_details("Missing"))) is None


class TestDeleteMessage:
    def test_translation_is_deleted(self, messages):
        content = "Message translation 2"
        run(MessageService.create_message(translation_details(content)))
        assert len(run(MessageService.list_messages())) == 3
        translation = run(MessageService.list_messages(content=content))[0]
        assert run(MessageService.delete_message(translation.id)) is True
        assert len(run(MessageService.list_messages())) == 2

    def test_original_message_is_deleted_with_translations(self, messages):
        content = "Original message 2"
        run(MessageService.create_message(original_details(content)))
        original = run(MessageService.list_messages(content=content))[0]
        run(MessageService.create_message(
            MessageDetails(
                original_message_id=original.id,
                language_id=POLISH_LANG_ID,
                content="Message translation to delete",
            )
        ))
        assert len(run(MessageService.list_messages())) == 4
        run(MessageService.delete_message(original.id))
        assert len(run(MessageService.list_messages())) == 2

    def test_missing_message_is_not_deleted(self, messages):
        assert run(MessageService.delete_message(42)) is False


class TestQueryMessages:
    def test_all_messages_are_listed(self, messages):
        assert [m.id for m in run(MessageService.list_messages())] == [ORIGINAL_MESSAGE_ID, TRANSLATION_ID]

    def test_content_search_ignores_case(self, messages):
        found = run(MessageService.list_messages(content="TRANSLATION"))
        assert [m.id for m in found] == [TRANSLATION_ID]

    def test_content_search_folds_non_ascii_letters(self, messages):
        created = run(MessageService.create_message(translation_details("Zażółć GĘŚLĄ jaźń")))
        found = run(MessageService.list_messages(content="gęślą"))
        assert [m.id for m in found] == [created.id]

    def test_filters(self, messages):
        assert [m.id for m in run(MessageService.list_messages(originals_only=True))] == [ORIGINAL_MESSAGE_ID]
        assert [m.id for m in run(MessageService.list_messages(language_id=POLISH_LANG_ID))] == [TRANSLATION_ID]
        # The translation carries the Message tag through its original
        by_tag = run(MessageService.list_messages(tag_id=MESSAGE_TAG_ID))
        assert [m.id for m in by_tag] == [ORIGINAL_MESSAGE_ID, TRANSLATION_ID]

    def test_pagination(self, messages):
        page = run(MessageService.list_messages(limit=1, offset=1))
        assert [m.id for m in page] == [TRANSLATION_ID]

    def test_translations_of_original(self, messages):
        translations = run(MessageService.list_translations(ORIGINAL_MESSAGE_ID))
        assert [m.id for m in translations] == [TRANSLATION_ID]
        assert run(MessageService.list_translations(TRANSLATION_ID)) == []

    def test_translations_of_missing_message(self, messages):
        with pytest.raises(NotFoundError):
            run(MessageService.list_translations(42))

    def test_missing_message_is_none(self, messages):
        assert run(MessageService.get_message(42)) is None
