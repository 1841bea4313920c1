"""
Domain exceptions raised by the service layer.

Endpoints translate these into HTTP responses: ``NotFoundError`` to 404,
``DuplicateNameError`` and ``ResourceInUseError`` to 409 and every
``MessageValidationError`` to 422.
"""


class TranslatorError(Exception):
    """Base exception for business rule violations."""


class NotFoundError(TranslatorError):
    """Raised when a referenced language, tag or message does not exist."""


class DuplicateNameError(TranslatorError):
    """Raised when a language or tag name is already taken."""


class ResourceInUseError(TranslatorError):
    """Raised when deleting a row that other rows still depend on."""


class MessageValidationError(TranslatorError):
    """Base class for violations of the original/translation rules."""


class OriginalMessageNotInEnglishError(MessageValidationError):
    """An original message must be written in the original language."""


class OriginalMessageIsNotNullError(MessageValidationError):
    """An original message cannot be turned into a translation."""


class TranslationCannotBeConvertedError(MessageValidationError):
    """A translation cannot lose its original message."""


class NestedTranslationError(MessageValidationError):
    """A translation can only reference an original message."""
