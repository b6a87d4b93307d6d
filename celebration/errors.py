"""Exceptions raised by the celebration image pipeline."""


class ConfigurationError(ValueError):
    """Raised when the Gemini client cannot be configured (e.g. missing API key)."""


class InvalidInputError(ValueError):
    """Raised when the supplied image is not a well-formed image data URL."""


class GenerationError(RuntimeError):
    """
    Raised when Gemini fails to produce an image.

    Covers exhausted retries, non-retryable API failures and responses that
    carry only text (the model refused or explained itself). The message is
    meant to be shown to the end user as-is.
    """

    def __init__(self, message: str, failure_class=None):
        super().__init__(message)
        # FailureClass of the upstream API error, None when Gemini answered without an image.
        self.failure_class = failure_class
