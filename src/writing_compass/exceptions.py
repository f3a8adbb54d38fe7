class WritingCompassError(Exception):
    """Base exception for the Writing Compass service."""


class EssayValidationError(WritingCompassError):
    """Raised when a submitted essay is missing its title or content."""


class GenerationError(WritingCompassError):
    """Raised when the text-generation service cannot be reached or replies badly."""


class SuggestionParseError(WritingCompassError):
    """Raised when a paragraph-suggestion reply is not the expected JSON."""


class ReportRenderError(WritingCompassError):
    """Raised when the final report cannot be assembled.

    Carries only a generic, user-facing message; the original exception is
    logged and chained, never shown.
    """

    DEFAULT_MESSAGE = "결과를 표시할 수 없습니다."

    def __init__(self, message: str = DEFAULT_MESSAGE) -> None:
        super().__init__(message)
