"""
Custom exceptions for the quiz generation service.

Upstream lookup failures abort a request; LLM and parse failures are
recovered by the fallback generator.
"""


class QuizServiceError(Exception):
	"""Base exception for all quiz service errors."""
	pass


class UpstreamLookupError(QuizServiceError):
	"""Raised when a required row (user, learning path, lesson) is missing."""

	def __init__(self, message: str, table: str | None = None, criteria: dict | None = None):
		self.table = table
		self.criteria = criteria or {}
		super().__init__(message)


class LLMError(QuizServiceError):
	"""Raised when the chat-completion call fails or returns no content."""

	def __init__(self, message: str, status_code: int | None = None):
		self.status_code = status_code
		super().__init__(message)


class LLMNotConfiguredError(QuizServiceError):
	"""Raised when no API key is available for the chat-completion provider."""
	pass


class QuizParseError(QuizServiceError):
	"""Raised when model output cannot be turned into a quiz."""

	def __init__(self, message: str, raw_text: str | None = None):
		self.raw_text = raw_text
		super().__init__(message)
