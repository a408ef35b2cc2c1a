"""Failure kinds of the reading pipeline.

Each error carries the message shown to the user and the HTTP status class
the transport layer should answer with. None of them is retried.
"""

from typing import Optional


class ReadingError(Exception):
    """Base class for every reading failure."""

    status_code = 500
    default_message = "Failed to generate reading."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ServiceUnavailable(ReadingError):
    """No credential is configured for the generative service."""

    status_code = 503
    default_message = "OPENAI_API_KEY is not configured. Add it to your environment or .env file."


class MalformedRequest(ReadingError):
    status_code = 400
    default_message = "Invalid request body."


class UnknownCategory(ReadingError):
    status_code = 400
    default_message = "Unknown spread category."


class GenerationFailed(ReadingError):
    default_message = "The reading service could not be reached."


class EmptyGeneration(ReadingError):
    default_message = "No reading text returned by the reading service."


class InvalidGenerationFormat(ReadingError):
    default_message = "Reading output was not valid JSON."


class SchemaMismatch(ReadingError):
    """The output was JSON but not shaped like a reading."""

    default_message = "Reading output did not match the expected structure."
