from __future__ import annotations


class ExtractionError(Exception):
    """Base class for errors raised while extracting a workflow."""


class DocumentParseError(ExtractionError):
    """The uploaded content is not a well-formed JSON document."""


class TraversalLimitError(ExtractionError):
    """A scan exceeded its depth or node budget."""

    def __init__(self, message: str, limit: str, value: int):
        super().__init__(message)
        self.limit = limit
        self.value = value
