"""Exceptions raised by the diff core and the edit-suggestion provider"""

from __future__ import annotations


class MalformedAnnotation(ValueError):
    """Annotated text whose marker lines break the open/separator/close order.

    Only a defect in the annotator can produce this, so it is never retried.
    """

    def __init__(self, message: str, line_number: int | None = None, state: str | None = None):
        super().__init__(message)
        self.line_number = line_number
        self.state = state


class EditSuggestionError(Exception):
    """The edit-suggestion provider could not produce a revised text"""

    def __init__(self, message: str, provider: str = "API", status: int | None = None):
        super().__init__(message)
        self.provider = provider
        self.status = status


class MarkerCollision(ValueError):
    """An input line is identical to one of the annotation marker lines"""

    def __init__(self, message: str, side: str, line_number: int):
        super().__init__(message)
        self.side = side
        self.line_number = line_number
