"""
Domain exceptions for the assessment evaluation engine.

A malformed course configuration or an unreadable spreadsheet fails the whole
run. Problems inside a single spreadsheet row never raise; they are defaulted
by the loader instead.
"""


class EvaluationError(Exception):
    """Base class for evaluation failures."""


class ConfigurationError(EvaluationError):
    """FormData or Sequence payload could not be parsed."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Invalid {field}: {message}")


class SpreadsheetError(EvaluationError):
    """The uploaded question paper could not be read at all."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Cannot read '{source}': {message}")
