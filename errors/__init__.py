"""
Errors module - Evaluation engine exceptions
"""

from .exceptions import EvaluationError, ConfigurationError, SpreadsheetError

__all__ = [
    'EvaluationError',
    'ConfigurationError',
    'SpreadsheetError'
]
