"""
Module Model
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Module:
    """Content unit (M<n>) with its declared teaching hours"""
    key: str
    hours: float = 0.0
