"""
Bloom Level Map - canonical cognitive levels and their per-course ordinals
"""

from collections import abc
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

# Most to least cognitively complex
CANONICAL_LEVELS: Tuple[str, ...] = (
    "create",
    "evaluate",
    "analyze",
    "apply",
    "understand",
    "remember",
)

# Rank in the canonical order: 0 = most complex
COMPLEXITY_RANK: Mapping[str, int] = MappingProxyType(
    {level: rank for rank, level in enumerate(CANONICAL_LEVELS)}
)

MAX_ORDINAL = len(CANONICAL_LEVELS)


def canonical_level(name) -> Optional[str]:
    """Lowercase/strip a level name, None if it is not one of the six."""
    if not isinstance(name, str):
        return None
    level = name.strip().lower()
    return level if level in COMPLEXITY_RANK else None


def is_more_complex(level: str, other: str) -> bool:
    """True if `level` demands more than `other` in the canonical order."""
    return COMPLEXITY_RANK[level] < COMPLEXITY_RANK[other]


class BloomLevelMap(abc.Mapping):
    """
    Read-only mapping canonical level name -> ordinal (1..6)

    Built per evaluation run by BloomNormalizerService. The mapping is a
    bijection over CANONICAL_LEVELS; levels used as CO targets occupy the
    lowest ordinals.
    """

    def __init__(self, ordinals: Dict[str, int]):
        self._ordinals = {level: ordinals[level] for level in CANONICAL_LEVELS}

    def __getitem__(self, level: str) -> int:
        return self._ordinals[level]

    def __iter__(self) -> Iterator[str]:
        return iter(self._ordinals)

    def __len__(self) -> int:
        return len(self._ordinals)

    def __repr__(self) -> str:
        return f"BloomLevelMap({self._ordinals!r})"

    def ordinal(self, level: Optional[str]) -> Optional[int]:
        """Ordinal of a level name (any case), None if not canonical"""
        level = canonical_level(level)
        return self._ordinals[level] if level else None

    def level_for(self, ordinal: int) -> str:
        """Reverse lookup ordinal -> level name"""
        for level, value in self._ordinals.items():
            if value == ordinal:
                return level
        raise KeyError(ordinal)

    def by_ordinal(self) -> List[Tuple[int, str]]:
        """(ordinal, level) pairs sorted by ordinal"""
        return sorted((value, level) for level, value in self._ordinals.items())

    def to_dict(self) -> Dict[str, int]:
        return dict(self._ordinals)
