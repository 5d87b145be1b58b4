"""
Bloom Normalizer Service
"""

import logging
from typing import Iterable, List

from models.bloom_level_map import BloomLevelMap, CANONICAL_LEVELS, MAX_ORDINAL, canonical_level
from models.course_outcome import CourseOutcome

logger = logging.getLogger(__name__)


class BloomNormalizerService:
    """
    Service to compress the six canonical levels onto ordinals 1..6

    Levels that are the primary target of at least one CO get the lowest
    ordinals, in canonical order (create first). Unused levels follow, also
    in canonical order. A course that only targets "apply" and "remember"
    ends up with apply=1, remember=2, create=3, evaluate=4, analyze=5,
    understand=6.
    """

    @staticmethod
    def used_levels(target_levels: Iterable[str]) -> List[str]:
        """
        Distinct canonical names among the declared targets, in canonical order

        Args:
            target_levels: primary target level of each CO (free text, any case)

        Returns:
            Sorted list of canonical level names
        """
        used = {canonical_level(name) for name in target_levels}
        return [level for level in CANONICAL_LEVELS if level in used]

    @staticmethod
    def build_level_map(target_levels: Iterable[str]) -> BloomLevelMap:
        """
        Build the dense ordinal mapping for one evaluation run

        Args:
            target_levels: primary target level of each CO

        Returns:
            BloomLevelMap covering all six canonical levels
        """
        used = BloomNormalizerService.used_levels(target_levels)

        ordinals = {level: index + 1 for index, level in enumerate(used)}

        next_ordinal = len(used) + 1
        for level in CANONICAL_LEVELS:
            if level not in ordinals and next_ordinal <= MAX_ORDINAL:
                ordinals[level] = next_ordinal
                next_ordinal += 1

        for level in CANONICAL_LEVELS:
            ordinals.setdefault(level, MAX_ORDINAL)

        level_map = BloomLevelMap(ordinals)
        logger.debug("Used Bloom levels: %s, level map: %s", used, level_map.to_dict())
        return level_map

    @staticmethod
    def from_course_outcomes(course_outcomes: Iterable[CourseOutcome]) -> BloomLevelMap:
        """Level map from the first declared level of each CO"""
        targets = [co.blooms[0] for co in course_outcomes if co.blooms]
        return BloomNormalizerService.build_level_map(targets)
