"""
CourseOutcome Model
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from models.bloom_level_map import canonical_level


@dataclass(frozen=True)
class CourseOutcome:
    """Course Outcome (CO<n>) with its weight and declared target levels"""
    key: str
    weight: float = 0.0
    blooms: Tuple[str, ...] = ()

    @property
    def number(self) -> str:
        """Digits of the key, e.g. '2' for CO2"""
        return self.key[2:] if self.key.upper().startswith("CO") else self.key

    @property
    def target_level(self) -> Optional[str]:
        """First declared level if it is canonical; later ones are informative only"""
        if not self.blooms:
            return None
        return canonical_level(self.blooms[0])
