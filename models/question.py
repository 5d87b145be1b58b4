"""
Question Model
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

UNASSIGNED = "unassigned"


@dataclass
class Question:
    """One exam question as read from the paper and classified"""
    text: str
    marks: float = 0.0
    co: str = UNASSIGNED
    module: str = UNASSIGNED
    question_type: str = ""
    verbs: List[str] = field(default_factory=list)
    highest_verb: Optional[str] = None
    level: Optional[str] = None
    ordinal: Optional[int] = None
    q_score: Optional[int] = None
    remark: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """
        Marks are never negative; a question without any lexicon verb keeps
        level/ordinal None and counts as unclassified.
        """
        if self.marks is None or self.marks < 0:
            self.marks = 0.0

    @property
    def is_classified(self) -> bool:
        return self.level is not None
