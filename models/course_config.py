"""
CourseConfig Model
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.course_outcome import CourseOutcome
from models.course_module import Module


@dataclass(frozen=True)
class CourseConfig:
    """
    Declared learning design of a course

    form_data is course metadata (institution, branch, course code, ...)
    carried verbatim into the report. course_outcomes and modules keep the
    order in which they were declared.
    """
    form_data: Dict[str, Any] = field(default_factory=dict)
    course_outcomes: List[CourseOutcome] = field(default_factory=list)
    modules: List[Module] = field(default_factory=list)

    def get_course_outcome(self, key: str) -> Optional[CourseOutcome]:
        for co in self.course_outcomes:
            if co.key == key:
                return co
        return None

    @property
    def total_weight(self) -> float:
        return sum(co.weight for co in self.course_outcomes)

    @property
    def total_hours(self) -> float:
        return sum(m.hours for m in self.modules)
