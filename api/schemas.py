"""
API Schemas - Request/Response models
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field


class SequenceEntry(BaseModel):
    """One Sequence entry: a CO or a Module"""
    name: str = Field(..., description="CO<n>, M<n> or a module name")
    type: str = Field(..., description="'CO' or 'Module'")
    weight: Optional[Union[float, str]] = Field(default=None, description="CO weight (%)")
    blooms: Optional[Union[str, List[Any]]] = Field(default=None, description="Target Bloom level(s), first one counts")
    hours: Optional[Union[float, str]] = Field(default=None, description="Module teaching hours")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "CO1",
                "type": "CO",
                "weight": 60,
                "blooms": ["apply"]
            }
        }


class LevelMapRequest(BaseModel):
    """Request for the BloomLevelMap of a Sequence"""
    sequence: List[SequenceEntry] = Field(default_factory=list)


class LevelMapResponse(BaseModel):
    """BloomLevelMap of a course"""
    used_levels: List[str] = Field(..., description="Levels used as CO targets, canonical order")
    level_map: Dict[str, int] = Field(..., description="Level name -> ordinal (1..6)")

    class Config:
        json_schema_extra = {
            "example": {
                "used_levels": ["apply", "remember"],
                "level_map": {
                    "create": 3,
                    "evaluate": 4,
                    "analyze": 5,
                    "apply": 1,
                    "understand": 6,
                    "remember": 2
                }
            }
        }


class ClassifyRequest(BaseModel):
    """Request to classify one question"""
    text: str = Field(..., min_length=1, description="Question text")
    sequence: List[SequenceEntry] = Field(
        default_factory=list,
        description="Course Sequence used for ordinals; empty = canonical order"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "text": "Design a new scheduling system",
                "sequence": [{"name": "CO1", "type": "CO", "weight": 100, "blooms": "apply"}]
            }
        }


class ClassifyResponse(BaseModel):
    """Cognitive level of a question"""
    verbs: List[str]
    highest_verb: Optional[str] = None
    level: Optional[str] = Field(default=None, description="Bloom level, None when no lexicon verb is found")
    ordinal: Optional[int] = None
