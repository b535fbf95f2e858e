"""Pydantic schemas for lesson content and API payloads.

`LessonContent` and `Topic` describe the static curriculum data and are
validated when topic files are loaded. The remaining models keep the
API input/output shapes stable for controllers and tests.
"""

from datetime import datetime
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class LessonContent(BaseModel):
    """One curriculum unit: text blocks, sample code and ordered hints.

    Field names are snake_case in Python and in topic files; the JSON
    representation served to clients uses camelCase (`problemContent`,
    `starterCode`, ...). Instances are immutable.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    slug: str = Field(pattern=SLUG_PATTERN)
    title: str = ""
    problem_content: str
    solution_content: str
    explanation_content: str
    realworld_content: str
    mistakes_content: str
    interview_content: str
    starter_code: str
    solution_code: str
    hints: Tuple[str, ...] = ()


class Topic(BaseModel):
    """A named group of lessons for one subject area.

    `lessons` maps slug to record in authoring order and is read-only
    once the topic is validated.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    topic: str = Field(pattern=SLUG_PATTERN)
    title: str
    phase: int = Field(default=1, ge=1)
    order: int = 0
    lessons: Mapping[str, LessonContent]

    @field_validator("lessons", mode="after")
    @classmethod
    def _freeze_lessons(cls, v):
        return MappingProxyType(dict(v))

    @field_serializer("lessons")
    def _dump_lessons(self, v) -> Dict[str, LessonContent]:
        return dict(v)


class SlugListOut(BaseModel):
    """All registered lesson slugs."""
    count: int
    slugs: List[str]


class CountOut(BaseModel):
    count: int


class ExistsOut(BaseModel):
    slug: str
    exists: bool


class TopicOut(BaseModel):
    """Topic metadata without lesson bodies."""
    topic: str
    title: str
    phase: int
    order: int
    lesson_count: int


class TopicDetailOut(TopicOut):
    slugs: List[str]


class SaveCodeIn(BaseModel):
    """Request body for saving a learner's work-in-progress code."""
    code: str


class ProgressItemOut(BaseModel):
    """Progress of one learner on one lesson."""
    lesson_slug: str
    status: str
    saved_code: Optional[str] = None
    completed_at: Optional[datetime] = None
    updated_at: datetime


class ProgressSummaryOut(BaseModel):
    learner_id: str
    completed_lessons: int
    total_lessons: int
    items: List[ProgressItemOut]
