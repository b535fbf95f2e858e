"""SQLModel data models.

Lesson content itself is static data (see `registry`); the only table
here records each learner's progress on a lesson, keyed by slug.
"""

from typing import Optional
from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from datetime import datetime, timezone

STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"


class LessonProgress(SQLModel, table=True):
    """Progress of one learner on one lesson.

    Fields:
    - `learner_id`: opaque id supplied by the caller
    - `lesson_slug`: slug of a registered lesson
    - `status`: `in_progress` or `completed`
    - `saved_code`: last code the learner saved in the editor
    """
    __tablename__ = "lesson_progress"
    __table_args__ = (UniqueConstraint("learner_id", "lesson_slug"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    learner_id: str = Field(index=True, nullable=False)
    lesson_slug: str = Field(index=True, nullable=False)
    status: str = STATUS_IN_PROGRESS
    saved_code: Optional[str] = None
    completed_at: Optional[datetime] = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
