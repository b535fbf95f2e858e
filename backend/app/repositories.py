"""Repository classes encapsulating database operations.

Repositories return SQLModel objects and perform commits/refreshes
where appropriate.
"""

from typing import List, Optional
from sqlmodel import Session, select
from . import models


class ProgressRepository:
    """Queries and upserts for `LessonProgress` rows."""
    def __init__(self, session: Session):
        self.session = session

    def get(self, learner_id: str, lesson_slug: str) -> Optional[models.LessonProgress]:
        """Return the progress row for a learner/lesson pair or `None`."""
        stmt = select(models.LessonProgress).where(
            models.LessonProgress.learner_id == learner_id,
            models.LessonProgress.lesson_slug == lesson_slug
        )
        return self.session.exec(stmt).first()

    def save(self, progress: models.LessonProgress) -> models.LessonProgress:
        """Persist a new or modified row and return the managed instance."""
        self.session.add(progress)
        self.session.commit()
        self.session.refresh(progress)
        return progress

    def list_for_learner(self, learner_id: str) -> List[models.LessonProgress]:
        """Return all rows for `learner_id`, most recently updated first."""
        stmt = select(models.LessonProgress).where(
            models.LessonProgress.learner_id == learner_id
        ).order_by(models.LessonProgress.updated_at.desc())
        return self.session.exec(stmt).all()
