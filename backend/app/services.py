"""Business logic services used by HTTP controllers.

Services are intentionally thin: they validate input, consult the lesson
registry and persist progress via repositories.
"""

from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Session
from . import models, repositories
from .config import settings
from .registry import LessonRegistry, get_registry
from .schemas import LessonContent, TopicDetailOut, TopicOut, Topic


class LessonService:
    """Read-only views over the lesson registry for the API."""
    def __init__(self, registry: Optional[LessonRegistry] = None):
        self.registry = registry or get_registry()

    def get_lesson(self, slug: str) -> Optional[LessonContent]:
        return self.registry.get_lesson_content(slug)

    def list_topics(self):
        """Return topic metadata in merge order."""
        return [self._topic_out(t) for t in self.registry.topics()]

    def get_topic(self, name: str) -> Optional[TopicDetailOut]:
        topic = self.registry.get_topic(name)
        if topic is None:
            return None
        return TopicDetailOut(**self._topic_out(topic).model_dump(), slugs=list(topic.lessons))

    @staticmethod
    def _topic_out(topic: Topic) -> TopicOut:
        return TopicOut(
            topic=topic.topic,
            title=topic.title,
            phase=topic.phase,
            order=topic.order,
            lesson_count=len(topic.lessons),
        )


class ProgressService:
    """Save learner code, mark lessons complete and summarise progress."""
    def __init__(self, session: Session, registry: Optional[LessonRegistry] = None):
        self.session = session
        self.registry = registry or get_registry()
        self.repo = repositories.ProgressRepository(session)

    def save_code(self, learner_id: str, lesson_slug: str, code: str) -> models.LessonProgress:
        """Store the learner's current code for a lesson.

        A new row starts `in_progress`; a completed lesson stays completed.
        """
        self._validate(learner_id, lesson_slug)
        if len(code.encode('utf-8')) > settings.MAX_SAVED_CODE_BYTES:
            raise ValueError('saved code too large')
        progress = self.repo.get(learner_id, lesson_slug)
        if progress is None:
            progress = models.LessonProgress(learner_id=learner_id, lesson_slug=lesson_slug)
        progress.saved_code = code
        progress.updated_at = datetime.now(timezone.utc)
        return self.repo.save(progress)

    def mark_complete(self, learner_id: str, lesson_slug: str) -> models.LessonProgress:
        """Mark a lesson completed; `completed_at` keeps the first completion time."""
        self._validate(learner_id, lesson_slug)
        now = datetime.now(timezone.utc)
        progress = self.repo.get(learner_id, lesson_slug)
        if progress is None:
            progress = models.LessonProgress(learner_id=learner_id, lesson_slug=lesson_slug)
        if progress.status != models.STATUS_COMPLETED:
            progress.status = models.STATUS_COMPLETED
            progress.completed_at = now
        progress.updated_at = now
        return self.repo.save(progress)

    def get_progress(self, learner_id: str):
        """Return a progress summary for `learner_id`.

        Only completions of currently registered lessons count towards
        `completed_lessons`; `total_lessons` is the registry size.
        """
        if not learner_id or not learner_id.strip():
            raise ValueError('learner_id required')
        rows = self.repo.list_for_learner(learner_id)
        completed = sum(
            1 for r in rows
            if r.status == models.STATUS_COMPLETED and self.registry.has_lesson(r.lesson_slug)
        )
        return {
            'learner_id': learner_id,
            'completed_lessons': completed,
            'total_lessons': self.registry.get_lesson_count(),
            'items': rows,
        }

    def _validate(self, learner_id: str, lesson_slug: str):
        if not learner_id or not learner_id.strip():
            raise ValueError('learner_id required')
        if not self.registry.has_lesson(lesson_slug):
            raise ValueError(f'lesson not found: {lesson_slug}')
